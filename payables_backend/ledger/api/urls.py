# ledger/api/urls.py

from django.urls import path

from ledger.api.views import (
    LedgerEntryDetailView,
    ManualEntryCreateView,
    VendorLedgerListView,
    VendorPaymentListCreateView,
    VendorReconciliationView,
    VendorStatsView,
)

urlpatterns = [
    # Per-vendor
    path(
        "vendors/<uuid:vendor_id>/stats/",
        VendorStatsView.as_view(),
        name="vendor-stats",
    ),
    path(
        "vendors/<uuid:vendor_id>/entries/",
        VendorLedgerListView.as_view(),
        name="vendor-ledger",
    ),
    path(
        "vendors/<uuid:vendor_id>/reconciliation/",
        VendorReconciliationView.as_view(),
        name="vendor-reconciliation",
    ),
    # Posting actions
    path(
        "vendors/<uuid:vendor_id>/adjustments/",
        ManualEntryCreateView.as_view(),
        name="vendor-adjustments",
    ),
    path("payments/", VendorPaymentListCreateView.as_view(), name="vendor-payments"),
    # Entries
    path("entries/<uuid:entry_id>/", LedgerEntryDetailView.as_view(), name="ledger-entry-detail"),
]

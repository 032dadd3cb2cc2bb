# ledger/api/views/__init__.py

from ledger.api.views.adjustments import ManualEntryCreateView
from ledger.api.views.entries import LedgerEntryDetailView, VendorLedgerListView
from ledger.api.views.payments import VendorPaymentListCreateView
from ledger.api.views.reconciliation import VendorReconciliationView
from ledger.api.views.stats import VendorStatsView

__all__ = [
    "ManualEntryCreateView",
    "LedgerEntryDetailView",
    "VendorLedgerListView",
    "VendorPaymentListCreateView",
    "VendorReconciliationView",
    "VendorStatsView",
]

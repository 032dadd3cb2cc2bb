# ledger/api/views/entries.py

"""
PATH: ledger/api/views/entries.py

VENDOR LEDGER (READ-ONLY / AUDIT SAFE)

- GET /api/ledger/vendors/<vendor_id>/entries/   paginated, newest first
      ?entry_type=<type>&date_from=YYYY-MM-DD&date_to=YYYY-MM-DD&page=&page_size=
- GET /api/ledger/entries/<entry_id>/            single entry
"""

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.exceptions import NotFound
from rest_framework.generics import ListAPIView, RetrieveAPIView
from rest_framework.permissions import IsAuthenticated

from ledger.api.filters import VendorLedgerEntryFilter
from ledger.api.pagination import LedgerPagination
from ledger.api.serializers import VendorLedgerEntrySerializer
from ledger.services.entry_store import get_entry, vendor_entries
from ledger.services.exceptions import LedgerEntryNotFound
from vendors.models import Vendor


@extend_schema(
    tags=["ledger"],
    parameters=[
        OpenApiParameter(
            name="entry_type",
            type=str,
            required=False,
            description="Only entries of this type (purchase, payment, ...).",
        ),
        OpenApiParameter(
            name="date_from",
            type=str,
            required=False,
            description="Inclusive start date on transaction_date (YYYY-MM-DD).",
        ),
        OpenApiParameter(
            name="date_to",
            type=str,
            required=False,
            description="Inclusive end date on transaction_date (YYYY-MM-DD).",
        ),
    ],
)
class VendorLedgerListView(ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = VendorLedgerEntrySerializer
    filterset_class = VendorLedgerEntryFilter
    pagination_class = LedgerPagination

    def get_queryset(self):
        vendor = get_object_or_404(Vendor, pk=self.kwargs["vendor_id"])
        return vendor_entries(vendor.pk).select_related("vendor")


@extend_schema(tags=["ledger"])
class LedgerEntryDetailView(RetrieveAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = VendorLedgerEntrySerializer

    def get_object(self):
        try:
            return get_entry(self.kwargs["entry_id"])
        except LedgerEntryNotFound as exc:
            raise NotFound(str(exc)) from exc

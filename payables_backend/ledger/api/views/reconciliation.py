# ledger/api/views/reconciliation.py

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ledger.services.reconciliation import verify_vendor
from vendors.models import Vendor


class VendorReconciliationView(APIView):
    """
    Replay a vendor's ledger and report continuity problems (never repairs).
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["ledger"])
    def get(self, request, vendor_id):
        vendor = get_object_or_404(Vendor, pk=vendor_id)
        return Response(verify_vendor(vendor).to_dict(), status=status.HTTP_200_OK)

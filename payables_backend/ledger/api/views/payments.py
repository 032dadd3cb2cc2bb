# ledger/api/views/payments.py

"""
PATH: ledger/api/views/payments.py

VENDOR PAYMENTS

- GET  /api/ledger/payments/   ?vendor=&status=&payment_method=&date_from=&date_to=
- POST /api/ledger/payments/   record a payment (atomic: payment + ledger + balance)

POST returns the PaymentResult payload:
- 201 {"success": true, "payment_id", "payment_no", "ledger_id", "balance_before", "balance_after"}
- 404 {"success": false, "error": "Vendor not found", "code": "vendor_not_found"}
- 400 {"success": false, "error", "code"} for amount / method problems
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ledger.api.filters import VendorPaymentFilter
from ledger.api.pagination import LedgerPagination
from ledger.api.serializers import (
    PaymentResultSerializer,
    VendorPaymentCreateSerializer,
    VendorPaymentSerializer,
)
from ledger.api.views._responses import failure_status
from ledger.permissions import CanPostLedger
from ledger.services.payment_service import list_payments, record_payment


class VendorPaymentListCreateView(ListAPIView):
    serializer_class = VendorPaymentSerializer
    filterset_class = VendorPaymentFilter
    pagination_class = LedgerPagination

    def get_permissions(self):
        if self.request.method == "POST":
            return [CanPostLedger()]
        return [IsAuthenticated()]

    def get_queryset(self):
        return list_payments()

    @extend_schema(tags=["ledger"])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["ledger"],
        request=VendorPaymentCreateSerializer,
        responses={201: PaymentResultSerializer, 400: PaymentResultSerializer, 404: PaymentResultSerializer},
    )
    def post(self, request):
        s = VendorPaymentCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        result = record_payment(
            vendor_id=data["vendor_id"],
            amount=data["amount"],
            payment_method=data["payment_method"],
            reference_number=data.get("reference_number"),
            notes=data.get("notes"),
            performed_by=request.user,
            payment_date=data.get("payment_date"),
        )

        if not result.success:
            return Response(result.to_dict(), status=failure_status(result.code))
        return Response(result.to_dict(), status=status.HTTP_201_CREATED)

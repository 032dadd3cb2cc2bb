# ledger/api/views/adjustments.py

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from ledger.api.serializers import ManualEntryCreateSerializer
from ledger.api.views._responses import failure_status
from ledger.permissions import CanPostLedger
from ledger.services.adjustment_service import post_manual_entry


class ManualEntryCreateView(GenericAPIView):
    """
    POST /api/ledger/vendors/<vendor_id>/adjustments/

    Debit/credit notes, signed adjustments and opening balances.
    """

    permission_classes = [CanPostLedger]
    serializer_class = ManualEntryCreateSerializer

    @extend_schema(tags=["ledger"], request=ManualEntryCreateSerializer)
    def post(self, request, vendor_id):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        result = post_manual_entry(
            vendor_id=vendor_id,
            entry_type=data["entry_type"],
            amount=data["amount"],
            description=data.get("description", ""),
            reference_no=data.get("reference_no", ""),
            performed_by=request.user,
            transaction_date=data.get("transaction_date"),
        )

        if not result.success:
            return Response(result.to_dict(), status=failure_status(result.code))
        return Response(result.to_dict(), status=status.HTTP_201_CREATED)

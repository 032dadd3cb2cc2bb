# ledger/api/serializers/adjustments.py

from rest_framework import serializers

from ledger.services.adjustment_service import MANUAL_ENTRY_TYPES


class ManualEntryCreateSerializer(serializers.Serializer):
    entry_type = serializers.ChoiceField(choices=MANUAL_ENTRY_TYPES)
    amount = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        help_text="Positive for debit/credit notes; signed for adjustment and opening_balance",
    )
    description = serializers.CharField(required=False, allow_blank=True)
    reference_no = serializers.CharField(required=False, allow_blank=True, max_length=64)
    transaction_date = serializers.DateTimeField(required=False)

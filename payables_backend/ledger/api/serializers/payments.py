# ledger/api/serializers/payments.py

from rest_framework import serializers

from ledger.models import PaymentMethod, VendorPayment


class VendorPaymentSerializer(serializers.ModelSerializer):
    vendor_name = serializers.CharField(source="vendor.name", read_only=True)

    class Meta:
        model = VendorPayment
        fields = [
            "id",
            "vendor",
            "vendor_name",
            "payment_no",
            "amount",
            "payment_method",
            "reference_number",
            "notes",
            "balance_before",
            "balance_after",
            "payment_date",
            "status",
            "created_by",
            "approved_by",
            "created_at",
        ]
        read_only_fields = fields


class VendorPaymentCreateSerializer(serializers.Serializer):
    vendor_id = serializers.UUIDField()
    # Sign is validated by the service so the caller gets a structured error.
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    reference_number = serializers.CharField(required=False, allow_blank=True, max_length=100)
    notes = serializers.CharField(required=False, allow_blank=True)
    payment_date = serializers.DateField(required=False)


class PaymentResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    payment_id = serializers.UUIDField(required=False)
    payment_no = serializers.CharField(required=False)
    ledger_id = serializers.UUIDField(required=False)
    balance_before = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    balance_after = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    error = serializers.CharField(required=False)
    code = serializers.CharField(required=False)

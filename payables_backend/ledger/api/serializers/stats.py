# ledger/api/serializers/stats.py

from rest_framework import serializers


class VendorStatsSerializer(serializers.Serializer):
    vendor_id = serializers.UUIDField()
    vendor_name = serializers.CharField()
    is_active = serializers.BooleanField()

    total_purchases = serializers.DecimalField(max_digits=14, decimal_places=2)
    purchase_count = serializers.IntegerField()
    last_purchase_date = serializers.DateField(allow_null=True)

    total_returns = serializers.DecimalField(max_digits=14, decimal_places=2)
    return_count = serializers.IntegerField()

    total_payments = serializers.DecimalField(max_digits=14, decimal_places=2)
    payment_count = serializers.IntegerField()
    last_payment_date = serializers.DateField(allow_null=True)

    current_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    calculated_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    balance_matches = serializers.BooleanField()
    last_activity_date = serializers.DateField(allow_null=True)

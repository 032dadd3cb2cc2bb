# ledger/api/serializers/entries.py

from rest_framework import serializers

from ledger.models import VendorLedgerEntry


class VendorLedgerEntrySerializer(serializers.ModelSerializer):
    vendor_name = serializers.CharField(source="vendor.name", read_only=True)
    entry_type_display = serializers.CharField(source="get_entry_type_display", read_only=True)
    performed_by_username = serializers.SerializerMethodField()

    class Meta:
        model = VendorLedgerEntry
        fields = [
            "id",
            "vendor",
            "vendor_name",
            "sequence",
            "entry_type",
            "entry_type_display",
            "reference_id",
            "reference_no",
            "debit",
            "credit",
            "running_balance",
            "description",
            "notes",
            "performed_by",
            "performed_by_username",
            "transaction_date",
            "created_at",
        ]
        read_only_fields = fields

    def get_performed_by_username(self, obj):
        user = getattr(obj, "performed_by", None)
        return user.get_username() if user else None

# ledger/admin.py

from django.contrib import admin

from ledger.models import PaymentSequence, VendorLedgerEntry, VendorPayment


class ReadOnlyAdmin(admin.ModelAdmin):
    """Money rows are written by services only."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# VENDOR LEDGER ENTRY (STRICTLY IMMUTABLE)
# ============================================================


@admin.register(VendorLedgerEntry)
class VendorLedgerEntryAdmin(ReadOnlyAdmin):
    list_display = (
        "vendor",
        "sequence",
        "entry_type",
        "reference_no",
        "debit",
        "credit",
        "running_balance",
        "transaction_date",
    )
    list_filter = ("entry_type", "transaction_date")
    search_fields = ("reference_no", "description", "vendor__name", "vendor__company_name")
    ordering = ("vendor", "-sequence")
    list_select_related = ("vendor",)

    readonly_fields = (
        "vendor",
        "sequence",
        "entry_type",
        "reference_id",
        "reference_no",
        "debit",
        "credit",
        "running_balance",
        "description",
        "notes",
        "performed_by",
        "transaction_date",
        "created_at",
    )


# ============================================================
# VENDOR PAYMENT (READ-ONLY)
# ============================================================


@admin.register(VendorPayment)
class VendorPaymentAdmin(ReadOnlyAdmin):
    list_display = (
        "payment_no",
        "vendor",
        "amount",
        "payment_method",
        "status",
        "payment_date",
    )
    list_filter = ("status", "payment_method", "payment_date")
    search_fields = ("payment_no", "reference_number", "vendor__name")
    ordering = ("-payment_date", "-created_at")
    list_select_related = ("vendor",)

    readonly_fields = (
        "vendor",
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
        "updated_at",
    )


@admin.register(PaymentSequence)
class PaymentSequenceAdmin(ReadOnlyAdmin):
    list_display = ("year", "last_value", "updated_at")
    ordering = ("-year",)

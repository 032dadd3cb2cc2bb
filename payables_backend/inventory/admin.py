# inventory/admin.py

from django.contrib import admin

from inventory.models import InventoryTransaction


@admin.register(InventoryTransaction)
class InventoryTransactionAdmin(admin.ModelAdmin):
    list_display = (
        "invoice_no",
        "transaction_type",
        "vendor",
        "status",
        "total_cost",
        "transaction_date",
    )
    list_filter = ("transaction_type", "status")
    search_fields = ("invoice_no", "vendor__name", "vendor__company_name")
    readonly_fields = (
        "approved_by",
        "approved_at",
        "voided_by",
        "voided_at",
        "created_at",
        "updated_at",
    )
    ordering = ("-transaction_date",)
    autocomplete_fields = ("vendor",)

    def has_delete_permission(self, request, obj=None):
        # Approved documents have ledger entries pointing at them.
        return False

# vendors/admin.py

from django.contrib import admin

from vendors.models import Vendor


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "company_name",
        "phone",
        "balance",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active",)
    search_fields = ("name", "company_name", "phone", "email")
    readonly_fields = ("balance", "created_at", "updated_at")
    ordering = ("name",)

    fieldsets = (
        (
            "Vendor Identity",
            {
                "fields": ("name", "company_name", "phone", "email", "address"),
            },
        ),
        (
            "Payables",
            {
                "fields": ("balance", "is_active"),
            },
        ),
        (
            "System Fields",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )

    def has_delete_permission(self, request, obj=None):
        # Vendors with ledger history are PROTECTed anyway; deactivate instead.
        return False

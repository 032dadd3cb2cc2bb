# inventory/apps.py

"""
INVENTORY APP CONFIG

Minimal inventory-transaction feed:
- purchase / purchase_return / damage / adjustment rows
- status lifecycle (pending -> approved | rejected, approved -> voided)
- emits explicit signals on status transitions (see inventory/signals.py)
"""

from django.apps import AppConfig


class InventoryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "inventory"
    verbose_name = "Inventory Transactions"

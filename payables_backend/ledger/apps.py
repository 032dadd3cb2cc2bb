# ledger/apps.py

"""
LEDGER APP CONFIG

Vendor payables subledger:
- immutable debit/credit entries with running balances
- payments, payment numbering
- entries derived from inventory approvals/voids

ready() wires the inventory transition signals to the ledger receivers.
"""

from django.apps import AppConfig


class LedgerConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ledger"
    verbose_name = "Vendor Ledger"

    def ready(self):
        from ledger.receivers import connect_inventory_receivers

        connect_inventory_receivers()

# vendors/apps.py

"""
VENDORS APP CONFIG

Vendor master data the payables ledger hangs off:
- identity + contact fields
- cached outstanding balance (written only by the ledger balance guard)
"""

from django.apps import AppConfig


class VendorsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vendors"
    verbose_name = "Vendors"

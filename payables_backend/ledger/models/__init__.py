# ledger/models/__init__.py

"""
LEDGER MODELS PACKAGE EXPORTS

Note:
- Keep this file *imports-only* (no business logic).
- Do NOT import services from models anywhere (models must stay pure).
"""

from ledger.models.entry import LedgerEntryType, VendorLedgerEntry
from ledger.models.payment import PaymentMethod, PaymentStatus, VendorPayment
from ledger.models.sequence import PaymentSequence

__all__ = [
    "LedgerEntryType",
    "VendorLedgerEntry",
    "PaymentMethod",
    "PaymentStatus",
    "VendorPayment",
    "PaymentSequence",
]

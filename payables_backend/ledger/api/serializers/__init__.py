# ledger/api/serializers/__init__.py

from ledger.api.serializers.adjustments import ManualEntryCreateSerializer
from ledger.api.serializers.entries import VendorLedgerEntrySerializer
from ledger.api.serializers.payments import (
    PaymentResultSerializer,
    VendorPaymentCreateSerializer,
    VendorPaymentSerializer,
)
from ledger.api.serializers.stats import VendorStatsSerializer

__all__ = [
    "VendorLedgerEntrySerializer",
    "VendorPaymentSerializer",
    "VendorPaymentCreateSerializer",
    "PaymentResultSerializer",
    "ManualEntryCreateSerializer",
    "VendorStatsSerializer",
]

# ledger/services/adjustment_service.py

"""
======================================================
PATH: ledger/services/adjustment_service.py
======================================================
MANUAL LEDGER POSTINGS

Operator-entered entries, all routed through the balance guard:
- debit_note       amount > 0 -> debit  (we owe more)
- credit_note      amount > 0 -> credit (we owe less)
- adjustment       signed amount, + -> debit, - -> credit, 0 rejected
- opening_balance  signed amount, only on a vendor with no entries yet

Purchase, return, payment and void entries are never posted by hand;
they come from their own workflows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.utils import timezone

from ledger.models import LedgerEntryType, VendorLedgerEntry
from ledger.services.balance_guard import with_vendor_lock
from ledger.services.exceptions import (
    InvalidAmount,
    InvalidEntryType,
    LedgerServiceError,
    OpeningBalanceExists,
    VendorNotFound,
)
from ledger.services.money import ZERO, to_money

logger = logging.getLogger("ledger.adjustments")

MANUAL_ENTRY_TYPES = (
    LedgerEntryType.DEBIT_NOTE.value,
    LedgerEntryType.CREDIT_NOTE.value,
    LedgerEntryType.ADJUSTMENT.value,
    LedgerEntryType.OPENING_BALANCE.value,
)


@dataclass(frozen=True)
class PostingResult:
    success: bool
    ledger_id: str | None = None
    entry_type: str | None = None
    balance_before: Decimal | None = None
    balance_after: Decimal | None = None
    error: str | None = None
    code: str | None = None

    @classmethod
    def failure(cls, exc: LedgerServiceError) -> "PostingResult":
        return cls(success=False, error=str(exc), code=exc.code)

    def to_dict(self) -> dict:
        if not self.success:
            return {"success": False, "error": self.error, "code": self.code}
        return {
            "success": True,
            "ledger_id": self.ledger_id,
            "entry_type": self.entry_type,
            "balance_before": str(self.balance_before),
            "balance_after": str(self.balance_after),
        }


def _split(entry_type: str, amount: Decimal) -> tuple[Decimal, Decimal]:
    """Return (debit, credit) for a manual entry."""
    if entry_type in (LedgerEntryType.DEBIT_NOTE, LedgerEntryType.CREDIT_NOTE):
        if amount <= ZERO:
            raise InvalidAmount("Amount must be positive")
        if entry_type == LedgerEntryType.DEBIT_NOTE:
            return amount, ZERO
        return ZERO, amount

    if entry_type == LedgerEntryType.ADJUSTMENT and amount == ZERO:
        raise InvalidAmount("Adjustment amount cannot be zero")

    if amount >= ZERO:
        return amount, ZERO
    return ZERO, -amount


def post_manual_entry(
    *,
    vendor_id,
    entry_type: str,
    amount,
    description: str = "",
    reference_no: str = "",
    performed_by=None,
    transaction_date=None,
) -> PostingResult:
    entry_type = (str(entry_type or "")).strip().lower()

    try:
        if entry_type not in MANUAL_ENTRY_TYPES:
            raise InvalidEntryType(
                f"{entry_type!r} cannot be posted manually. Use one of: {', '.join(MANUAL_ENTRY_TYPES)}"
            )
        debit, credit = _split(entry_type, to_money(amount))
    except (InvalidEntryType, InvalidAmount) as exc:
        return PostingResult.failure(exc)

    label = LedgerEntryType(entry_type).label
    captured = {}

    def _write(vendor, balance):
        if entry_type == LedgerEntryType.OPENING_BALANCE and vendor.ledger_entries.exists():
            raise OpeningBalanceExists("Opening balance can only be posted before any other entry")

        captured["balance_before"] = balance
        entry = VendorLedgerEntry(
            entry_type=entry_type,
            reference_no=(reference_no or "").strip(),
            debit=debit,
            credit=credit,
            description=(description or "").strip() or label,
            performed_by=performed_by,
            transaction_date=transaction_date or timezone.now(),
        )
        return balance + debit - credit, entry

    try:
        entry = with_vendor_lock(vendor_id, _write)
    except (VendorNotFound, OpeningBalanceExists, InvalidAmount) as exc:
        return PostingResult.failure(exc)

    logger.info(
        "Manual ledger entry posted",
        extra={
            "vendor_id": str(vendor_id),
            "entry_type": entry_type,
            "entry_id": str(entry.id),
            "debit": str(entry.debit),
            "credit": str(entry.credit),
        },
    )

    return PostingResult(
        success=True,
        ledger_id=str(entry.id),
        entry_type=entry_type,
        balance_before=captured["balance_before"],
        balance_after=entry.running_balance,
    )

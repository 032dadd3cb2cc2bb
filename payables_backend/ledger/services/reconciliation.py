# ledger/services/reconciliation.py

"""
======================================================
PATH: ledger/services/reconciliation.py
======================================================
LEDGER CONTINUITY CHECK (read-only)

Replays each vendor's entries in insertion order (sequence) from 0.00 and
reports:
- entries whose stored running_balance differs from the replay
- entries carrying both a debit and a credit (or negative amounts)
- sequence gaps
- cached Vendor.balance != final replayed balance

Never repairs anything. `verify_vendor_ledger --strict` turns problems into
a non-zero exit for CI / cron.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from ledger.models import VendorLedgerEntry
from ledger.services.money import ZERO
from vendors.models import Vendor


@dataclass
class ContinuityReport:
    vendor_id: str
    vendor_name: str
    entry_count: int = 0
    replayed_balance: Decimal = ZERO
    cached_balance: Decimal = ZERO
    problems: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems

    def to_dict(self) -> dict:
        return {
            "vendor_id": self.vendor_id,
            "vendor_name": self.vendor_name,
            "entry_count": self.entry_count,
            "replayed_balance": str(self.replayed_balance),
            "cached_balance": str(self.cached_balance),
            "ok": self.ok,
            "problems": list(self.problems),
        }


def verify_vendor(vendor: Vendor) -> ContinuityReport:
    report = ContinuityReport(
        vendor_id=str(vendor.pk),
        vendor_name=str(vendor),
        cached_balance=vendor.balance,
    )

    balance = ZERO
    expected_sequence = 1
    entries = VendorLedgerEntry.objects.filter(vendor_id=vendor.pk).order_by("sequence").only(
        "id", "sequence", "debit", "credit", "running_balance"
    )

    for entry in entries.iterator():
        report.entry_count += 1

        if entry.sequence != expected_sequence:
            report.problems.append(
                f"sequence gap: expected {expected_sequence}, found {entry.sequence} (entry {entry.id})"
            )
        expected_sequence = entry.sequence + 1

        if entry.debit < ZERO or entry.credit < ZERO:
            report.problems.append(f"negative amount on entry {entry.id}")
        if entry.debit > ZERO and entry.credit > ZERO:
            report.problems.append(f"both debit and credit set on entry {entry.id}")

        balance = balance + entry.debit - entry.credit
        if entry.running_balance != balance:
            report.problems.append(
                f"running balance mismatch at sequence {entry.sequence}: "
                f"stored {entry.running_balance}, replayed {balance}"
            )
            # Continue from the stored value so one bad row is reported once.
            balance = entry.running_balance

    report.replayed_balance = balance
    if vendor.balance != balance:
        report.problems.append(
            f"cached balance {vendor.balance} != ledger balance {balance}"
        )
    return report


def verify_all(*, vendor_id=None) -> list[ContinuityReport]:
    qs = Vendor.objects.all().order_by("name")
    if vendor_id:
        qs = qs.filter(pk=vendor_id)
    return [verify_vendor(vendor) for vendor in qs]

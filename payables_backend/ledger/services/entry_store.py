# ledger/services/entry_store.py

"""
======================================================
PATH: ledger/services/entry_store.py
======================================================
LEDGER ENTRY STORE

Append-only access to VendorLedgerEntry; the single source of truth for a
vendor's balance.

Rules enforced on append:
- vendor must exist (UnknownVendor)
- debit/credit non-negative and never both positive (InvariantViolation)
- running_balance == previous running_balance + debit - credit, where
  "previous" is the vendor's entry with the highest sequence (0 if none)
- sequence is assigned here (previous + 1); the (vendor, sequence) unique
  constraint rejects a second writer that computed from the same stale read

append_entry() does not lock. Balance-affecting callers go through
ledger.services.balance_guard.with_vendor_lock(), which does.
There is no update or delete API.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from ledger.models import VendorLedgerEntry
from ledger.services.exceptions import (
    InvariantViolation,
    LedgerEntryNotFound,
    UnknownVendor,
)
from ledger.services.money import ZERO
from vendors.models import Vendor


def _latest(vendor_id):
    return (
        VendorLedgerEntry.objects.filter(vendor_id=vendor_id)
        .order_by("-sequence")
        .only("sequence", "running_balance")
        .first()
    )


def running_balance(vendor_id) -> Decimal:
    """
    Running balance of the vendor's most recent entry, or 0.00 with no history.
    """
    latest = _latest(vendor_id)
    return latest.running_balance if latest is not None else ZERO


def append_entry(entry: VendorLedgerEntry) -> VendorLedgerEntry:
    """
    Validate and persist a new entry. Returns the saved entry.
    """
    try:
        vendor_exists = bool(entry.vendor_id) and Vendor.objects.filter(pk=entry.vendor_id).exists()
    except (ValidationError, ValueError):
        vendor_exists = False
    if not vendor_exists:
        raise UnknownVendor(f"Vendor not found: {entry.vendor_id}")

    debit = entry.debit if entry.debit is not None else ZERO
    credit = entry.credit if entry.credit is not None else ZERO

    if debit < ZERO or credit < ZERO:
        raise InvariantViolation("Ledger debit/credit cannot be negative")
    if debit > ZERO and credit > ZERO:
        raise InvariantViolation("Ledger entry cannot carry both a debit and a credit")

    if entry.running_balance is None:
        raise InvariantViolation("running_balance is required")

    latest = _latest(entry.vendor_id)
    previous_balance = latest.running_balance if latest is not None else ZERO
    expected = previous_balance + debit - credit

    if Decimal(entry.running_balance) != expected:
        raise InvariantViolation(
            f"Running balance discontinuity for vendor {entry.vendor_id}: "
            f"previous={previous_balance} debit={debit} credit={credit} "
            f"expected={expected} got={entry.running_balance}"
        )

    entry.debit = debit
    entry.credit = credit
    entry.sequence = (latest.sequence + 1) if latest is not None else 1

    try:
        with transaction.atomic():
            entry.save()
    except ValidationError as exc:
        raise InvariantViolation("; ".join(exc.messages)) from exc
    except IntegrityError as exc:
        raise InvariantViolation(f"Ledger entry rejected by the database: {exc}") from exc

    return entry


def get_entry(entry_id) -> VendorLedgerEntry:
    try:
        return VendorLedgerEntry.objects.select_related("vendor", "performed_by").get(pk=entry_id)
    except (VendorLedgerEntry.DoesNotExist, ValidationError, ValueError) as exc:
        raise LedgerEntryNotFound("Ledger entry not found") from exc


def find_by_reference(reference_id, entry_type) -> VendorLedgerEntry | None:
    """
    Idempotency lookup on (reference_id, entry_type).
    """
    return VendorLedgerEntry.objects.filter(
        reference_id=reference_id, entry_type=entry_type
    ).first()


def vendor_entries(vendor_id, *, entry_type=None, date_from=None, date_to=None):
    """
    Entries for one vendor, newest first (by insertion order).

    date_from/date_to are inclusive calendar dates on transaction_date.
    """
    qs = VendorLedgerEntry.objects.filter(vendor_id=vendor_id).select_related("performed_by")

    if entry_type:
        qs = qs.filter(entry_type=entry_type)
    if date_from:
        qs = qs.filter(transaction_date__date__gte=date_from)
    if date_to:
        qs = qs.filter(transaction_date__date__lte=date_to)

    return qs.order_by("-sequence")

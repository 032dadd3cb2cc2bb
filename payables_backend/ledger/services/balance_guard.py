# ledger/services/balance_guard.py

"""
======================================================
PATH: ledger/services/balance_guard.py
======================================================
BALANCE GUARD

The single synchronization point for anything that moves a vendor balance.

with_vendor_lock(vendor_id, fn):
1) open (or join) an atomic block
2) SELECT ... FOR UPDATE the vendor row; concurrent writers for the same
   vendor queue here until the outermost transaction commits
3) call fn(vendor, balance) with the cached balance read under the lock
4) fn returns None (nothing to write) or (new_balance, unsaved entry)
5) verify cached balance == entry store running balance
6) verify new_balance == balance + debit - credit
7) append the entry, then write the cached balance

Any failure in 5-7 (or inside fn) rolls back the whole unit, including
rows fn created. Different vendors never contend.

The lock lives in the database rather than the process, so it holds across
workers and nests safely inside a caller's transaction.atomic().
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from ledger.models import VendorLedgerEntry
from ledger.services import entry_store
from ledger.services.exceptions import InvariantViolation, VendorNotFound
from ledger.services.money import to_money
from vendors.models import Vendor

logger = logging.getLogger("ledger.guard")

GuardedWrite = tuple[Decimal, VendorLedgerEntry]


def lock_vendor(vendor_id) -> Vendor:
    """
    Lock and return the vendor row. Must be called inside transaction.atomic().
    """
    try:
        return Vendor.objects.select_for_update().get(pk=vendor_id)
    except (Vendor.DoesNotExist, ValidationError, ValueError) as exc:
        raise VendorNotFound("Vendor not found") from exc


def with_vendor_lock(
    vendor_id,
    fn: Callable[[Vendor, Decimal], GuardedWrite | None],
) -> VendorLedgerEntry | None:
    """
    Run fn under the vendor's exclusive lock and persist its entry + balance
    as one atomic unit. Returns the appended entry, or None if fn wrote nothing.
    """
    with transaction.atomic():
        vendor = lock_vendor(vendor_id)
        balance = vendor.balance

        outcome = fn(vendor, balance)
        if outcome is None:
            return None

        new_balance, entry = outcome
        new_balance = to_money(new_balance)

        stored = entry_store.running_balance(vendor.pk)
        if stored != balance:
            logger.critical(
                "Cached vendor balance diverged from ledger",
                extra={
                    "vendor_id": str(vendor.pk),
                    "cached_balance": str(balance),
                    "ledger_balance": str(stored),
                },
            )
            raise InvariantViolation(
                f"Vendor {vendor.pk} cached balance {balance} != ledger running balance {stored}"
            )

        expected = balance + (entry.debit or 0) - (entry.credit or 0)
        if new_balance != expected:
            raise InvariantViolation(
                f"Computed balance {new_balance} does not match {balance} + "
                f"{entry.debit} - {entry.credit} = {expected}"
            )

        entry.vendor = vendor
        entry.running_balance = new_balance
        entry_store.append_entry(entry)

        Vendor.objects.filter(pk=vendor.pk).update(
            balance=new_balance,
            updated_at=timezone.now(),
        )
        vendor.balance = new_balance

        logger.debug(
            "Vendor balance moved",
            extra={
                "vendor_id": str(vendor.pk),
                "entry_id": str(entry.pk),
                "entry_type": entry.entry_type,
                "balance_before": str(balance),
                "balance_after": str(new_balance),
            },
        )
        return entry

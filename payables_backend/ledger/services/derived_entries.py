# ledger/services/derived_entries.py

"""
======================================================
PATH: ledger/services/derived_entries.py
======================================================
EVENT-DERIVED LEDGER ENTRIES

Inventory transaction -> vendor ledger entry.

Approval (status becomes `approved`):
    purchase         -> `purchase`        debit  = |total_cost|
    purchase_return  -> `purchase_return` credit = |total_cost|
    anything else    -> no entry

Void (approved -> voided):
    purchase entry        -> `void_purchase` credit = original debit
    purchase_return entry -> `void_return`   debit  = original credit

No-ops (no write, no error): no vendor, wrong status, unsupported type,
zero amount, nothing to void.

Idempotency rule:
- Entries are keyed by (inventory transaction id, entry_type). The key is
  checked under the vendor lock and backed by a unique constraint, so a
  redelivered or replayed event returns the existing entry untouched.
"""

from __future__ import annotations

import logging

from django.utils import timezone

from inventory.models import InventoryTransaction
from ledger.models import LedgerEntryType, VendorLedgerEntry
from ledger.services.balance_guard import with_vendor_lock
from ledger.services.entry_store import find_by_reference
from ledger.services.money import ZERO, to_money

logger = logging.getLogger("ledger.derived")

TxnType = InventoryTransaction.TransactionType
TxnStatus = InventoryTransaction.Status

# transaction_type -> (entry_type, side, description label)
DERIVATION_RULES = {
    TxnType.PURCHASE.value: (LedgerEntryType.PURCHASE, "debit", "Purchase"),
    TxnType.PURCHASE_RETURN.value: (LedgerEntryType.PURCHASE_RETURN, "credit", "Purchase Return"),
}

VOID_RULES = {
    LedgerEntryType.PURCHASE.value: LedgerEntryType.VOID_PURCHASE,
    LedgerEntryType.PURCHASE_RETURN.value: LedgerEntryType.VOID_RETURN,
}


def _keyed_write(txn, vendor_id, entry_type, build):
    """
    Append build(balance) under vendor_id's lock unless (txn.id, entry_type)
    already exists. Returns (entry, created).
    """
    found = {}

    def _write(vendor, balance):
        existing = find_by_reference(txn.id, entry_type)
        if existing is not None:
            found["entry"] = existing
            return None
        return build(balance)

    entry = with_vendor_lock(vendor_id, _write)
    if entry is None:
        return found.get("entry"), False
    return entry, True


def on_inventory_transaction_approved(txn: InventoryTransaction) -> VendorLedgerEntry | None:
    """
    Derive the purchase / purchase_return entry for an approved transaction.
    """
    if not txn.vendor_id or txn.status != TxnStatus.APPROVED:
        return None

    rule = DERIVATION_RULES.get(str(txn.transaction_type))
    if rule is None:
        return None

    entry_type, side, label = rule
    amount = abs(to_money(txn.total_cost))
    if amount == ZERO:
        return None

    debit = amount if side == "debit" else ZERO
    credit = amount if side == "credit" else ZERO

    def _build(balance):
        entry = VendorLedgerEntry(
            entry_type=entry_type,
            reference_id=txn.id,
            reference_no=txn.invoice_no,
            debit=debit,
            credit=credit,
            description=f"{label}: {txn.invoice_no}",
            performed_by_id=txn.performed_by_id,
            transaction_date=txn.transaction_date or timezone.now(),
        )
        return balance + debit - credit, entry

    entry, created = _keyed_write(txn, txn.vendor_id, entry_type, _build)

    if created:
        logger.info(
            "Derived ledger entry from inventory approval",
            extra={
                "transaction_id": str(txn.id),
                "invoice_no": txn.invoice_no,
                "entry_type": entry_type,
                "entry_id": str(entry.id),
                "running_balance": str(entry.running_balance),
            },
        )
    else:
        logger.info(
            "Inventory approval already derived; skipping",
            extra={"transaction_id": str(txn.id), "entry_type": entry_type},
        )
    return entry


def on_inventory_transaction_voided(txn: InventoryTransaction) -> VendorLedgerEntry | None:
    """
    Offset the derived entry of a voided (previously approved) transaction,
    on the vendor ledger that holds the original entry.
    """
    if txn.status != TxnStatus.VOIDED:
        return None

    rule = DERIVATION_RULES.get(str(txn.transaction_type))
    if rule is None:
        return None

    original_type, _side, label = rule
    original = find_by_reference(txn.id, original_type)
    if original is None:
        return None

    void_type = VOID_RULES[str(original_type)]
    # Mirror image of the original entry.
    debit = original.credit
    credit = original.debit

    description = f"Void {label}: {txn.invoice_no}"
    if txn.void_reason:
        description = f"{description} ({txn.void_reason})"

    def _build(balance):
        entry = VendorLedgerEntry(
            entry_type=void_type,
            reference_id=txn.id,
            reference_no=txn.invoice_no,
            debit=debit,
            credit=credit,
            description=description,
            performed_by_id=txn.voided_by_id,
            transaction_date=txn.voided_at or timezone.now(),
        )
        return balance + debit - credit, entry

    # The offset belongs to whoever carries the original entry.
    entry, created = _keyed_write(txn, original.vendor_id, void_type, _build)

    if created:
        logger.info(
            "Voided derived ledger entry",
            extra={
                "transaction_id": str(txn.id),
                "invoice_no": txn.invoice_no,
                "entry_type": void_type,
                "entry_id": str(entry.id),
            },
        )
    return entry


def backfill_missing_entries(*, vendor_id=None, dry_run: bool = False) -> dict:
    """
    Derive entries for approved/voided transactions that never got them
    (e.g. approved while VENDOR_LEDGER_SYNC_ENABLED was off). Safe to rerun.

    Voided transactions with no original entry are skipped: their net
    effect on the vendor is zero.
    """
    qs = InventoryTransaction.objects.filter(
        vendor__isnull=False,
        transaction_type__in=list(DERIVATION_RULES),
        status__in=[TxnStatus.APPROVED, TxnStatus.VOIDED],
    )
    if vendor_id:
        qs = qs.filter(vendor_id=vendor_id)

    report = {"scanned": 0, "created": 0, "already_present": 0, "skipped": 0, "invoice_nos": []}

    for txn in qs.order_by("transaction_date", "created_at").iterator():
        report["scanned"] += 1
        entry_type = DERIVATION_RULES[str(txn.transaction_type)][0]
        original = find_by_reference(txn.id, entry_type)

        if txn.status == TxnStatus.APPROVED:
            if original is not None:
                report["already_present"] += 1
                continue
            if to_money(txn.total_cost) == ZERO:
                report["skipped"] += 1
                continue
            if not dry_run:
                on_inventory_transaction_approved(txn)
        else:
            if original is None:
                report["skipped"] += 1
                continue
            if find_by_reference(txn.id, VOID_RULES[str(entry_type)]) is not None:
                report["already_present"] += 1
                continue
            if not dry_run:
                on_inventory_transaction_voided(txn)

        report["created"] += 1
        report["invoice_nos"].append(txn.invoice_no)

    if report["created"] and not dry_run:
        logger.info(
            "Backfilled vendor ledger entries",
            extra={"created": report["created"], "vendor_id": str(vendor_id) if vendor_id else None},
        )
    return report

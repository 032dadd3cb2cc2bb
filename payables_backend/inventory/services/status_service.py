# inventory/services/status_service.py

"""
======================================================
PATH: inventory/services/status_service.py
======================================================
INVENTORY STATUS SERVICE

Operator actions on inventory transactions:
- approve (pending -> approved)
- reject  (pending -> rejected)
- void    (approved -> voided)

Each action locks the row, validates the move and saves. The model emits the
transition signal; ledger receivers run inside this same atomic block, so a
ledger failure leaves the transaction in its previous status.
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from inventory.models import InventoryTransaction

logger = logging.getLogger("inventory")


class InventoryTransitionError(ValueError):
    pass


def _lock(transaction_id) -> InventoryTransaction:
    try:
        return InventoryTransaction.objects.select_for_update().get(id=transaction_id)
    except (InventoryTransaction.DoesNotExist, ValidationError, ValueError) as exc:
        raise InventoryTransitionError("Inventory transaction not found") from exc


def _save(txn: InventoryTransaction) -> InventoryTransaction:
    try:
        txn.save()
    except ValidationError as exc:
        raise InventoryTransitionError("; ".join(exc.messages)) from exc
    return txn


@transaction.atomic
def approve_transaction(*, transaction_id, approved_by=None) -> InventoryTransaction:
    txn = _lock(transaction_id)

    # Idempotent: approving twice is a no-op.
    if txn.status == InventoryTransaction.Status.APPROVED:
        return txn

    if txn.status != InventoryTransaction.Status.PENDING:
        raise InventoryTransitionError(f"Only pending transactions can be approved (status={txn.status})")

    txn.status = InventoryTransaction.Status.APPROVED
    txn.approved_by = approved_by
    txn.approved_at = timezone.now()
    _save(txn)

    logger.info(
        "Inventory transaction approved",
        extra={
            "transaction_id": str(txn.id),
            "invoice_no": txn.invoice_no,
            "transaction_type": txn.transaction_type,
        },
    )
    return txn


@transaction.atomic
def reject_transaction(*, transaction_id, rejected_by=None, reason: str = "") -> InventoryTransaction:
    txn = _lock(transaction_id)

    if txn.status != InventoryTransaction.Status.PENDING:
        raise InventoryTransitionError(f"Only pending transactions can be rejected (status={txn.status})")

    txn.status = InventoryTransaction.Status.REJECTED
    if reason:
        txn.notes = f"{txn.notes}\nRejected: {reason}".strip()
    _save(txn)

    logger.info(
        "Inventory transaction rejected",
        extra={"transaction_id": str(txn.id), "rejected_by": getattr(rejected_by, "pk", None)},
    )
    return txn


@transaction.atomic
def void_transaction(*, transaction_id, reason: str, voided_by=None) -> InventoryTransaction:
    txn = _lock(transaction_id)

    if txn.status == InventoryTransaction.Status.VOIDED:
        return txn

    if txn.status != InventoryTransaction.Status.APPROVED:
        raise InventoryTransitionError(f"Only approved transactions can be voided (status={txn.status})")

    reason = (reason or "").strip()
    if not reason:
        raise InventoryTransitionError("A void reason is required")

    txn.status = InventoryTransaction.Status.VOIDED
    txn.voided_by = voided_by
    txn.voided_at = timezone.now()
    txn.void_reason = reason
    _save(txn)

    logger.info(
        "Inventory transaction voided",
        extra={"transaction_id": str(txn.id), "invoice_no": txn.invoice_no},
    )
    return txn

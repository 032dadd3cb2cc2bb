# ledger/receivers.py

"""
INVENTORY -> LEDGER RECEIVERS

Connected once in LedgerConfig.ready(). Receivers run synchronously inside the
inventory save's atomic block; an exception here rolls the status change back.

settings.VENDOR_LEDGER_SYNC_ENABLED = False turns the receivers into no-ops
(checked per call). Run `manage.py backfill_vendor_ledger` afterwards.
"""

from __future__ import annotations

import logging

from django.conf import settings

from inventory.models import InventoryTransaction
from inventory.signals import (
    inventory_transaction_approved,
    inventory_transaction_voided,
)
from ledger.services.derived_entries import (
    on_inventory_transaction_approved,
    on_inventory_transaction_voided,
)

logger = logging.getLogger("ledger.derived")


def _sync_enabled() -> bool:
    return bool(getattr(settings, "VENDOR_LEDGER_SYNC_ENABLED", True))


def handle_inventory_approved(sender, instance, **kwargs):
    if not _sync_enabled():
        logger.info(
            "Vendor ledger sync disabled; approval not derived",
            extra={"transaction_id": str(instance.pk)},
        )
        return
    on_inventory_transaction_approved(instance)


def handle_inventory_voided(sender, instance, **kwargs):
    if not _sync_enabled():
        logger.info(
            "Vendor ledger sync disabled; void not derived",
            extra={"transaction_id": str(instance.pk)},
        )
        return
    on_inventory_transaction_voided(instance)


def connect_inventory_receivers():
    inventory_transaction_approved.connect(
        handle_inventory_approved,
        sender=InventoryTransaction,
        dispatch_uid="ledger.handle_inventory_approved",
    )
    inventory_transaction_voided.connect(
        handle_inventory_voided,
        sender=InventoryTransaction,
        dispatch_uid="ledger.handle_inventory_voided",
    )

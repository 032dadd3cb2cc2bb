# inventory/models.py

"""
======================================================
PATH: inventory/models.py
======================================================
INVENTORY TRANSACTION MODEL

Upstream stock movement document (purchase, purchase return, damage, ...).

Guarantees:
- Only allowed status moves are persisted
  (pending -> approved | rejected, approved -> voided)
- The previous status is read from the database under a row lock, so two
  stale copies approving the same row fire the approval signal once
- Transition signals fire inside the save's atomic block
- vendor, transaction_type and total_cost are frozen once approved/voided
  (the vendor ledger entries were derived from them)
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.utils import timezone

from inventory.signals import (
    inventory_transaction_approved,
    inventory_transaction_voided,
)

User = settings.AUTH_USER_MODEL


class InventoryTransaction(models.Model):
    class TransactionType(models.TextChoices):
        PURCHASE = "purchase", "Purchase"
        PURCHASE_RETURN = "purchase_return", "Purchase Return"
        DAMAGE = "damage", "Damage"
        ADJUSTMENT = "adjustment", "Adjustment"

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"
        VOIDED = "voided", "Voided"

    # Keyed by raw values: statuses come back from the database as plain str.
    ALLOWED_TRANSITIONS = {
        "pending": {"approved", "rejected"},
        "approved": {"voided"},
        "rejected": set(),
        "voided": set(),
    }

    # Ledger-relevant fields are read-only once the persisted status is one of these.
    FROZEN_STATUSES = {"approved", "voided"}
    FROZEN_FIELDS = ("vendor_id", "transaction_type", "total_cost")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    transaction_type = models.CharField(max_length=20, choices=TransactionType.choices)
    invoice_no = models.CharField(max_length=64, unique=True)

    vendor = models.ForeignKey(
        "vendors.Vendor",
        on_delete=models.PROTECT,
        related_name="inventory_transactions",
        null=True,
        blank=True,
    )

    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING
    )

    # Signed: returns are frequently captured as negative totals upstream.
    total_cost = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    transaction_date = models.DateTimeField(default=timezone.now)

    performed_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="inventory_transactions_performed",
    )
    approved_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="inventory_transactions_approved",
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    voided_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="inventory_transactions_voided",
    )
    voided_at = models.DateTimeField(null=True, blank=True)
    void_reason = models.TextField(blank=True, default="")

    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-transaction_date", "-created_at"]
        indexes = [
            models.Index(fields=["vendor", "status"], name="inventory_i_vendor__3b9c1e_idx"),
            models.Index(fields=["transaction_type", "status"], name="inventory_i_transac_71d2aa_idx"),
            models.Index(fields=["transaction_date"], name="inventory_i_transac_c04f5b_idx"),
        ]

    def __str__(self):
        return f"{self.get_transaction_type_display()} {self.invoice_no} ({self.status})"

    def clean(self):
        self.invoice_no = (self.invoice_no or "").strip()
        if not self.invoice_no:
            raise ValidationError({"invoice_no": "invoice_no is required"})

        if self.status == self.Status.VOIDED and not (self.void_reason or "").strip():
            raise ValidationError({"void_reason": "void_reason is required when voiding"})

    def _check_transition(self, previous_status):
        current = str(self.status)
        if previous_status is None or previous_status == current:
            return
        allowed = self.ALLOWED_TRANSITIONS.get(previous_status, set())
        if current not in allowed:
            raise ValidationError(
                {"status": f"Cannot move inventory transaction from {previous_status} to {self.status}"}
            )

    def _check_frozen_fields(self, previous):
        # Approved/voided documents already have ledger entries built from these.
        if previous is None or previous["status"] not in self.FROZEN_STATUSES:
            return
        errors = {}
        for field in self.FROZEN_FIELDS:
            if previous[field] != getattr(self, field):
                name = field.removesuffix("_id")
                errors[name] = f"{name} cannot change once the transaction is {previous['status']}"
        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        self.full_clean()

        with transaction.atomic():
            previous = None
            if not self._state.adding:
                previous = (
                    InventoryTransaction.objects.select_for_update()
                    .filter(pk=self.pk)
                    .values("status", *self.FROZEN_FIELDS)
                    .first()
                )
            previous_status = previous["status"] if previous else None

            self._check_transition(previous_status)
            self._check_frozen_fields(previous)
            super().save(*args, **kwargs)

            if self.status == previous_status:
                return

            if self.status == self.Status.APPROVED:
                inventory_transaction_approved.send(
                    sender=self.__class__,
                    instance=self,
                    previous_status=previous_status,
                )
            elif self.status == self.Status.VOIDED and previous_status == self.Status.APPROVED:
                inventory_transaction_voided.send(
                    sender=self.__class__,
                    instance=self,
                    previous_status=previous_status,
                )

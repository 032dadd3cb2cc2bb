# ledger/models/entry.py

"""
======================================================
PATH: ledger/models/entry.py
======================================================
VENDOR LEDGER ENTRY MODEL

One signed movement on a vendor's payable balance.

Guarantees:
- Immutable once created (no updates, no deletes; queryset bulk
  update/delete are refused too). Corrections are new offsetting entries.
- Debit and credit are never both positive (model + database check)
- Per-vendor `sequence` is the insertion order; (vendor, sequence) is unique
- (reference_id, entry_type) is unique when reference_id is set; this is the
  idempotency key for payment and inventory-derived entries
- running_balance = previous running_balance + debit - credit
  (enforced by ledger.services.entry_store on append)

Sign convention: debit increases what the operator owes the vendor
(purchase), credit decreases it (payment, return).
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone

User = settings.AUTH_USER_MODEL

ZERO = Decimal("0.00")


class LedgerEntryType(models.TextChoices):
    PURCHASE = "purchase", "Purchase"
    PURCHASE_RETURN = "purchase_return", "Purchase Return"
    PAYMENT = "payment", "Payment"
    DEBIT_NOTE = "debit_note", "Debit Note"
    CREDIT_NOTE = "credit_note", "Credit Note"
    VOID_PURCHASE = "void_purchase", "Void Purchase"
    VOID_RETURN = "void_return", "Void Return"
    OPENING_BALANCE = "opening_balance", "Opening Balance"
    ADJUSTMENT = "adjustment", "Adjustment"


class VendorLedgerEntryQuerySet(models.QuerySet):
    def update(self, **kwargs):
        raise ValidationError("VendorLedgerEntry records are immutable and cannot be updated")

    def delete(self):
        raise ValidationError("VendorLedgerEntry records are immutable and cannot be deleted")


class VendorLedgerEntry(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    vendor = models.ForeignKey(
        "vendors.Vendor",
        on_delete=models.PROTECT,
        related_name="ledger_entries",
    )

    sequence = models.PositiveIntegerField(
        editable=False,
        help_text="Per-vendor insertion order (1-based)",
    )

    entry_type = models.CharField(max_length=20, choices=LedgerEntryType.choices)

    reference_id = models.UUIDField(
        null=True,
        blank=True,
        help_text="Originating payment or inventory transaction id",
    )
    reference_no = models.CharField(max_length=64, blank=True, default="")

    debit = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)
    credit = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)

    running_balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        help_text="Vendor balance immediately after this entry",
    )

    description = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    performed_by = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="vendor_ledger_entries",
    )

    transaction_date = models.DateTimeField(
        default=timezone.now,
        help_text="Business date of the movement (may be backdated)",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = VendorLedgerEntryQuerySet.as_manager()

    class Meta:
        verbose_name = "Vendor Ledger Entry"
        verbose_name_plural = "Vendor Ledger Entries"
        ordering = ["vendor", "sequence"]
        constraints = [
            models.CheckConstraint(
                condition=Q(debit__gte=ZERO) & Q(credit__gte=ZERO),
                name="vendor_ledger_amounts_nonnegative",
            ),
            models.CheckConstraint(
                condition=~(Q(debit__gt=ZERO) & Q(credit__gt=ZERO)),
                name="vendor_ledger_debit_xor_credit",
            ),
            models.UniqueConstraint(
                fields=["vendor", "sequence"],
                name="uniq_vendor_ledger_sequence",
            ),
            models.UniqueConstraint(
                fields=["reference_id", "entry_type"],
                condition=Q(reference_id__isnull=False),
                name="uniq_vendor_ledger_reference_type",
            ),
        ]
        indexes = [
            models.Index(fields=["vendor", "transaction_date"], name="ledger_vend_vendor__a41f0c_idx"),
            models.Index(fields=["vendor", "entry_type"], name="ledger_vend_vendor__5e2b77_idx"),
            models.Index(fields=["reference_id"], name="ledger_vend_referen_9d03e1_idx"),
            models.Index(fields=["created_at"], name="ledger_vend_created_1c7a52_idx"),
        ]

    def __str__(self):
        return f"{self.get_entry_type_display()} Dr {self.debit} Cr {self.credit} = {self.running_balance}"

    @property
    def amount(self) -> Decimal:
        """Signed effect on the vendor balance."""
        return (self.debit or ZERO) - (self.credit or ZERO)

    def clean(self):
        if self.entry_type not in LedgerEntryType.values:
            raise ValidationError({"entry_type": f"Unknown ledger entry type: {self.entry_type!r}"})

        if self.debit is None or self.credit is None:
            raise ValidationError("Debit and credit are required")

        if self.debit < ZERO or self.credit < ZERO:
            raise ValidationError("Debit and credit cannot be negative")

        if self.debit > ZERO and self.credit > ZERO:
            raise ValidationError("A ledger entry cannot carry both a debit and a credit")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("VendorLedgerEntry records are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("VendorLedgerEntry records are immutable and cannot be deleted")

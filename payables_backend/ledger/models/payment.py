# ledger/models/payment.py

"""
======================================================
PATH: ledger/models/payment.py
======================================================
VENDOR PAYMENT MODEL

Money paid out to a vendor.

Guarantees:
- amount > 0 (model validation + database check)
- payment_no is unique (PAY-<year>-<6 digit sequence>)
- a completed payment has exactly one ledger entry of type `payment`
  whose reference_id is this payment's id (written by the payment service)
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class PaymentMethod(models.TextChoices):
    CASH = "cash", "Cash"
    CHEQUE = "cheque", "Cheque"
    BANK_TRANSFER = "bank_transfer", "Bank Transfer"
    UPI = "upi", "UPI"
    NEFT = "neft", "NEFT"
    RTGS = "rtgs", "RTGS"
    IMPS = "imps", "IMPS"
    BANK = "bank", "Bank Deposit"
    ESEWA = "esewa", "eSewa"
    KHALTI = "khalti", "Khalti"
    IME_PAY = "ime_pay", "IME Pay"
    FONEPAY = "fonepay", "Fonepay"
    ONLINE = "online", "Online"
    OTHER = "other", "Other"


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"
    BOUNCED = "bounced", "Bounced"


class VendorPayment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    vendor = models.ForeignKey(
        "vendors.Vendor",
        on_delete=models.PROTECT,
        related_name="payments",
    )

    payment_no = models.CharField(max_length=32, unique=True)

    amount = models.DecimalField(max_digits=14, decimal_places=2)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)
    reference_number = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Cheque / transfer / wallet reference",
    )
    notes = models.TextField(blank=True, default="")

    balance_before = models.DecimalField(max_digits=14, decimal_places=2)
    balance_after = models.DecimalField(max_digits=14, decimal_places=2)

    payment_date = models.DateField(default=timezone.localdate)
    status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.COMPLETED,
    )

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="vendor_payments_created",
    )
    approved_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="vendor_payments_approved",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-payment_date", "-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=Decimal("0.00")),
                name="vendor_payment_amount_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["vendor", "payment_date"], name="ledger_vend_vendor__0b6d93_idx"),
            models.Index(fields=["status"], name="ledger_vend_status_e27c4f_idx"),
        ]

    def __str__(self):
        return f"{self.payment_no} {self.amount} ({self.payment_method})"

    def clean(self):
        if self.amount is None or self.amount <= Decimal("0.00"):
            raise ValidationError({"amount": "Payment amount must be > 0"})

        if not (self.payment_no or "").strip():
            raise ValidationError({"payment_no": "payment_no is required"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

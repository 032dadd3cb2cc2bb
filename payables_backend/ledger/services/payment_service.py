# ledger/services/payment_service.py

"""
======================================================
PATH: ledger/services/payment_service.py
======================================================
VENDOR PAYMENT RECORDER

record_payment() is one atomic unit:
1) validate amount (> 0) and payment method
2) lock vendor (balance guard), read balance B
3) allocate PAY-YYYY-NNNNNN
4) create VendorPayment (balance_before=B, balance_after=B-amount, completed)
5) append `payment` ledger entry (credit=amount, running_balance=B-amount)
6) write vendor balance B-amount

Caller-facing failures (unknown vendor, bad amount, bad method) come back as
PaymentResult(success=False, ...). InvariantViolation propagates: it means
the ledger is corrupt or the code is wrong, and nothing was written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from django.utils import timezone

from ledger.models import (
    LedgerEntryType,
    PaymentMethod,
    PaymentStatus,
    VendorLedgerEntry,
    VendorPayment,
)
from ledger.services.balance_guard import with_vendor_lock
from ledger.services.exceptions import (
    InvalidAmount,
    InvalidPaymentMethod,
    LedgerServiceError,
    VendorNotFound,
)
from ledger.services.money import ZERO, to_money
from ledger.services.payment_numbers import next_payment_number

logger = logging.getLogger("ledger.payments")


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    payment_id: str | None = None
    payment_no: str | None = None
    ledger_id: str | None = None
    balance_before: Decimal | None = None
    balance_after: Decimal | None = None
    error: str | None = None
    code: str | None = None

    @classmethod
    def failure(cls, exc: LedgerServiceError) -> "PaymentResult":
        return cls(success=False, error=str(exc), code=exc.code)

    def to_dict(self) -> dict:
        if not self.success:
            return {"success": False, "error": self.error, "code": self.code}
        return {
            "success": True,
            "payment_id": self.payment_id,
            "payment_no": self.payment_no,
            "ledger_id": self.ledger_id,
            "balance_before": str(self.balance_before),
            "balance_after": str(self.balance_after),
        }


def _normalize_method(payment_method) -> str:
    method = (str(payment_method or "")).strip().lower()
    if method not in PaymentMethod.values:
        raise InvalidPaymentMethod(
            f"Invalid payment_method {payment_method!r}. Use one of: {', '.join(PaymentMethod.values)}"
        )
    return method


def _entry_datetime(payment_date) -> datetime:
    if payment_date is None:
        return timezone.now()
    if isinstance(payment_date, datetime):
        return payment_date if timezone.is_aware(payment_date) else timezone.make_aware(payment_date)
    if payment_date == timezone.localdate():
        return timezone.now()
    return timezone.make_aware(datetime.combine(payment_date, datetime.min.time()))


def _describe(method: str, reference_number: str) -> str:
    text = f"Payment via {method}"
    if reference_number:
        text = f"{text} (Ref: {reference_number})"
    return text


def record_payment(
    *,
    vendor_id,
    amount,
    payment_method: str,
    reference_number: str | None = None,
    notes: str | None = None,
    performed_by=None,
    payment_date: date | None = None,
) -> PaymentResult:
    """
    RECORD VENDOR PAYMENT (atomic)
    """
    logger.info(
        "Recording vendor payment",
        extra={
            "vendor_id": str(vendor_id),
            "amount": str(amount),
            "payment_method": payment_method,
        },
    )

    try:
        amt = to_money(amount)
        if amt <= ZERO:
            raise InvalidAmount("Amount must be positive")
        method = _normalize_method(payment_method)
    except (InvalidAmount, InvalidPaymentMethod) as exc:
        logger.warning(
            "Vendor payment rejected",
            extra={"vendor_id": str(vendor_id), "reason": exc.code},
        )
        return PaymentResult.failure(exc)

    reference_number = (reference_number or "").strip()
    pay_date = payment_date.date() if isinstance(payment_date, datetime) else payment_date
    created: dict = {}

    def _write(vendor, balance):
        balance_after = to_money(balance - amt)
        payment = VendorPayment.objects.create(
            vendor=vendor,
            payment_no=next_payment_number(),
            amount=amt,
            payment_method=method,
            reference_number=reference_number,
            notes=notes or "",
            balance_before=balance,
            balance_after=balance_after,
            payment_date=pay_date or timezone.localdate(),
            status=PaymentStatus.COMPLETED,
            created_by=performed_by,
        )
        created["payment"] = payment

        entry = VendorLedgerEntry(
            entry_type=LedgerEntryType.PAYMENT,
            reference_id=payment.id,
            reference_no=payment.payment_no,
            debit=ZERO,
            credit=amt,
            description=_describe(method, reference_number),
            notes=notes or "",
            performed_by=performed_by,
            transaction_date=_entry_datetime(payment_date),
        )
        return balance_after, entry

    try:
        entry = with_vendor_lock(vendor_id, _write)
    except (VendorNotFound, InvalidAmount) as exc:
        logger.warning(
            "Vendor payment rejected under lock",
            extra={"vendor_id": str(vendor_id), "reason": exc.code},
        )
        return PaymentResult.failure(exc)

    payment = created["payment"]

    logger.info(
        "Vendor payment recorded",
        extra={
            "vendor_id": str(vendor_id),
            "payment_id": str(payment.id),
            "payment_no": payment.payment_no,
            "ledger_id": str(entry.id),
            "balance_after": str(payment.balance_after),
        },
    )

    return PaymentResult(
        success=True,
        payment_id=str(payment.id),
        payment_no=payment.payment_no,
        ledger_id=str(entry.id),
        balance_before=payment.balance_before,
        balance_after=payment.balance_after,
    )


def list_payments(*, vendor_id=None, status=None):
    qs = VendorPayment.objects.select_related("vendor", "created_by")
    if vendor_id:
        qs = qs.filter(vendor_id=vendor_id)
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-payment_date", "-created_at")

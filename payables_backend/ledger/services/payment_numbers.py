# ledger/services/payment_numbers.py

"""
======================================================
PATH: ledger/services/payment_numbers.py
======================================================
PAYMENT NUMBER ALLOCATOR

Format: PAY-<YYYY>-<NNNNNN>, sequence scoped to the calendar year
(local date in settings.TIME_ZONE).

Allocation:
- lock (or create) the PaymentSequence row for the year
- the first time a year is seen, seed the counter from the highest
  PAY-YYYY-* number already stored
- next = counter + 1
- persist the counter in the caller's transaction

Concurrent allocators serialize on the counter row. If the caller rolls
back, the number is released with it. The unique constraint on
VendorPayment.payment_no stays the last line of defence.
"""

from __future__ import annotations

from django.db import transaction
from django.utils import timezone

from ledger.models import PaymentSequence, VendorPayment
from ledger.services.exceptions import AllocationConflict

PREFIX = "PAY"


def _year_prefix(year: int) -> str:
    return f"{PREFIX}-{year}-"


def format_payment_number(year: int, value: int) -> str:
    return f"{_year_prefix(year)}{value:06d}"


def highest_allocated(year: int) -> int:
    """
    Highest sequence already present in stored payment numbers for `year`.
    """
    prefix = _year_prefix(year)
    highest = 0
    for payment_no in VendorPayment.objects.filter(payment_no__startswith=prefix).values_list(
        "payment_no", flat=True
    ):
        suffix = payment_no[len(prefix):]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return highest


@transaction.atomic
def next_payment_number(year: int | None = None) -> str:
    year = int(year or timezone.localdate().year)

    counter, created = PaymentSequence.objects.select_for_update().get_or_create(
        year=year,
        defaults={"last_value": 0},
    )

    if created:
        # First allocation of the year: continue after rows written before the counter existed.
        counter.last_value = highest_allocated(year)

    value = counter.last_value + 1
    payment_no = format_payment_number(year, value)

    if VendorPayment.objects.filter(payment_no=payment_no).exists():
        raise AllocationConflict(f"Payment number {payment_no} is already allocated")

    counter.last_value = value
    counter.save(update_fields=["last_value", "updated_at"])
    return payment_no

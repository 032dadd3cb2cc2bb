# ledger/services/stats_service.py

"""
VENDOR STATISTICS SERVICE

Read-only dashboard projection for one vendor.

RULES:
- READ-ONLY: no writes, no row locks
- purchases/returns come from *approved* inventory transactions, |total_cost|
- payments come from *completed* vendor payments
- calculated_balance = purchases - returns - payments, reported next to the
  cached balance so drift (manual entries, voids, opening balances) is visible
- all reads (vendor row included) happen in one transaction; on PostgreSQL an
  outermost call runs it at REPEATABLE READ so every query sees one snapshot.
  Called inside an open transaction, the caller's isolation level applies.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from django.core.exceptions import ValidationError
from django.db import connection, transaction
from django.db.models import Count, Max, Sum
from django.db.models.functions import Abs, Coalesce
from django.utils import timezone

from inventory.models import InventoryTransaction
from ledger.models import PaymentStatus, VendorPayment
from vendors.models import Vendor

TWOPLACES = Decimal("0.01")

VENDOR_NOT_FOUND = {"error": "Vendor not found"}


def _q2(v) -> Decimal:
    return Decimal(str(v or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _as_date(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()
    return value


def _inventory_totals(vendor_id, transaction_type: str) -> dict:
    return InventoryTransaction.objects.filter(
        vendor_id=vendor_id,
        transaction_type=transaction_type,
        status=InventoryTransaction.Status.APPROVED,
    ).aggregate(
        total=Coalesce(Sum(Abs("total_cost")), Decimal("0.00")),
        count=Count("id"),
        last=Max("transaction_date"),
    )


def _empty_activity() -> dict:
    zero = Decimal("0.00")
    return {
        "total_purchases": zero,
        "purchase_count": 0,
        "last_purchase_date": None,
        "total_returns": zero,
        "return_count": 0,
        "total_payments": zero,
        "payment_count": 0,
        "last_payment_date": None,
        "calculated_balance": zero,
        "last_activity_date": None,
    }


def _begin_snapshot(outermost: bool) -> None:
    # Must be the first statement of the transaction.
    if outermost and connection.vendor == "postgresql":
        with connection.cursor() as cursor:
            cursor.execute("SET TRANSACTION ISOLATION LEVEL REPEATABLE READ")


def vendor_stats(vendor_id) -> dict:
    outermost = not connection.in_atomic_block
    with transaction.atomic():
        _begin_snapshot(outermost)
        return _collect(vendor_id)


def _collect(vendor_id) -> dict:
    try:
        vendor = Vendor.objects.get(pk=vendor_id)
    except (Vendor.DoesNotExist, ValidationError, ValueError):
        return dict(VENDOR_NOT_FOUND)

    current_balance = _q2(vendor.balance)
    stats = {
        "vendor_id": str(vendor.pk),
        "vendor_name": vendor.company_name or vendor.name,
        "is_active": vendor.is_active,
        "current_balance": current_balance,
    }

    # Deactivated vendors: identity + balance only.
    if not vendor.is_active:
        stats.update(_empty_activity())
        stats["balance_matches"] = current_balance == Decimal("0.00")
        return stats

    purchases = _inventory_totals(vendor.pk, InventoryTransaction.TransactionType.PURCHASE)
    returns = _inventory_totals(vendor.pk, InventoryTransaction.TransactionType.PURCHASE_RETURN)
    payments = VendorPayment.objects.filter(
        vendor_id=vendor.pk,
        status=PaymentStatus.COMPLETED,
    ).aggregate(
        total=Coalesce(Sum("amount"), Decimal("0.00")),
        count=Count("id"),
        last=Max("payment_date"),
    )

    total_purchases = _q2(purchases["total"])
    total_returns = _q2(returns["total"])
    total_payments = _q2(payments["total"])
    calculated = total_purchases - total_returns - total_payments

    last_purchase_date = _as_date(purchases["last"])
    last_payment_date = _as_date(payments["last"])
    activity_dates = [d for d in (last_purchase_date, last_payment_date) if d is not None]

    stats.update(
        {
            "total_purchases": total_purchases,
            "purchase_count": purchases["count"],
            "last_purchase_date": last_purchase_date,
            "total_returns": total_returns,
            "return_count": returns["count"],
            "total_payments": total_payments,
            "payment_count": payments["count"],
            "last_payment_date": last_payment_date,
            "calculated_balance": calculated,
            "balance_matches": calculated == current_balance,
            "last_activity_date": max(activity_dates) if activity_dates else None,
        }
    )
    return stats

# ledger/tests/helpers.py

"""
Small builders shared by the ledger test modules.
"""

from __future__ import annotations

import itertools
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group

from inventory.models import InventoryTransaction
from inventory.services.status_service import approve_transaction
from vendors.models import Vendor

User = get_user_model()

_invoice_counter = itertools.count(1)


def make_vendor(name="Himalayan Traders", **kwargs) -> Vendor:
    return Vendor.objects.create(name=name, **kwargs)


def make_manager(username="ledger_manager") -> User:
    user = User.objects.create_user(username=username, password="password123")
    group, _ = Group.objects.get_or_create(name="manager")
    user.groups.add(group)
    return user


def make_inventory_txn(
    vendor,
    *,
    total_cost,
    transaction_type=InventoryTransaction.TransactionType.PURCHASE,
    status=InventoryTransaction.Status.PENDING,
    invoice_no=None,
    **kwargs,
) -> InventoryTransaction:
    return InventoryTransaction.objects.create(
        vendor=vendor,
        transaction_type=transaction_type,
        invoice_no=invoice_no or f"INV-{next(_invoice_counter):05d}",
        total_cost=Decimal(str(total_cost)),
        status=status,
        **kwargs,
    )


def approved_purchase(vendor, total_cost, **kwargs) -> InventoryTransaction:
    txn = make_inventory_txn(vendor, total_cost=total_cost, **kwargs)
    return approve_transaction(transaction_id=txn.id)


def approved_return(vendor, total_cost, **kwargs) -> InventoryTransaction:
    txn = make_inventory_txn(
        vendor,
        total_cost=total_cost,
        transaction_type=InventoryTransaction.TransactionType.PURCHASE_RETURN,
        **kwargs,
    )
    return approve_transaction(transaction_id=txn.id)

# ledger/tests/test_derived_entries.py

from __future__ import annotations

from decimal import Decimal
from unittest import mock

from django.test import TestCase, override_settings

from inventory.models import InventoryTransaction
from inventory.services.status_service import approve_transaction, void_transaction
from inventory.signals import inventory_transaction_approved
from ledger.models import LedgerEntryType, VendorLedgerEntry
from ledger.services.derived_entries import (
    backfill_missing_entries,
    on_inventory_transaction_approved,
    on_inventory_transaction_voided,
)
from ledger.tests.helpers import (
    approved_purchase,
    approved_return,
    make_inventory_txn,
    make_vendor,
)

TxnType = InventoryTransaction.TransactionType
TxnStatus = InventoryTransaction.Status


class ApprovalDerivationTests(TestCase):
    """
    Inventory approval -> ledger entry.

    GUARANTEES:
    - purchase -> debit |total_cost|, purchase_return -> credit |total_cost|
    - One entry per (transaction, entry_type), however often the event arrives
    - Damage/adjustment, vendor-less and zero-value transactions write nothing
    """

    def setUp(self):
        self.vendor = make_vendor()

    def _entries(self):
        return VendorLedgerEntry.objects.filter(vendor=self.vendor)

    def test_purchase_approval_debits_vendor(self):
        txn = approved_purchase(self.vendor, "1000.00", invoice_no="INV-1001")

        entry = self._entries().get()
        self.assertEqual(entry.entry_type, LedgerEntryType.PURCHASE)
        self.assertEqual(entry.debit, Decimal("1000.00"))
        self.assertEqual(entry.credit, Decimal("0.00"))
        self.assertEqual(entry.reference_id, txn.id)
        self.assertEqual(entry.reference_no, "INV-1001")
        self.assertEqual(entry.description, "Purchase: INV-1001")

        self.vendor.refresh_from_db()
        self.assertEqual(self.vendor.balance, Decimal("1000.00"))

    def test_negative_return_cost_credits_absolute_value(self):
        approved_purchase(self.vendor, "300.00")
        approved_return(self.vendor, "-120.00", invoice_no="RET-9")

        entry = self._entries().get(entry_type=LedgerEntryType.PURCHASE_RETURN)
        self.assertEqual(entry.credit, Decimal("120.00"))
        self.assertEqual(entry.debit, Decimal("0.00"))
        self.assertEqual(entry.running_balance, Decimal("180.00"))
        self.assertEqual(entry.description, "Purchase Return: RET-9")

    def test_positive_return_cost_is_also_a_credit(self):
        approved_return(self.vendor, "75.00")

        entry = self._entries().get()
        self.assertEqual(entry.credit, Decimal("75.00"))

    def test_repeated_approval_is_idempotent(self):
        txn = approved_purchase(self.vendor, "500.00")

        approve_transaction(transaction_id=txn.id)
        txn.refresh_from_db()
        txn.save()
        on_inventory_transaction_approved(txn)
        inventory_transaction_approved.send(
            sender=InventoryTransaction, instance=txn, previous_status="pending"
        )

        self.assertEqual(self._entries().count(), 1)
        self.vendor.refresh_from_db()
        self.assertEqual(self.vendor.balance, Decimal("500.00"))

    def test_redelivery_returns_existing_entry(self):
        txn = approved_purchase(self.vendor, "50.00")
        first = self._entries().get()

        again = on_inventory_transaction_approved(txn)
        self.assertEqual(again.pk, first.pk)

    def test_created_directly_as_approved_still_derives(self):
        make_inventory_txn(self.vendor, total_cost="40.00", status=TxnStatus.APPROVED)
        self.assertEqual(self._entries().count(), 1)

    def test_unsupported_types_write_nothing(self):
        for txn_type in (TxnType.DAMAGE, TxnType.ADJUSTMENT):
            txn = make_inventory_txn(self.vendor, total_cost="10.00", transaction_type=txn_type)
            approve_transaction(transaction_id=txn.id)

        self.assertFalse(self._entries().exists())

    def test_zero_value_and_vendorless_write_nothing(self):
        approved_purchase(self.vendor, "0.00")
        txn = make_inventory_txn(None, total_cost="10.00")
        approve_transaction(transaction_id=txn.id)

        self.assertFalse(VendorLedgerEntry.objects.exists())

    def test_pending_transaction_is_ignored(self):
        txn = make_inventory_txn(self.vendor, total_cost="10.00")
        self.assertIsNone(on_inventory_transaction_approved(txn))

    def test_source_metadata_is_copied(self):
        txn = approved_purchase(self.vendor, "10.00")
        entry = self._entries().get()
        self.assertEqual(entry.transaction_date, txn.transaction_date)


class VoidDerivationTests(TestCase):
    """
    Void of an approved transaction.

    GUARANTEES:
    - Voiding a purchase credits back the original debit (void_purchase)
    - Voiding a return debits back the original credit (void_return)
    - A second void, or a void with no original entry, writes nothing
    - The offset is posted to the vendor that carries the original entry
    """

    def setUp(self):
        self.vendor = make_vendor()

    def test_void_purchase_offsets_original(self):
        txn = approved_purchase(self.vendor, "800.00", invoice_no="INV-77")
        void_transaction(transaction_id=txn.id, reason="Duplicate invoice")

        void = VendorLedgerEntry.objects.get(entry_type=LedgerEntryType.VOID_PURCHASE)
        self.assertEqual(void.credit, Decimal("800.00"))
        self.assertEqual(void.debit, Decimal("0.00"))
        self.assertEqual(void.running_balance, Decimal("0.00"))
        self.assertEqual(void.reference_id, txn.id)
        self.assertEqual(void.description, "Void Purchase: INV-77 (Duplicate invoice)")

        self.vendor.refresh_from_db()
        self.assertEqual(self.vendor.balance, Decimal("0.00"))

    def test_void_return_offsets_original(self):
        approved_purchase(self.vendor, "100.00")
        ret = approved_return(self.vendor, "-30.00")
        void_transaction(transaction_id=ret.id, reason="Goods kept")

        void = VendorLedgerEntry.objects.get(entry_type=LedgerEntryType.VOID_RETURN)
        self.assertEqual(void.debit, Decimal("30.00"))
        self.vendor.refresh_from_db()
        self.assertEqual(self.vendor.balance, Decimal("100.00"))

    def test_double_void_is_idempotent(self):
        txn = approved_purchase(self.vendor, "60.00")
        void_transaction(transaction_id=txn.id, reason="Wrong vendor")
        void_transaction(transaction_id=txn.id, reason="Wrong vendor")

        txn.refresh_from_db()
        on_inventory_transaction_voided(txn)

        self.assertEqual(
            VendorLedgerEntry.objects.filter(entry_type=LedgerEntryType.VOID_PURCHASE).count(), 1
        )

    def test_void_lands_on_vendor_of_original_entry(self):
        txn = approved_purchase(self.vendor, "1000.00")
        other = make_vendor(name="Everest Supplies")
        # Row-level update skips the model checks that freeze vendor after approval.
        InventoryTransaction.objects.filter(pk=txn.pk).update(vendor=other)

        void_transaction(transaction_id=txn.id, reason="Wrong vendor")

        void = VendorLedgerEntry.objects.get(entry_type=LedgerEntryType.VOID_PURCHASE)
        self.assertEqual(void.vendor_id, self.vendor.id)
        self.assertFalse(VendorLedgerEntry.objects.filter(vendor=other).exists())

        self.vendor.refresh_from_db()
        other.refresh_from_db()
        self.assertEqual(self.vendor.balance, Decimal("0.00"))
        self.assertEqual(other.balance, Decimal("0.00"))

    @override_settings(VENDOR_LEDGER_SYNC_ENABLED=False)
    def test_void_without_original_entry_writes_nothing(self):
        txn = approved_purchase(self.vendor, "60.00")
        void_transaction(transaction_id=txn.id, reason="Cancelled")
        txn.refresh_from_db()

        self.assertIsNone(on_inventory_transaction_voided(txn))
        self.assertFalse(VendorLedgerEntry.objects.exists())


class SyncToggleAndBackfillTests(TestCase):
    """
    VENDOR_LEDGER_SYNC_ENABLED + backfill.

    GUARANTEES:
    - Sync off: approvals still succeed, no ledger entries are written
    - Backfill derives exactly the missing entries and is safe to rerun
    - A ledger failure rolls the inventory status change back
    """

    def setUp(self):
        self.vendor = make_vendor()

    def test_disabled_sync_then_backfill(self):
        with self.settings(VENDOR_LEDGER_SYNC_ENABLED=False):
            approved_purchase(self.vendor, "200.00", invoice_no="INV-A")
            approved_return(self.vendor, "-50.00", invoice_no="RET-A")
            voided = approved_purchase(self.vendor, "90.00", invoice_no="INV-B")
            void_transaction(transaction_id=voided.id, reason="Entered twice")

        self.assertFalse(VendorLedgerEntry.objects.exists())

        preview = backfill_missing_entries(dry_run=True)
        self.assertEqual(preview["created"], 2)
        self.assertFalse(VendorLedgerEntry.objects.exists())

        report = backfill_missing_entries()
        self.assertEqual(report["scanned"], 3)
        self.assertEqual(report["created"], 2)
        self.assertEqual(report["skipped"], 1)
        self.assertEqual(sorted(report["invoice_nos"]), ["INV-A", "RET-A"])

        self.vendor.refresh_from_db()
        self.assertEqual(self.vendor.balance, Decimal("150.00"))

        rerun = backfill_missing_entries()
        self.assertEqual(rerun["created"], 0)
        self.assertEqual(rerun["already_present"], 2)

    def test_backfill_derives_missing_void(self):
        txn = approved_purchase(self.vendor, "70.00")
        with self.settings(VENDOR_LEDGER_SYNC_ENABLED=False):
            void_transaction(transaction_id=txn.id, reason="Returned unopened")

        report = backfill_missing_entries(vendor_id=self.vendor.id)
        self.assertEqual(report["created"], 1)
        self.assertTrue(
            VendorLedgerEntry.objects.filter(entry_type=LedgerEntryType.VOID_PURCHASE).exists()
        )

    def test_ledger_failure_rolls_back_approval(self):
        txn = make_inventory_txn(self.vendor, total_cost="10.00")

        with mock.patch(
            "ledger.receivers.on_inventory_transaction_approved",
            side_effect=RuntimeError("ledger unavailable"),
        ):
            with self.assertRaises(RuntimeError):
                approve_transaction(transaction_id=txn.id)

        txn.refresh_from_db()
        self.assertEqual(txn.status, TxnStatus.PENDING)
        self.assertFalse(VendorLedgerEntry.objects.exists())

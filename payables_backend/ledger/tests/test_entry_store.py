# ledger/tests/test_entry_store.py

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from ledger.models import LedgerEntryType, VendorLedgerEntry
from ledger.services import entry_store
from ledger.services.exceptions import (
    InvariantViolation,
    LedgerEntryNotFound,
    UnknownVendor,
)
from ledger.tests.helpers import make_vendor


def _entry(vendor, *, debit="0", credit="0", running_balance, entry_type=LedgerEntryType.ADJUSTMENT, **kwargs):
    return VendorLedgerEntry(
        vendor=vendor,
        entry_type=entry_type,
        debit=Decimal(debit),
        credit=Decimal(credit),
        running_balance=Decimal(running_balance),
        **kwargs,
    )


class EntryStoreAppendTests(TestCase):
    """
    Ledger entry store.

    GUARANTEES:
    - Debit/credit exclusivity and non-negativity
    - running_balance continuity in insertion order, starting at zero
    - Per-vendor sequence assigned on append
    - No in-place modification or deletion of entries
    """

    def setUp(self):
        self.vendor = make_vendor()

    def test_running_balance_is_zero_without_entries(self):
        self.assertEqual(entry_store.running_balance(self.vendor.id), Decimal("0.00"))

    def test_append_assigns_sequence_and_tracks_balance(self):
        first = entry_store.append_entry(_entry(self.vendor, debit="1000.00", running_balance="1000.00"))
        second = entry_store.append_entry(_entry(self.vendor, credit="400.00", running_balance="600.00"))

        self.assertEqual(first.sequence, 1)
        self.assertEqual(second.sequence, 2)
        self.assertEqual(entry_store.running_balance(self.vendor.id), Decimal("600.00"))

    def test_zero_zero_entry_is_allowed(self):
        entry = entry_store.append_entry(_entry(self.vendor, running_balance="0.00"))
        self.assertEqual(entry.amount, Decimal("0.00"))

    def test_both_debit_and_credit_rejected(self):
        with self.assertRaises(InvariantViolation):
            entry_store.append_entry(
                _entry(self.vendor, debit="10.00", credit="10.00", running_balance="0.00")
            )
        self.assertFalse(VendorLedgerEntry.objects.exists())

    def test_negative_amount_rejected(self):
        with self.assertRaises(InvariantViolation):
            entry_store.append_entry(_entry(self.vendor, debit="-5.00", running_balance="-5.00"))

    def test_discontinuous_running_balance_rejected(self):
        entry_store.append_entry(_entry(self.vendor, debit="100.00", running_balance="100.00"))

        with self.assertRaises(InvariantViolation):
            entry_store.append_entry(_entry(self.vendor, debit="50.00", running_balance="50.00"))

        self.assertEqual(VendorLedgerEntry.objects.filter(vendor=self.vendor).count(), 1)

    def test_unknown_vendor_rejected(self):
        entry = VendorLedgerEntry(
            vendor_id=uuid.uuid4(),
            entry_type=LedgerEntryType.ADJUSTMENT,
            debit=Decimal("1.00"),
            running_balance=Decimal("1.00"),
        )

        with self.assertRaises(UnknownVendor):
            entry_store.append_entry(entry)

    def test_duplicate_reference_and_type_rejected(self):
        ref = uuid.uuid4()
        entry_store.append_entry(
            _entry(
                self.vendor,
                debit="10.00",
                running_balance="10.00",
                entry_type=LedgerEntryType.PURCHASE,
                reference_id=ref,
            )
        )
        with self.assertRaises(InvariantViolation):
            entry_store.append_entry(
                _entry(
                    self.vendor,
                    debit="10.00",
                    running_balance="20.00",
                    entry_type=LedgerEntryType.PURCHASE,
                    reference_id=ref,
                )
            )

    def test_balances_are_per_vendor(self):
        other = make_vendor(name="Everest Supplies")
        entry_store.append_entry(_entry(self.vendor, debit="10.00", running_balance="10.00"))
        entry_store.append_entry(_entry(other, debit="99.00", running_balance="99.00"))

        self.assertEqual(entry_store.running_balance(self.vendor.id), Decimal("10.00"))
        self.assertEqual(entry_store.running_balance(other.id), Decimal("99.00"))


class EntryImmutabilityTests(TestCase):
    def setUp(self):
        self.vendor = make_vendor()
        self.entry = entry_store.append_entry(
            _entry(self.vendor, debit="100.00", running_balance="100.00")
        )

    def test_entry_cannot_be_modified(self):
        self.entry.description = "edited"
        with self.assertRaises(ValidationError):
            self.entry.save()

    def test_entry_cannot_be_deleted(self):
        with self.assertRaises(ValidationError):
            self.entry.delete()

    def test_queryset_update_and_delete_refused(self):
        qs = VendorLedgerEntry.objects.filter(pk=self.entry.pk)
        with self.assertRaises(ValidationError):
            qs.update(debit=Decimal("1.00"))
        with self.assertRaises(ValidationError):
            qs.delete()

        self.assertEqual(VendorLedgerEntry.objects.get(pk=self.entry.pk).debit, Decimal("100.00"))


class EntryLookupTests(TestCase):
    def setUp(self):
        self.vendor = make_vendor()

    def test_get_entry_not_found(self):
        with self.assertRaises(LedgerEntryNotFound):
            entry_store.get_entry(uuid.uuid4())
        with self.assertRaises(LedgerEntryNotFound):
            entry_store.get_entry("not-a-uuid")

    def test_vendor_entries_newest_first_with_type_filter(self):
        entry_store.append_entry(_entry(self.vendor, debit="100.00", running_balance="100.00"))
        entry_store.append_entry(
            _entry(
                self.vendor,
                credit="40.00",
                running_balance="60.00",
                entry_type=LedgerEntryType.CREDIT_NOTE,
            )
        )

        sequences = list(entry_store.vendor_entries(self.vendor.id).values_list("sequence", flat=True))
        self.assertEqual(sequences, [2, 1])

        notes = entry_store.vendor_entries(self.vendor.id, entry_type=LedgerEntryType.CREDIT_NOTE)
        self.assertEqual(notes.count(), 1)

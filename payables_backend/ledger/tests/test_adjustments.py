# ledger/tests/test_adjustments.py

from __future__ import annotations

import uuid
from decimal import Decimal

from django.test import TestCase

from ledger.models import LedgerEntryType, VendorLedgerEntry
from ledger.services.adjustment_service import post_manual_entry
from ledger.tests.helpers import approved_purchase, make_manager, make_vendor


class ManualEntryTests(TestCase):
    """
    Manual postings.

    GUARANTEES:
    - debit_note / credit_note need a positive amount
    - adjustment / opening_balance are signed (+ debit, - credit)
    - opening_balance only on a vendor with no entries
    - workflow entry types can never be posted by hand
    """

    def setUp(self):
        self.vendor = make_vendor()
        self.user = make_manager()

    def _post(self, entry_type, amount, **kwargs):
        return post_manual_entry(
            vendor_id=self.vendor.id,
            entry_type=entry_type,
            amount=amount,
            performed_by=self.user,
            **kwargs,
        )

    def test_opening_balance_then_notes(self):
        opening = self._post("opening_balance", "2500.00")
        self.assertTrue(opening.success)
        self.assertEqual(opening.balance_before, Decimal("0.00"))
        self.assertEqual(opening.balance_after, Decimal("2500.00"))

        debit_note = self._post("debit_note", "100.00", description="Freight recharge")
        credit_note = self._post("credit_note", "300.00", reference_no="CN-12")

        self.assertEqual(debit_note.balance_after, Decimal("2600.00"))
        self.assertEqual(credit_note.balance_after, Decimal("2300.00"))

        entry = VendorLedgerEntry.objects.get(pk=credit_note.ledger_id)
        self.assertEqual(entry.credit, Decimal("300.00"))
        self.assertEqual(entry.reference_no, "CN-12")
        self.assertEqual(entry.description, "Credit Note")
        self.assertEqual(entry.performed_by, self.user)

        self.assertEqual(
            VendorLedgerEntry.objects.get(pk=debit_note.ledger_id).description,
            "Freight recharge",
        )

    def test_negative_opening_balance_is_a_credit(self):
        result = self._post("opening_balance", "-150.00")
        entry = VendorLedgerEntry.objects.get(pk=result.ledger_id)
        self.assertEqual(entry.credit, Decimal("150.00"))
        self.assertEqual(result.balance_after, Decimal("-150.00"))

    def test_opening_balance_after_activity_is_refused(self):
        approved_purchase(self.vendor, "10.00")

        result = self._post("opening_balance", "100.00")
        self.assertFalse(result.success)
        self.assertEqual(result.code, "opening_balance_exists")

    def test_signed_adjustment(self):
        self._post("adjustment", "40.00")
        down = self._post("adjustment", "-15.00")
        self.assertEqual(down.balance_after, Decimal("25.00"))

        zero = self._post("adjustment", "0")
        self.assertFalse(zero.success)
        self.assertEqual(zero.code, "invalid_amount")

    def test_out_of_range_amounts_are_structured_failures(self):
        too_big = self._post("adjustment", "1000000000000")
        self.assertFalse(too_big.success)
        self.assertEqual(too_big.code, "invalid_amount")

        self._post("opening_balance", "999999999999.00")
        overflow = self._post("debit_note", "1.00")
        self.assertFalse(overflow.success)
        self.assertEqual(overflow.code, "invalid_amount")
        self.assertEqual(VendorLedgerEntry.objects.filter(vendor=self.vendor).count(), 1)

    def test_notes_require_positive_amount(self):
        for entry_type in ("debit_note", "credit_note"):
            result = self._post(entry_type, "-5.00")
            self.assertFalse(result.success)
            self.assertEqual(result.code, "invalid_amount")

    def test_workflow_types_are_refused(self):
        for entry_type in (
            LedgerEntryType.PURCHASE,
            LedgerEntryType.PAYMENT,
            LedgerEntryType.VOID_PURCHASE,
            "bonus",
        ):
            result = self._post(entry_type, "5.00")
            self.assertFalse(result.success)
            self.assertEqual(result.code, "invalid_entry_type")

        self.assertFalse(VendorLedgerEntry.objects.exists())

    def test_unknown_vendor(self):
        result = post_manual_entry(vendor_id=uuid.uuid4(), entry_type="debit_note", amount="5")
        self.assertFalse(result.success)
        self.assertEqual(result.code, "vendor_not_found")

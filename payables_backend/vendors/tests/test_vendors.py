# vendors/tests/test_vendors.py

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from rest_framework.test import APIClient

from ledger.services.payment_service import record_payment
from ledger.tests.helpers import make_manager, make_vendor
from vendors.models import Vendor

User = get_user_model()


class VendorBalanceProtectionTests(TestCase):
    """
    Vendor.balance is a ledger cache.

    GUARANTEES:
    - New vendors start at 0.00 whatever the caller passes
    - Ordinary saves never overwrite a balance written by the ledger
    - Saving balance explicitly is refused
    """

    def test_new_vendor_starts_at_zero(self):
        vendor = Vendor.objects.create(name="Everest Pharma", balance=Decimal("500.00"))
        vendor.refresh_from_db()
        self.assertEqual(vendor.balance, Decimal("0.00"))

    def test_stale_instance_save_keeps_ledger_balance(self):
        vendor = make_vendor()
        stale = Vendor.objects.get(pk=vendor.pk)

        record_payment(vendor_id=vendor.id, amount="30.00", payment_method="cash")

        stale.phone = "9800000000"
        stale.save()

        vendor.refresh_from_db()
        self.assertEqual(vendor.phone, "9800000000")
        self.assertEqual(vendor.balance, Decimal("-30.00"))

    def test_explicit_balance_save_is_refused(self):
        vendor = make_vendor()
        vendor.balance = Decimal("10.00")
        with self.assertRaises(ValidationError):
            vendor.save(update_fields=["balance"])

    def test_name_is_required(self):
        with self.assertRaises(ValidationError):
            Vendor.objects.create(name="   ")


class VendorApiTests(TestCase):
    """
    /api/vendors/

    GUARANTEES:
    - Listing hides inactive vendors unless include_inactive is set
    - Creating a vendor needs a posting role and ignores a supplied balance
    """

    url = "/api/vendors/"

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=make_manager())

    def test_list_and_search(self):
        make_vendor(name="Himalayan Traders")
        make_vendor(name="Annapurna Supplies", company_name="Annapurna Pvt. Ltd.")
        make_vendor(name="Closed Co", is_active=False)

        res = self.client.get(self.url)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 2)

        res = self.client.get(self.url, {"include_inactive": "true"})
        self.assertEqual(res.data["count"], 3)

        res = self.client.get(self.url, {"search": "pvt"})
        self.assertEqual([row["name"] for row in res.data["results"]], ["Annapurna Supplies"])

    def test_create_ignores_balance(self):
        res = self.client.post(self.url, {"name": "Kathmandu Medico", "balance": "999.00"}, format="json")
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["balance"], "0.00")

    def test_clerk_cannot_create(self):
        clerk = User.objects.create_user(username="clerk", password="password123")
        client = APIClient()
        client.force_authenticate(user=clerk)

        self.assertEqual(client.post(self.url, {"name": "Nope"}, format="json").status_code, 403)
        self.assertEqual(client.get(self.url).status_code, 200)

    def test_detail(self):
        vendor = make_vendor()
        res = self.client.get(f"{self.url}{vendor.id}/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["name"], "Himalayan Traders")

# vendors/models.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Vendor(models.Model):
    """
    Vendor master.

    `balance` is what the operator currently owes the vendor
    (positive = payable, negative = vendor owes us / advance paid).
    It is a cache of the latest ledger entry's running balance and is only
    ever written by ledger.services.balance_guard via queryset.update().
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    company_name = models.CharField(max_length=200, blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    address = models.TextField(blank=True, default="")

    balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
    )

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="vendors_ven_name_8c2f4d_idx"),
            models.Index(fields=["is_active"], name="vendors_ven_is_acti_5a1e07_idx"),
        ]

    def __str__(self):
        return self.company_name or self.name

    def clean(self):
        if not (self.name or "").strip():
            raise ValidationError({"name": "name is required"})

    def save(self, *args, **kwargs):
        # New vendors always start with nothing owed.
        if self._state.adding:
            self.balance = Decimal("0.00")
        else:
            # Never let a full save clobber a balance the guard wrote concurrently.
            update_fields = kwargs.get("update_fields")
            if update_fields is None:
                kwargs["update_fields"] = [
                    f.attname
                    for f in self._meta.concrete_fields
                    if not f.primary_key and f.attname != "balance"
                ]
            elif "balance" in update_fields:
                raise ValidationError(
                    "Vendor.balance is maintained by the ledger and cannot be saved directly"
                )
        self.full_clean()
        return super().save(*args, **kwargs)

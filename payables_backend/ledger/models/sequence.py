# ledger/models/sequence.py

"""
======================================================
PATH: ledger/models/sequence.py
======================================================
PAYMENT NUMBER SEQUENCE

One row per calendar year holding the last allocated payment sequence.
Rows are locked with SELECT ... FOR UPDATE by
ledger.services.payment_numbers, which serializes concurrent allocators.
"""

from django.db import models


class PaymentSequence(models.Model):
    year = models.PositiveIntegerField(primary_key=True)
    last_value = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-year"]

    def __str__(self):
        return f"PAY-{self.year} @ {self.last_value}"

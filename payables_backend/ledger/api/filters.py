# ledger/api/filters.py

"""
django-filter FilterSets for ledger listings.

    /api/ledger/vendors/<id>/entries/?entry_type=payment&date_from=2026-01-01&date_to=2026-01-31
    /api/ledger/payments/?vendor=<uuid>&status=completed&payment_method=cash
"""

import django_filters

from ledger.models import LedgerEntryType, PaymentMethod, PaymentStatus, VendorLedgerEntry, VendorPayment


class VendorLedgerEntryFilter(django_filters.FilterSet):
    entry_type = django_filters.ChoiceFilter(choices=LedgerEntryType.choices)
    date_from = django_filters.DateFilter(field_name="transaction_date", lookup_expr="date__gte")
    date_to = django_filters.DateFilter(field_name="transaction_date", lookup_expr="date__lte")

    class Meta:
        model = VendorLedgerEntry
        fields = ["entry_type", "date_from", "date_to"]


class VendorPaymentFilter(django_filters.FilterSet):
    vendor = django_filters.UUIDFilter(field_name="vendor_id")
    status = django_filters.ChoiceFilter(choices=PaymentStatus.choices)
    payment_method = django_filters.ChoiceFilter(choices=PaymentMethod.choices)
    date_from = django_filters.DateFilter(field_name="payment_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="payment_date", lookup_expr="lte")

    class Meta:
        model = VendorPayment
        fields = ["vendor", "status", "payment_method", "date_from", "date_to"]

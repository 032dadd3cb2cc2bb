import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("vendors", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PaymentSequence",
            fields=[
                ("year", models.PositiveIntegerField(primary_key=True, serialize=False)),
                ("last_value", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-year"],
            },
        ),
        migrations.CreateModel(
            name="VendorPayment",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("payment_no", models.CharField(max_length=32, unique=True)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
                (
                    "payment_method",
                    models.CharField(
                        choices=[
                            ("cash", "Cash"),
                            ("cheque", "Cheque"),
                            ("bank_transfer", "Bank Transfer"),
                            ("upi", "UPI"),
                            ("neft", "NEFT"),
                            ("rtgs", "RTGS"),
                            ("imps", "IMPS"),
                            ("bank", "Bank Deposit"),
                            ("esewa", "eSewa"),
                            ("khalti", "Khalti"),
                            ("ime_pay", "IME Pay"),
                            ("fonepay", "Fonepay"),
                            ("online", "Online"),
                            ("other", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "reference_number",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Cheque / transfer / wallet reference",
                        max_length=100,
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
                ("balance_before", models.DecimalField(decimal_places=2, max_digits=14)),
                ("balance_after", models.DecimalField(decimal_places=2, max_digits=14)),
                ("payment_date", models.DateField(default=django.utils.timezone.localdate)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                            ("bounced", "Bounced"),
                        ],
                        default="completed",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="vendors.vendor",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="vendor_payments_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "approved_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="vendor_payments_approved",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-payment_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["vendor", "payment_date"], name="ledger_vend_vendor__0b6d93_idx"),
                    models.Index(fields=["status"], name="ledger_vend_status_e27c4f_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount__gt", Decimal("0.00"))),
                        name="vendor_payment_amount_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="VendorLedgerEntry",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "sequence",
                    models.PositiveIntegerField(
                        editable=False,
                        help_text="Per-vendor insertion order (1-based)",
                    ),
                ),
                (
                    "entry_type",
                    models.CharField(
                        choices=[
                            ("purchase", "Purchase"),
                            ("purchase_return", "Purchase Return"),
                            ("payment", "Payment"),
                            ("debit_note", "Debit Note"),
                            ("credit_note", "Credit Note"),
                            ("void_purchase", "Void Purchase"),
                            ("void_return", "Void Return"),
                            ("opening_balance", "Opening Balance"),
                            ("adjustment", "Adjustment"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "reference_id",
                    models.UUIDField(
                        blank=True,
                        help_text="Originating payment or inventory transaction id",
                        null=True,
                    ),
                ),
                ("reference_no", models.CharField(blank=True, default="", max_length=64)),
                ("debit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("credit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                (
                    "running_balance",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Vendor balance immediately after this entry",
                        max_digits=14,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "transaction_date",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        help_text="Business date of the movement (may be backdated)",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="vendors.vendor",
                    ),
                ),
                (
                    "performed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="vendor_ledger_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Vendor Ledger Entry",
                "verbose_name_plural": "Vendor Ledger Entries",
                "ordering": ["vendor", "sequence"],
                "indexes": [
                    models.Index(fields=["vendor", "transaction_date"], name="ledger_vend_vendor__a41f0c_idx"),
                    models.Index(fields=["vendor", "entry_type"], name="ledger_vend_vendor__5e2b77_idx"),
                    models.Index(fields=["reference_id"], name="ledger_vend_referen_9d03e1_idx"),
                    models.Index(fields=["created_at"], name="ledger_vend_created_1c7a52_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("debit__gte", Decimal("0.00")), ("credit__gte", Decimal("0.00"))),
                        name="vendor_ledger_amounts_nonnegative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("debit__gt", Decimal("0.00")),
                            ("credit__gt", Decimal("0.00")),
                            _negated=True,
                        ),
                        name="vendor_ledger_debit_xor_credit",
                    ),
                    models.UniqueConstraint(
                        fields=("vendor", "sequence"),
                        name="uniq_vendor_ledger_sequence",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("reference_id__isnull", False)),
                        fields=("reference_id", "entry_type"),
                        name="uniq_vendor_ledger_reference_type",
                    ),
                ],
            },
        ),
    ]

# ledger/management/commands/backfill_vendor_ledger.py

from __future__ import annotations

import uuid

from django.core.management.base import BaseCommand

from ledger.services.derived_entries import backfill_missing_entries
from vendors.models import Vendor


def _parse_uuid(s: str | None):
    if not s:
        return None
    try:
        return uuid.UUID(str(s))
    except ValueError:
        return None


class Command(BaseCommand):
    help = (
        "Create missing vendor ledger entries for approved / voided inventory transactions "
        "(idempotent; safe to rerun)."
    )

    def add_arguments(self, parser):
        parser.add_argument("--vendor", dest="vendor_id", help="Only this vendor (UUID, optional)")
        parser.add_argument("--dry-run", action="store_true", help="Show actions without writing to DB")

    def handle(self, *args, **options):
        vendor_id = _parse_uuid(options.get("vendor_id"))
        dry_run = bool(options.get("dry_run"))

        if options.get("vendor_id") and not vendor_id:
            self.stderr.write(self.style.ERROR("Invalid --vendor. Use a vendor UUID"))
            raise SystemExit(1)

        if vendor_id and not Vendor.objects.filter(pk=vendor_id).exists():
            self.stderr.write(self.style.ERROR(f"Vendor not found: {vendor_id}"))
            raise SystemExit(1)

        self.stdout.write(self.style.MIGRATE_HEADING("Backfill Inventory → Vendor Ledger"))
        self.stdout.write(f"Scope: {'vendor ' + str(vendor_id) if vendor_id else 'ALL VENDORS'}")
        if dry_run:
            self.stdout.write("DRY RUN: no database changes will be saved.\n")

        report = backfill_missing_entries(vendor_id=vendor_id, dry_run=dry_run)

        self.stdout.write(f"Transactions scanned:   {report['scanned']}")
        self.stdout.write(f"Already in ledger:      {report['already_present']}")
        self.stdout.write(f"Skipped (nothing owed): {report['skipped']}")

        verb = "Would create" if dry_run else "Created"
        self.stdout.write(self.style.SUCCESS(f"{verb}: {report['created']} entr{'y' if report['created'] == 1 else 'ies'}"))
        for invoice_no in report["invoice_nos"][:20]:
            self.stdout.write(f"  {invoice_no}")

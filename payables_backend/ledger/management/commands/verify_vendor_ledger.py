# ledger/management/commands/verify_vendor_ledger.py

from __future__ import annotations

import uuid

from django.core.management.base import BaseCommand

from ledger.services.reconciliation import verify_all


def _parse_uuid(s: str | None):
    if not s:
        return None
    try:
        return uuid.UUID(str(s))
    except ValueError:
        return None


class Command(BaseCommand):
    help = "Replay vendor ledgers and check running balances + cached vendor balances."

    def add_arguments(self, parser):
        parser.add_argument("--vendor", dest="vendor_id", help="Only this vendor (UUID, optional)")
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Fail (non-zero exit) if any problem is found.",
        )

    def handle(self, *args, **options):
        vendor_id = _parse_uuid(options.get("vendor_id"))
        strict = bool(options.get("strict"))

        if options.get("vendor_id") and not vendor_id:
            self.stderr.write(self.style.ERROR("Invalid --vendor. Use a vendor UUID"))
            return self._exit(strict)

        reports = verify_all(vendor_id=vendor_id)

        self.stdout.write(self.style.MIGRATE_HEADING("Vendor Ledger Continuity"))
        self.stdout.write(f"Vendors checked: {len(reports)}")
        self.stdout.write("")

        errors = 0
        for report in reports:
            if report.ok:
                self.stdout.write(
                    self.style.SUCCESS(
                        f"[OK] {report.vendor_name}: {report.entry_count} entries, balance {report.replayed_balance}"
                    )
                )
                continue

            errors += len(report.problems)
            self.stderr.write(self.style.ERROR(f"[FAIL] {report.vendor_name} ({report.vendor_id})"))
            for problem in report.problems[:10]:
                self.stderr.write(f"  {problem}")

        self.stdout.write("")
        if errors == 0:
            self.stdout.write(self.style.SUCCESS("VALIDATION PASSED"))
        else:
            self.stderr.write(self.style.ERROR(f"VALIDATION FOUND ISSUES: {errors} problem(s)"))

        return self._exit(strict and errors > 0)

    def _exit(self, fail: bool):
        if fail:
            raise SystemExit(1)
        return None

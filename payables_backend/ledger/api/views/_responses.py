# ledger/api/views/_responses.py

from rest_framework import status

NOT_FOUND_CODES = {"vendor_not_found", "unknown_vendor", "ledger_entry_not_found"}


def failure_status(code: str | None) -> int:
    if code in NOT_FOUND_CODES:
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST

# ledger/services/exceptions.py

"""
LEDGER SERVICE ERRORS

Centralized domain errors for the vendor ledger services.

`code` is the stable machine-readable identifier returned to API clients
in failed PaymentResult / PostingResult payloads.
"""


class LedgerServiceError(Exception):
    """Base exception for all vendor ledger service failures."""

    code = "ledger_error"


class VendorNotFound(LedgerServiceError):
    """Raised when the referenced vendor does not exist."""

    code = "vendor_not_found"


class UnknownVendor(VendorNotFound):
    """Raised by the entry store when an entry points at a missing vendor."""

    code = "unknown_vendor"


class InvalidAmount(LedgerServiceError):
    """Raised on non-numeric, zero or negative amounts."""

    code = "invalid_amount"


class InvalidPaymentMethod(LedgerServiceError):
    """Raised when a payment method is not one of the supported modes."""

    code = "invalid_payment_method"


class InvalidEntryType(LedgerServiceError):
    """Raised when an entry type cannot be posted through the requested path."""

    code = "invalid_entry_type"


class OpeningBalanceExists(LedgerServiceError):
    """Raised when an opening balance is posted to a vendor with history."""

    code = "opening_balance_exists"


class InvariantViolation(LedgerServiceError):
    """Raised when a ledger invariant would be broken. Fatal; never retried."""

    code = "invariant_violation"


class AllocationConflict(LedgerServiceError):
    """Raised when a payment number would collide with an existing payment."""

    code = "allocation_conflict"


class LedgerEntryNotFound(LedgerServiceError):
    """Raised when a ledger entry id does not exist."""

    code = "ledger_entry_not_found"

# ledger/services/money.py

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ledger.services.exceptions import InvalidAmount

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")

# Money columns are DecimalField(max_digits=14, decimal_places=2).
MAX_MONEY = Decimal("999999999999.99")


def to_money(value) -> Decimal:
    """
    Parse a user/DB supplied amount into a 2dp Decimal.

    Raises InvalidAmount for None, booleans, NaN/Infinity, anything Decimal
    cannot parse, and magnitudes the money columns cannot store. Sign is
    preserved; callers decide what is allowed.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmount(f"Invalid amount: {value!r}")

    if isinstance(value, Decimal):
        amt = value
    else:
        try:
            amt = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise InvalidAmount(f"Invalid amount: {value!r}") from exc

    if not amt.is_finite():
        raise InvalidAmount(f"Invalid amount: {value!r}")

    # Checked before quantize too: quantize raises on values beyond context precision.
    if abs(amt) > MAX_MONEY or abs(amt.quantize(TWOPLACES, rounding=ROUND_HALF_UP)) > MAX_MONEY:
        raise InvalidAmount(f"Amount out of range (max {MAX_MONEY}): {value!r}")
    return amt.quantize(TWOPLACES, rounding=ROUND_HALF_UP)

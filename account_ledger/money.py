"""
Amount Handling Module

Single-currency Decimal helpers. NEVER uses float for monetary values:
floats coming from callers are converted through their string form.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from typing import Optional, Union

# Set global decimal context for financial precision
getcontext().prec = 28

CENT = Decimal('0.01')
ZERO = Decimal('0.00')

AmountLike = Union[Decimal, int, float, str]


def _to_decimal(value: AmountLike, label: str) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a number")
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Cannot convert '{value}' to Decimal")
    if not value.is_finite():
        raise ValueError(f"{label} must be finite")
    return value


def to_amount(value: AmountLike) -> Decimal:
    """
    Convert a number to a Decimal rounded to cents

    Raises:
        ValueError: If the value is not a finite number, or is too large to
            hold to the cent within the context precision
    """
    value = _to_decimal(value, "Amount")
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount {value} exceeds supported precision")


def to_rate(value: AmountLike) -> Decimal:
    """
    Convert an annual interest rate (percent) to a Decimal

    Rates keep their full precision; only amounts are rounded to cents.

    Raises:
        ValueError: If the value is not a finite number
    """
    return _to_decimal(value, "Interest rate")


def validate_positive(value: AmountLike) -> Optional[Decimal]:
    """
    The validate-then-noop policy for deposits and payments.

    Returns the rounded amount when it is strictly positive, otherwise None.
    Callers treat None as "ignore the request and leave state unchanged".
    Values that are not numbers at all still raise ValueError.
    """
    amount = to_amount(value)
    if amount <= ZERO:
        return None
    return amount

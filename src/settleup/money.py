"""Integer minor-unit (cent) arithmetic. Decimal only at the boundary."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from .errors import InvalidArgument

CENT = Decimal("0.01")
CENTS_PER_UNIT = 100

# Threshold below which a remaining amount counts as settled. In whole cents
# the 0.01-unit tolerance collapses to "exactly zero".
EPSILON = 0


def to_decimal_amount(value: Any) -> Decimal:
    """Coerce a boundary value to Decimal. Floats go through str to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidArgument(f"Not a monetary amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidArgument(f"Not a monetary amount: {value!r}") from e


def to_minor(value: Any) -> int:
    """
    Convert a decimal amount to integer minor units.

    Rounds to two decimals half away from zero, so 0.005 -> 1 and
    -0.005 -> -1.

    Args:
        value: Decimal, int, str or float amount in major units

    Returns:
        Amount in minor units

    Raises:
        InvalidArgument: If the value isn't a finite number or has too many digits
    """
    amount = to_decimal_amount(value)
    if not amount.is_finite():
        raise InvalidArgument(f"Not a finite amount: {value!r}")
    try:
        rounded = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise InvalidArgument(f"Amount out of range: {value!r}") from e

    # Exponent is exactly -2 after quantize, so the digits are the cents
    sign, digits, _ = rounded.as_tuple()
    minor = int("".join(map(str, digits)))
    return -minor if sign else minor


def to_decimal(minor: int) -> Decimal:
    """Convert minor units back to an exact two-decimal Decimal."""
    return (Decimal(minor) / CENTS_PER_UNIT).quantize(CENT)


def format_minor(minor: int) -> str:
    """Render minor units as a plain two-decimal string, e.g. -3333 -> '-33.33'."""
    return str(to_decimal(minor))

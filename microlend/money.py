"""Fixed-point money helpers.

Every currency amount in microlend is a ``Decimal`` quantized to two places
with ROUND_HALF_UP. Floats are accepted at the edges but always go through
``str`` first so binary representation noise never reaches a balance.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a numeric value to ``Decimal`` without float drift.

    Raises
    ------
    ValueError
        If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Cannot convert {value!r} to Decimal") from None
    if not result.is_finite():
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    return result


def quantize_money(value: Decimal | int | float | str) -> Decimal:
    """Round a value to the currency's smallest unit."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Decimal]) -> Decimal:
    """Sum amounts, returning a quantized zero for an empty iterable."""
    return quantize_money(sum(values, ZERO))


def format_money(value: Decimal, symbol: str = "Rs.") -> str:
    """Format an amount for display, e.g. ``Rs. 6,666.67``."""
    amount = quantize_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol} {abs(amount):,.2f}"

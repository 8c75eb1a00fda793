"""
Decimal Money Module

Amounts and rates are carried as raw Decimal throughout the engine and only
rounded for display. NEVER uses float for monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from typing import Any
import re

# Set global decimal context for financial precision
getcontext().prec = 28

ZERO = Decimal('0')
HUNDRED = Decimal('100')
CENT = Decimal('0.01')


def to_decimal(value: Any) -> Decimal:
    """
    Convert a number-like value to Decimal

    Floats go through str() so 0.1 stays 0.1 rather than its binary expansion.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Cannot convert {value!r} to Decimal")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        result = decimal_from_string(value)
    else:
        raise ValueError(f"Cannot convert {value!r} to Decimal")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return result


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, tolerating "$" and thousands separators

    Args:
        value: String representation of number, e.g. "$10,000.50"

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    # Only the currency symbol, thousands separators and whitespace are dropped
    clean_value = re.sub(r"[\s$,]", "", value)

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal")


def round_money(value: Decimal, places: int = 2) -> Decimal:
    """Round to currency precision (half up, as courts round cents)"""
    return value.quantize(Decimal('0.1') ** places, rounding=ROUND_HALF_UP)


def format_money(value: Decimal, places: int = 2) -> str:
    """Format for display, e.g. $1,234.57 or -$12.00"""
    rounded = round_money(value, places)
    sign = "-" if rounded < ZERO else ""
    return f"{sign}${abs(rounded):,.{places}f}"

"""
Helper utilities
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any
import math
import re

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Parse an upstream amount ("12.34", 12.34, None) into a Decimal"""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, float):
        value = repr(value)
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    if not parsed.is_finite():
        return default
    return parsed


def parse_count(value: Any, default: int = 0) -> int:
    """
    Parse an upstream counter the way the Graph API's string counters are
    usually read: leading integer digits win, anything else gives the default.

        parse_count("20")   -> 20
        parse_count("7.0")  -> 7
        parse_count("n/a")  -> 0
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def safe_divide(numerator: Decimal, denominator: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Safely divide two numbers"""
    if not denominator:
        return default
    return Decimal(numerator) / Decimal(denominator)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero"""
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format amount as currency"""
    return f"{symbol} {amount:,.2f}"

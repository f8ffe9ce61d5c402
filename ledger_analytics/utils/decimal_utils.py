"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_decimal(value) -> Decimal | None:
    """Parse a raw amount into a finite Decimal.

    Floats go through their string form so 0.1 stays 0.1.

    Args:
        value: Raw amount (str, int, float, or Decimal).

    Returns:
        Decimal | None: Parsed value, or None when not a finite number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        parsed = coerce_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not parsed.is_finite():
        return None
    return parsed


__all__ = ["coerce_decimal", "parse_decimal"]

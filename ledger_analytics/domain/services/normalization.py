"""Domain normalization helpers."""

from datetime import date, datetime
from decimal import Decimal

from ledger_analytics.domain.constants import (
    DEFAULT_SOURCE,
    MAX_AMOUNT_EXPONENT,
    TransactionType,
)
from ledger_analytics.utils.decimal_utils import parse_decimal


def normalize_amount(amount) -> Decimal | None:
    """Normalize a raw amount.

    Amounts of a quadrillion or more are treated as invalid so one
    record cannot overflow the running totals.

    Args:
        amount: Raw amount value from the store.

    Returns:
        Decimal | None: Non-negative Decimal, or None when invalid.
    """
    parsed = parse_decimal(amount)
    if parsed is None or parsed < 0:
        return None
    if parsed.adjusted() > MAX_AMOUNT_EXPONENT:
        return None
    return parsed


def normalize_date(value) -> date | None:
    """Normalize a raw date to a calendar day.

    Args:
        value: date, datetime, or ISO formatted string.

    Returns:
        date | None: Calendar day, or None when unparseable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(cleaned).date()
    except ValueError:
        return None


def normalize_type(value) -> TransactionType | None:
    """Normalize a raw type value.

    Args:
        value: TransactionType member or its exact string value.

    Returns:
        TransactionType | None: Matching type, or None when unknown.
    """
    if isinstance(value, TransactionType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return TransactionType(value.strip())
    except ValueError:
        return None


def normalize_source(source: str | None) -> str:
    """Normalize payment source values.

    Args:
        source: Raw source value from the store.

    Returns:
        str: Source name, or "Other" when empty.
    """
    if source is None:
        return DEFAULT_SOURCE
    cleaned = str(source).strip()
    return cleaned if cleaned else DEFAULT_SOURCE


def normalize_category(category) -> str:
    """Return the category as a string, keeping its exact spelling."""
    if category is None:
        return ""
    return category if isinstance(category, str) else str(category)


__all__ = [
    "normalize_amount",
    "normalize_date",
    "normalize_type",
    "normalize_source",
    "normalize_category",
]

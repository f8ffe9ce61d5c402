"""Domain services package."""

from .aggregation import aggregate_transactions
from .normalization import (
    normalize_amount,
    normalize_category,
    normalize_date,
    normalize_source,
    normalize_type,
)
from .ranking import normalize_top_categories, rank_categories
from .validation import (
    validate_transaction,
    validate_transactions,
    warn_unknown_category,
)

__all__ = [
    "aggregate_transactions",
    "normalize_amount",
    "normalize_category",
    "normalize_date",
    "normalize_source",
    "normalize_type",
    "normalize_top_categories",
    "rank_categories",
    "validate_transaction",
    "validate_transactions",
    "warn_unknown_category",
]

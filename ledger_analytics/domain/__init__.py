"""Domain package for business rules and core models."""

from .constants import (
    DEFAULT_SOURCE,
    RejectionReason,
    TransactionType,
)
from .models import (
    AggregationOptions,
    AggregationResult,
    RawTransaction,
    RecordRejection,
    Transaction,
)
from .services import aggregate_transactions, validate_transaction

__all__ = [
    "DEFAULT_SOURCE",
    "RejectionReason",
    "TransactionType",
    "AggregationOptions",
    "AggregationResult",
    "RawTransaction",
    "RecordRejection",
    "Transaction",
    "aggregate_transactions",
    "validate_transaction",
]

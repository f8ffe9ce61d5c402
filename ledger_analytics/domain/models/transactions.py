"""Domain models for transaction records."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ledger_analytics.domain.constants import RejectionReason, TransactionType


@dataclass(frozen=True)
class RawTransaction:
    """Transaction row as supplied by the transaction store.

    Field values are kept as read from the store; nothing is parsed until
    validation.

    Attributes:
        id: Opaque unique identifier.
        date: Calendar date, ISO string, or datetime.
        type: Transaction type value (Income, Expense, ...).
        category: Free category label.
        source: Payment method or wallet, may be empty.
        amount: Monetary amount as a string, number, or Decimal.
        description: Optional free text.
    """

    id: object
    date: object
    type: object
    category: object
    source: object
    amount: object
    description: object = None


@dataclass(frozen=True)
class Transaction:
    """Normalized transaction accepted by validation."""

    id: object
    date: date
    type: TransactionType
    category: str
    source: str
    amount: Decimal
    description: str | None = None

    @property
    def month_key(self) -> str:
        """Return the "YYYY-MM" bucket key."""
        return f"{self.date.year:04d}-{self.date.month:02d}"

    @property
    def weekday_index(self) -> int:
        """Return the day of week with Sunday as 0."""
        return (self.date.weekday() + 1) % 7


@dataclass(frozen=True)
class RecordRejection:
    """Diagnostic entry for a record excluded by validation.

    Attributes:
        index: Position of the record in the input snapshot.
        record_id: Identifier of the record when one was readable.
        reason: Rejection reason.
        detail: Offending raw value, for display.
    """

    index: int
    record_id: object
    reason: RejectionReason
    detail: str = ""


__all__ = ["RawTransaction", "Transaction", "RecordRejection"]

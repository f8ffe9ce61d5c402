"""Domain validation helpers."""

from collections.abc import Iterable, Mapping
from logging import Logger

from ledger_analytics.domain.constants import (
    CATEGORIES_BY_TYPE,
    RejectionReason,
    TransactionType,
)
from ledger_analytics.domain.models import (
    RawTransaction,
    RecordRejection,
    Transaction,
)
from ledger_analytics.domain.services.normalization import (
    normalize_amount,
    normalize_category,
    normalize_date,
    normalize_source,
    normalize_type,
)


def _read_field(record, name: str):
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def validate_transaction(
    record: RawTransaction | Mapping,
    index: int = 0,
) -> Transaction | RecordRejection:
    """Validate and normalize a single raw record.

    Amount is checked first, then date, then type; the first failure is
    the reported reason. The record itself is never modified.

    Args:
        record: Raw record, as a RawTransaction or a mapping of fields.
        index: Position of the record in its snapshot.

    Returns:
        Transaction | RecordRejection: Normalized record or rejection.
    """
    record_id = _read_field(record, "id")

    raw_amount = _read_field(record, "amount")
    amount = normalize_amount(raw_amount)
    if amount is None:
        return RecordRejection(
            index=index,
            record_id=record_id,
            reason=RejectionReason.INVALID_AMOUNT,
            detail=repr(raw_amount),
        )

    raw_date = _read_field(record, "date")
    day = normalize_date(raw_date)
    if day is None:
        return RecordRejection(
            index=index,
            record_id=record_id,
            reason=RejectionReason.INVALID_DATE,
            detail=repr(raw_date),
        )

    raw_type = _read_field(record, "type")
    transaction_type = normalize_type(raw_type)
    if transaction_type is None:
        return RecordRejection(
            index=index,
            record_id=record_id,
            reason=RejectionReason.UNKNOWN_TYPE,
            detail=repr(raw_type),
        )

    description = _read_field(record, "description")
    return Transaction(
        id=record_id,
        date=day,
        type=transaction_type,
        category=normalize_category(_read_field(record, "category")),
        source=normalize_source(_read_field(record, "source")),
        amount=amount,
        description=None if description is None else str(description),
    )


def validate_transactions(
    records: Iterable[RawTransaction | Mapping],
) -> tuple[list[Transaction], list[RecordRejection]]:
    """Split a snapshot into accepted records and diagnostics.

    Args:
        records: Raw records from the transaction store.

    Returns:
        tuple: Accepted records and rejections, both in input order.

    Raises:
        TypeError: If records is not iterable.
    """
    accepted: list[Transaction] = []
    rejected: list[RecordRejection] = []
    for index, record in enumerate(records):
        outcome = validate_transaction(record, index)
        if isinstance(outcome, RecordRejection):
            rejected.append(outcome)
        else:
            accepted.append(outcome)
    return accepted, rejected


def warn_unknown_category(
    transaction_type: TransactionType,
    category: str,
    logger: Logger,
) -> None:
    """Log categories outside the known catalogue for their type.

    Args:
        transaction_type: Type of the record.
        category: Category label as recorded.
        logger: Logger used for debug output.
    """
    known = CATEGORIES_BY_TYPE.get(transaction_type, ())
    if category not in known:
        logger.debug(
            f"Unrecognized category for type={transaction_type.value}: "
            f"{category!r}"
        )


__all__ = [
    "validate_transaction",
    "validate_transactions",
    "warn_unknown_category",
]

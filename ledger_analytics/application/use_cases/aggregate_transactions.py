"""Use case to compute every dashboard view from the transaction store."""

from dataclasses import replace
from datetime import date

from ledger_analytics.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from ledger_analytics.domain.models import (
    AggregationOptions,
    AggregationResult,
)
from ledger_analytics.domain.services.aggregation import (
    aggregate_transactions,
)
from ledger_analytics.infrastructure.logging.logger import get_app_logger


class AggregateTransactionsUseCase:
    """Fetch a fresh snapshot and aggregate it into views."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        logger=None,
        options: AggregationOptions | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            transactions_repository: Port listing raw transaction records.
            logger: Optional logger compatible with logging.Logger-like API.
            options: Default engine options (window, buckets, radar size).
        """
        self._transactions_repository = transactions_repository
        self._logger = logger or get_app_logger()
        self._options = options or AggregationOptions()

    def execute(
        self,
        now: date,
        start_date: date | None = None,
        end_date: date | None = None,
        category: str | None = None,
    ) -> AggregationResult:
        """Return all views for the records visible right now.

        Args:
            now: Evaluation day for the trailing daily trend.
            start_date: Optional lower bound for record dates.
            end_date: Optional upper bound for record dates.
            category: Optional category every view is restricted to.

        Returns:
            AggregationResult: Views and per-record diagnostics.
        """
        # The whole snapshot is validated; the engine applies the period.
        records = self._transactions_repository.fetch_transactions()
        self._logger.info(f"Fetched {len(records)} transaction records")
        options = replace(
            self._options,
            start_date=start_date,
            end_date=end_date,
            category=category,
        )
        result = aggregate_transactions(
            records,
            now,
            options,
            logger=self._logger,
        )
        if result.diagnostics:
            self._logger.warning(
                f"{result.rejected_count} records skipped during aggregation"
            )
        return result


__all__ = ["AggregateTransactionsUseCase", "AggregationResult"]

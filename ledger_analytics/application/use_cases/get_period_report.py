"""Use case to compute the figures behind weekly and monthly reports."""

from dataclasses import dataclass
from datetime import date, timedelta

from ledger_analytics.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from ledger_analytics.domain.models import (
    AggregationOptions,
    MonthlyPoint,
    RecordRejection,
    Totals,
)
from ledger_analytics.domain.services.aggregation import (
    aggregate_transactions,
)
from ledger_analytics.infrastructure.logging.logger import get_app_logger

WEEKLY = "weekly"
MONTHLY = "monthly"


@dataclass(frozen=True)
class PeriodReport:
    """Totals and monthly series for a report period.

    Attributes:
        start_date: First day included.
        end_date: Last day included.
        totals: Running totals over the period.
        monthly_series: Months touched by the period, ascending.
        diagnostics: Records skipped by validation.
    """

    start_date: date
    end_date: date
    totals: Totals
    monthly_series: tuple[MonthlyPoint, ...]
    diagnostics: tuple[RecordRejection, ...]


def resolve_report_period(period: str, today: date) -> tuple[date, date]:
    """Return the inclusive bounds of a named report period.

    Args:
        period: "weekly" (7 days ending today) or "monthly" (month to
            date).
        today: Last day of the period.

    Returns:
        tuple[date, date]: Start and end dates.

    Raises:
        ValueError: If the period name is unknown.
    """
    normalized = period.strip().lower()
    if normalized == WEEKLY:
        return today - timedelta(days=6), today
    if normalized == MONTHLY:
        return date(today.year, today.month, 1), today
    raise ValueError(f"Unknown report period: {period}")


class GetPeriodReportUseCase:
    """Compute totals and monthly series restricted to a date range."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            transactions_repository: Port listing raw transaction records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._transactions_repository = transactions_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        start_date: date,
        end_date: date,
    ) -> PeriodReport:
        """Return the report figures for explicit bounds.

        Args:
            start_date: First day included.
            end_date: Last day included.

        Returns:
            PeriodReport: Totals, monthly series, and diagnostics.
        """
        # The whole snapshot is validated; the engine applies the period.
        records = self._transactions_repository.fetch_transactions()
        result = aggregate_transactions(
            records,
            end_date,
            AggregationOptions(start_date=start_date, end_date=end_date),
            logger=self._logger,
        )
        self._logger.info(
            f"Report totals for {start_date}..{end_date}: "
            f"net={result.totals.net_balance}"
        )
        return PeriodReport(
            start_date=start_date,
            end_date=end_date,
            totals=result.totals,
            monthly_series=result.monthly_series,
            diagnostics=result.diagnostics,
        )

    def execute_named(self, period: str, today: date) -> PeriodReport:
        """Return the report figures for "weekly" or "monthly"."""
        start_date, end_date = resolve_report_period(period, today)
        return self.execute(start_date, end_date)


__all__ = [
    "GetPeriodReportUseCase",
    "PeriodReport",
    "resolve_report_period",
]

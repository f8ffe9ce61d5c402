"""Application use cases package."""

from .aggregate_transactions import (
    AggregateTransactionsUseCase,
    AggregationResult,
)
from .get_period_report import (
    GetPeriodReportUseCase,
    PeriodReport,
    resolve_report_period,
)

__all__ = [
    "AggregateTransactionsUseCase",
    "AggregationResult",
    "GetPeriodReportUseCase",
    "PeriodReport",
    "resolve_report_period",
]

"""Domain models package."""

from .transactions import RawTransaction, RecordRejection, Transaction
from .views import (
    AggregationOptions,
    AggregationResult,
    CategoryAmount,
    DailyTrendPoint,
    MonthlyPoint,
    RadarPoint,
    SourceFlowEntry,
    Totals,
    TypeAmount,
    TypeSummary,
    WeekdayBucket,
)

__all__ = [
    "RawTransaction",
    "Transaction",
    "RecordRejection",
    "AggregationOptions",
    "AggregationResult",
    "Totals",
    "MonthlyPoint",
    "CategoryAmount",
    "SourceFlowEntry",
    "DailyTrendPoint",
    "WeekdayBucket",
    "TypeAmount",
    "RadarPoint",
    "TypeSummary",
]

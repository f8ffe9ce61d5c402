"""Domain models for aggregated transaction views."""

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType

from ledger_analytics.domain.constants import (
    DEFAULT_MAX_TREND_BUCKETS,
    DEFAULT_RADAR_TOP_N,
    DEFAULT_WINDOW_DAYS,
    RejectionReason,
    TransactionType,
)
from ledger_analytics.domain.models.transactions import RecordRejection


@dataclass(frozen=True)
class AggregationOptions:
    """Tuning knobs for the windowed and top-N views.

    Attributes:
        window_days: Trailing window of the daily trend, in days.
        max_trend_buckets: Most recent daily buckets kept.
        radar_top_n: Categories kept in each radar view.
        start_date: Optional inclusive lower bound on record dates.
        end_date: Optional inclusive upper bound on record dates.
        category: Optional exact category; other records are left out.
    """

    window_days: int = DEFAULT_WINDOW_DAYS
    max_trend_buckets: int = DEFAULT_MAX_TREND_BUCKETS
    radar_top_n: int = DEFAULT_RADAR_TOP_N
    start_date: date | None = None
    end_date: date | None = None
    category: str | None = None

    def __post_init__(self) -> None:
        for name in ("window_days", "max_trend_buckets", "radar_top_n"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.start_date > self.end_date
        ):
            raise ValueError(
                f"start_date {self.start_date} is after end_date {self.end_date}"
            )
        if self.category is not None and not isinstance(self.category, str):
            raise ValueError(
                f"category must be a string, got {self.category!r}"
            )

    def includes(self, day: date) -> bool:
        """Return True when the day falls inside the optional period."""
        if self.start_date is not None and day < self.start_date:
            return False
        if self.end_date is not None and day > self.end_date:
            return False
        return True

    def matches_category(self, category: str) -> bool:
        """Return True when no category filter is set or it matches."""
        return self.category is None or category == self.category


@dataclass(frozen=True)
class Totals:
    """Running totals across the accepted records."""

    total_income: Decimal
    total_expense: Decimal
    total_investment: Decimal

    @property
    def net_balance(self) -> Decimal:
        """Return total_income minus total_expense."""
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class MonthlyPoint:
    """Per-month amounts keyed by "YYYY-MM"."""

    month: str
    income: Decimal
    expense: Decimal
    investment: Decimal

    @property
    def net(self) -> Decimal:
        """Return income minus expense for the month."""
        return self.income - self.expense


@dataclass(frozen=True)
class CategoryAmount:
    """Amount aggregated for a single category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class SourceFlowEntry:
    """Income and expense flowing through one payment source."""

    source: str
    inflow: Decimal
    outflow: Decimal

    @property
    def balance(self) -> Decimal:
        """Return inflow minus outflow, possibly negative."""
        return self.inflow - self.outflow

    @property
    def total(self) -> Decimal:
        """Return inflow plus outflow."""
        return self.inflow + self.outflow


@dataclass(frozen=True)
class DailyTrendPoint:
    """Income and expense for one calendar day of the trailing window."""

    date: date
    income: Decimal
    expense: Decimal

    @property
    def day(self) -> str:
        """Return the "MM-DD" chart label."""
        return f"{self.date.month:02d}-{self.date.day:02d}"


@dataclass(frozen=True)
class WeekdayBucket:
    """Expense profile for one day of the week."""

    day: str
    total_expense: Decimal
    count: int

    @property
    def average(self) -> Decimal:
        """Return the mean expense, or zero for an empty bucket."""
        if self.count == 0:
            return Decimal("0")
        return self.total_expense / self.count


@dataclass(frozen=True)
class TypeAmount:
    """Total amount for one transaction type."""

    type: TransactionType
    amount: Decimal


@dataclass(frozen=True)
class RadarPoint:
    """Category amount rescaled to a 0-100 share of the largest one."""

    category: str
    value: int


@dataclass(frozen=True)
class TypeSummary:
    """Headline figures for one transaction type."""

    type: TransactionType
    total: Decimal
    count: int
    top_category: str | None

    @property
    def average(self) -> Decimal:
        """Return the mean amount per record, or zero when empty."""
        if self.count == 0:
            return Decimal("0")
        return self.total / self.count


@dataclass(frozen=True)
class AggregationResult:
    """Every view derived from one snapshot, plus validation diagnostics."""

    totals: Totals
    monthly_series: tuple[MonthlyPoint, ...]
    distribution_by_type: tuple[TypeAmount, ...]
    source_flow: tuple[SourceFlowEntry, ...]
    daily_trend: tuple[DailyTrendPoint, ...]
    weekday_pattern: tuple[WeekdayBucket, ...]
    diagnostics: tuple[RecordRejection, ...]
    category_breakdowns: Mapping[TransactionType, tuple[CategoryAmount, ...]] = (
        field(default_factory=dict)
    )
    radars: Mapping[TransactionType, tuple[RadarPoint, ...]] = field(
        default_factory=dict
    )
    type_summaries: Mapping[TransactionType, TypeSummary] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        # Keyed views are exposed read-only, like the rest of the result.
        for name in ("category_breakdowns", "radars", "type_summaries"):
            value = getattr(self, name)
            object.__setattr__(self, name, MappingProxyType(dict(value)))

    def breakdown_by_type(
        self,
        transaction_type: TransactionType | str,
    ) -> tuple[CategoryAmount, ...]:
        """Return categories for a type, largest amount first."""
        return self.category_breakdowns.get(
            TransactionType(transaction_type), ()
        )

    def radar(
        self,
        transaction_type: TransactionType | str,
        top_n: int | None = None,
    ) -> tuple[RadarPoint, ...]:
        """Return the normalized top categories for a type.

        Args:
            transaction_type: Type whose categories are ranked.
            top_n: Categories to keep. None uses the count the result
                was aggregated with.

        Returns:
            tuple[RadarPoint, ...]: Up to top_n points scaled to 0-100.
        """
        resolved = TransactionType(transaction_type)
        if top_n is None:
            return self.radars.get(resolved, ())
        if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 0:
            raise ValueError(
                f"top_n must be a non-negative integer, got {top_n!r}"
            )
        from ledger_analytics.domain.services.ranking import (
            normalize_top_categories,
        )

        return tuple(
            normalize_top_categories(self.breakdown_by_type(resolved), top_n)
        )

    def summary_by_type(
        self,
        transaction_type: TransactionType | str,
    ) -> TypeSummary:
        """Return headline figures for a type."""
        resolved = TransactionType(transaction_type)
        summary = self.type_summaries.get(resolved)
        if summary is None:
            return TypeSummary(
                type=resolved,
                total=Decimal("0"),
                count=0,
                top_category=None,
            )
        return summary

    def amount_for_type(
        self,
        transaction_type: TransactionType | str,
    ) -> Decimal:
        """Return the distribution amount for a type, zero when absent."""
        resolved = TransactionType(transaction_type)
        for entry in self.distribution_by_type:
            if entry.type is resolved:
                return entry.amount
        return Decimal("0")

    @property
    def rejected_count(self) -> int:
        """Return how many records validation excluded."""
        return len(self.diagnostics)

    def rejection_counts(self) -> dict[RejectionReason, int]:
        """Return rejection counts per reason."""
        return dict(Counter(item.reason for item in self.diagnostics))


__all__ = [
    "AggregationOptions",
    "Totals",
    "MonthlyPoint",
    "CategoryAmount",
    "SourceFlowEntry",
    "DailyTrendPoint",
    "WeekdayBucket",
    "TypeAmount",
    "RadarPoint",
    "TypeSummary",
    "AggregationResult",
]

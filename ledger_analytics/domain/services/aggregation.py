"""Domain services for transaction aggregates.

All views are filled from one traversal of the accepted records, each by its
own accumulator, and ordered only when emitted.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta
from decimal import Decimal
from logging import Logger

from ledger_analytics.domain.constants import (
    WEEKDAY_LABELS,
    TransactionType,
)
from ledger_analytics.domain.models import (
    AggregationOptions,
    AggregationResult,
    CategoryAmount,
    DailyTrendPoint,
    MonthlyPoint,
    RawTransaction,
    SourceFlowEntry,
    Totals,
    Transaction,
    TypeAmount,
    TypeSummary,
    WeekdayBucket,
)
from ledger_analytics.domain.services.ranking import (
    normalize_top_categories,
    rank_categories,
)
from ledger_analytics.domain.services.validation import (
    validate_transactions,
    warn_unknown_category,
)

_ZERO = Decimal("0")


class _Accumulators:
    """Independent accumulators filled by a single pass."""

    def __init__(self, window_start: date, window_end: date) -> None:
        self.window_start = window_start
        self.window_end = window_end
        self.type_totals: dict[TransactionType, Decimal] = {
            transaction_type: _ZERO for transaction_type in TransactionType
        }
        self.type_counts: dict[TransactionType, int] = {
            transaction_type: 0 for transaction_type in TransactionType
        }
        self.months: dict[str, dict[TransactionType, Decimal]] = {}
        self.categories: dict[TransactionType, dict[str, Decimal]] = {
            transaction_type: {} for transaction_type in TransactionType
        }
        self.sources: dict[str, list[Decimal]] = {}
        self.days: dict[date, list[Decimal]] = {}
        self.weekday_totals = [_ZERO] * len(WEEKDAY_LABELS)
        self.weekday_counts = [0] * len(WEEKDAY_LABELS)

    def add(self, txn: Transaction) -> None:
        kind = txn.type
        amount = txn.amount

        self.type_totals[kind] += amount
        self.type_counts[kind] += 1

        month = self.months.setdefault(
            txn.month_key,
            {transaction_type: _ZERO for transaction_type in TransactionType},
        )
        month[kind] += amount

        per_category = self.categories[kind]
        per_category[txn.category] = (
            per_category.get(txn.category, _ZERO) + amount
        )

        # inflow, outflow
        flow = self.sources.setdefault(txn.source, [_ZERO, _ZERO])
        if kind is TransactionType.INCOME:
            flow[0] += amount
        elif kind is TransactionType.EXPENSE:
            flow[1] += amount

        if self.window_start <= txn.date <= self.window_end:
            # income, expense
            bucket = self.days.setdefault(txn.date, [_ZERO, _ZERO])
            if kind is TransactionType.INCOME:
                bucket[0] += amount
            elif kind is TransactionType.EXPENSE:
                bucket[1] += amount

        if kind is TransactionType.EXPENSE:
            weekday = txn.weekday_index
            self.weekday_totals[weekday] += amount
            self.weekday_counts[weekday] += 1


def compute_totals(type_totals: Mapping[TransactionType, Decimal]) -> Totals:
    """Build running totals from per-type sums."""
    return Totals(
        total_income=type_totals.get(TransactionType.INCOME, _ZERO),
        total_expense=type_totals.get(TransactionType.EXPENSE, _ZERO),
        total_investment=type_totals.get(TransactionType.INVESTMENT, _ZERO),
    )


def build_monthly_series(
    months: Mapping[str, Mapping[TransactionType, Decimal]],
) -> list[MonthlyPoint]:
    """Emit monthly points ascending by "YYYY-MM" key."""
    return [
        MonthlyPoint(
            month=month,
            income=amounts[TransactionType.INCOME],
            expense=amounts[TransactionType.EXPENSE],
            investment=amounts[TransactionType.INVESTMENT],
        )
        for month, amounts in sorted(months.items())
    ]


def build_type_distribution(
    type_totals: Mapping[TransactionType, Decimal],
) -> list[TypeAmount]:
    """Emit positive per-type totals in enumeration order."""
    return [
        TypeAmount(type=transaction_type, amount=type_totals[transaction_type])
        for transaction_type in TransactionType
        if type_totals.get(transaction_type, _ZERO) > 0
    ]


def build_source_flow(
    sources: Mapping[str, list[Decimal]],
) -> list[SourceFlowEntry]:
    """Emit sources by total flow descending, ties by name.

    Sources with neither inflow nor outflow are dropped.
    """
    entries = [
        SourceFlowEntry(source=source, inflow=inflow, outflow=outflow)
        for source, (inflow, outflow) in sources.items()
        if inflow != 0 or outflow != 0
    ]
    return sorted(entries, key=lambda entry: (-entry.total, entry.source))


def build_daily_trend(
    days: Mapping[date, list[Decimal]],
    max_buckets: int,
) -> list[DailyTrendPoint]:
    """Emit existing day buckets ascending, keeping the most recent ones.

    Days without records have no bucket; nothing is zero-filled.
    """
    if max_buckets <= 0:
        return []
    points = [
        DailyTrendPoint(date=day, income=income, expense=expense)
        for day, (income, expense) in sorted(days.items())
    ]
    return points[-max_buckets:]


def build_weekday_pattern(
    totals: list[Decimal],
    counts: list[int],
) -> list[WeekdayBucket]:
    """Emit all seven weekday buckets, Sunday first."""
    return [
        WeekdayBucket(
            day=label,
            total_expense=totals[index],
            count=counts[index],
        )
        for index, label in enumerate(WEEKDAY_LABELS)
    ]


def build_type_summaries(
    type_totals: Mapping[TransactionType, Decimal],
    type_counts: Mapping[TransactionType, int],
    breakdowns: Mapping[TransactionType, list[CategoryAmount]],
) -> dict[TransactionType, TypeSummary]:
    """Build headline figures per type."""
    summaries: dict[TransactionType, TypeSummary] = {}
    for transaction_type in TransactionType:
        breakdown = breakdowns.get(transaction_type, [])
        summaries[transaction_type] = TypeSummary(
            type=transaction_type,
            total=type_totals.get(transaction_type, _ZERO),
            count=type_counts.get(transaction_type, 0),
            top_category=breakdown[0].category if breakdown else None,
        )
    return summaries


def aggregate_transactions(
    records: Iterable[RawTransaction | Mapping],
    now: date,
    options: AggregationOptions | None = None,
    *,
    logger: Logger | None = None,
) -> AggregationResult:
    """Compute every view from a snapshot of raw records.

    Invalid records are excluded and reported in diagnostics; the call
    never fails because of record contents.

    Args:
        records: Snapshot of raw records from the transaction store.
        now: Evaluation day anchoring the trailing daily window.
        options: Window, bucket, radar, and period settings.
        logger: Logger used for diagnostics output.

    Returns:
        AggregationResult: Freshly built views and diagnostics.

    Raises:
        TypeError: If records is not iterable.
    """
    resolved = options or AggregationOptions()
    log = logger or logging.getLogger(__name__)
    today = now.date() if isinstance(now, datetime) else now

    accepted, rejected = validate_transactions(records)
    if rejected:
        counts: dict[str, int] = {}
        for item in rejected:
            counts[item.reason.value] = counts.get(item.reason.value, 0) + 1
        summary = ", ".join(
            f"{reason}={count}" for reason, count in sorted(counts.items())
        )
        log.warning(f"Skipped {len(rejected)} invalid records: {summary}")

    accumulators = _Accumulators(
        window_start=today - timedelta(days=resolved.window_days - 1),
        window_end=today,
    )
    for txn in accepted:
        if not resolved.includes(txn.date):
            continue
        if not resolved.matches_category(txn.category):
            continue
        warn_unknown_category(txn.type, txn.category, log)
        accumulators.add(txn)

    breakdowns = {
        transaction_type: rank_categories(
            accumulators.categories[transaction_type]
        )
        for transaction_type in TransactionType
    }
    radars = {
        transaction_type: tuple(
            normalize_top_categories(breakdown, resolved.radar_top_n)
        )
        for transaction_type, breakdown in breakdowns.items()
    }
    totals = compute_totals(accumulators.type_totals)
    log.info(
        f"Aggregated {len(accepted)} records: income={totals.total_income}, "
        f"expense={totals.total_expense}, "
        f"investment={totals.total_investment}"
    )

    return AggregationResult(
        totals=totals,
        monthly_series=tuple(build_monthly_series(accumulators.months)),
        distribution_by_type=tuple(
            build_type_distribution(accumulators.type_totals)
        ),
        source_flow=tuple(build_source_flow(accumulators.sources)),
        daily_trend=tuple(
            build_daily_trend(accumulators.days, resolved.max_trend_buckets)
        ),
        weekday_pattern=tuple(
            build_weekday_pattern(
                accumulators.weekday_totals,
                accumulators.weekday_counts,
            )
        ),
        diagnostics=tuple(rejected),
        category_breakdowns={
            transaction_type: tuple(breakdown)
            for transaction_type, breakdown in breakdowns.items()
        },
        radars=radars,
        type_summaries=build_type_summaries(
            accumulators.type_totals,
            accumulators.type_counts,
            breakdowns,
        ),
    )


__all__ = [
    "aggregate_transactions",
    "compute_totals",
    "build_monthly_series",
    "build_type_distribution",
    "build_source_flow",
    "build_daily_trend",
    "build_weekday_pattern",
    "build_type_summaries",
]

"""Tests for the single-pass aggregation engine."""

from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from ledger_analytics.domain.constants import RejectionReason, TransactionType
from ledger_analytics.domain.models import AggregationOptions, RawTransaction
from ledger_analytics.domain.services.aggregation import (
    aggregate_transactions,
    build_daily_trend,
)


def _record(
    day: str,
    kind: str,
    category: str,
    amount,
    source: str | None = "Cash",
    record_id: str = "t",
) -> dict:
    return {
        "id": record_id,
        "date": day,
        "type": kind,
        "category": category,
        "source": source,
        "amount": amount,
    }


def _mixed_records() -> list:
    return [
        _record("2025-01-10", "Income", "Salary", "1000.50", "Banque Misr"),
        _record("2025-01-12", "Expense", "Food", "120.25", "Cash"),
        _record("2025-01-15", "Expense", "Rent", "400", "Banque Misr"),
        _record("2025-02-01", "Expense", "Food", "79.75", None),
        _record("2025-02-03", "Investment", "Gold", "250", "Cash"),
        _record("2025-02-05", "Transfer", "Transfer", "60", "InstaPay"),
        _record("2025-02-07", "Income", "Bonus", "300", ""),
        _record("2025-03-02", "Expense", "Transport", "15.10", "Cash"),
        _record("2025-03-03", "Expense", "Food", "30", "Vodafone Cash"),
        _record("2025-03-03", "Expense", "Books", "0", "Cash"),
        _record("2025-03-04", "Expense", "Food", "-5", "Cash"),
        _record("2025-03-04", "Refund", "Other", "5", "Cash"),
        _record("not-a-date", "Income", "Gift", "5", "Cash"),
    ]


def test_scenario_totals_and_monthly_series() -> None:
    """Totals and monthly series should match the worked example."""
    records = [
        _record("2025-01-10", "Income", "Salary", 1000),
        _record("2025-01-15", "Expense", "Food", 200),
        _record("2025-02-01", "Expense", "Food", 100),
    ]

    result = aggregate_transactions(records, date(2025, 2, 10))

    assert result.totals.total_income == Decimal("1000")
    assert result.totals.total_expense == Decimal("300")
    assert result.totals.total_investment == Decimal("0")
    assert result.totals.net_balance == Decimal("700")
    assert [
        (point.month, point.income, point.expense, point.net)
        for point in result.monthly_series
    ] == [
        ("2025-01", Decimal("1000"), Decimal("200"), Decimal("800")),
        ("2025-02", Decimal("0"), Decimal("100"), Decimal("-100")),
    ]
    assert result.diagnostics == ()


def test_empty_snapshot_yields_zero_views() -> None:
    """An empty snapshot should produce zeroed or empty views."""
    result = aggregate_transactions([], date(2025, 1, 1))

    assert result.totals.total_income == 0
    assert result.totals.total_expense == 0
    assert result.totals.total_investment == 0
    assert result.totals.net_balance == 0
    assert result.monthly_series == ()
    assert result.distribution_by_type == ()
    assert result.source_flow == ()
    assert result.daily_trend == ()
    assert len(result.weekday_pattern) == 7
    assert all(bucket.count == 0 for bucket in result.weekday_pattern)
    assert all(bucket.average == 0 for bucket in result.weekday_pattern)
    for transaction_type in TransactionType:
        assert result.breakdown_by_type(transaction_type) == ()
        assert result.radar(transaction_type) == ()
        assert result.summary_by_type(transaction_type).top_category is None
    assert result.diagnostics == ()


def test_invalid_amount_is_reported_not_raised() -> None:
    """A non-numeric amount should be rejected and leave totals at zero."""
    records = [_record("2025-01-10", "Income", "Salary", "abc")]

    result = aggregate_transactions(records, date(2025, 1, 10))

    assert [item.reason for item in result.diagnostics] == [
        RejectionReason.INVALID_AMOUNT,
    ]
    assert result.rejected_count == 1
    assert result.totals.total_income == 0
    assert result.totals.net_balance == 0
    assert result.monthly_series == ()


def test_huge_amounts_are_rejected_without_overflow() -> None:
    """Amounts too large to sum safely become diagnostics."""
    records = [
        _record("2025-01-10", "Expense", "Food", "9e999999", record_id="a"),
        _record("2025-01-11", "Expense", "Food", "9e999999", record_id="b"),
        _record("2025-01-12", "Expense", "Food", "12.5", record_id="c"),
    ]

    result = aggregate_transactions(records, date(2025, 1, 12))

    assert [item.record_id for item in result.diagnostics] == ["a", "b"]
    assert result.rejection_counts() == {RejectionReason.INVALID_AMOUNT: 2}
    assert result.totals.total_expense == Decimal("12.5")
    assert [point.expense for point in result.monthly_series] == [
        Decimal("12.5")
    ]


def test_radar_rescales_top_categories() -> None:
    """Radar values should be percentages of the largest category."""
    records = [
        _record("2025-01-10", "Expense", "A", 300),
        _record("2025-01-11", "Expense", "B", 100),
    ]

    result = aggregate_transactions(
        records,
        date(2025, 1, 11),
        AggregationOptions(radar_top_n=2),
    )

    assert [
        (point.category, point.value)
        for point in result.radar(TransactionType.EXPENSE)
    ] == [("A", 100), ("B", 33)]


def test_radar_keeps_only_top_n() -> None:
    """Radar should keep the leading categories only."""
    records = [
        _record("2025-01-10", "Expense", name, amount)
        for name, amount in [("A", 50), ("B", 40), ("C", 30), ("D", 20)]
    ]

    result = aggregate_transactions(
        records,
        date(2025, 1, 10),
        AggregationOptions(radar_top_n=3),
    )

    assert [point.category for point in result.radar("Expense")] == [
        "A",
        "B",
        "C",
    ]
    assert [point.value for point in result.radar("Expense")] == [100, 80, 60]


def test_radar_accepts_a_different_top_n() -> None:
    """An explicit top_n re-ranks from the full breakdown."""
    records = [
        _record("2025-01-10", "Expense", name, amount)
        for name, amount in [("A", 50), ("B", 40), ("C", 30), ("D", 20)]
    ]

    result = aggregate_transactions(
        records,
        date(2025, 1, 10),
        AggregationOptions(radar_top_n=2),
    )

    assert [point.category for point in result.radar("Expense")] == ["A", "B"]
    assert [
        (point.category, point.value)
        for point in result.radar("Expense", top_n=4)
    ] == [("A", 100), ("B", 80), ("C", 60), ("D", 40)]
    assert result.radar("Expense", top_n=0) == ()
    assert result.radar("Income", top_n=3) == ()
    with pytest.raises(ValueError):
        result.radar("Expense", top_n=-1)


def test_cross_view_sums_are_consistent() -> None:
    """Breakdowns, months, sources, and weekdays should agree with totals."""
    result = aggregate_transactions(_mixed_records(), date(2025, 3, 5))

    for transaction_type in TransactionType:
        breakdown_sum = sum(
            (item.amount for item in result.breakdown_by_type(transaction_type)),
            Decimal("0"),
        )
        assert breakdown_sum == result.amount_for_type(transaction_type)

    assert sum(
        (point.income for point in result.monthly_series), Decimal("0")
    ) == result.totals.total_income
    assert sum(
        (point.expense for point in result.monthly_series), Decimal("0")
    ) == result.totals.total_expense
    assert sum(
        (point.investment for point in result.monthly_series), Decimal("0")
    ) == result.totals.total_investment
    assert sum(
        (entry.inflow for entry in result.source_flow), Decimal("0")
    ) == result.totals.total_income
    assert sum(
        (entry.outflow for entry in result.source_flow), Decimal("0")
    ) == result.totals.total_expense
    assert result.totals.net_balance == (
        result.totals.total_income - result.totals.total_expense
    )

    expense_records = result.summary_by_type(TransactionType.EXPENSE).count
    assert sum(bucket.count for bucket in result.weekday_pattern) == (
        expense_records
    )
    assert expense_records == 6


def test_rejections_cover_each_reason() -> None:
    """Negative amounts, bad dates, and unknown types should be reported."""
    result = aggregate_transactions(_mixed_records(), date(2025, 3, 5))

    assert result.rejection_counts() == {
        RejectionReason.INVALID_AMOUNT: 1,
        RejectionReason.UNKNOWN_TYPE: 1,
        RejectionReason.INVALID_DATE: 1,
    }
    assert [item.index for item in result.diagnostics] == [10, 11, 12]


def test_distribution_and_breakdown_ordering() -> None:
    """Distribution follows type order; breakdown is value then name."""
    records = [
        _record("2025-01-01", "Expense", "Food", 50),
        _record("2025-01-02", "Expense", "Bills", 50),
        _record("2025-01-03", "Expense", "Rent", 70),
        _record("2025-01-03", "Expense", "food", 10),
        _record("2025-01-04", "Transfer", "Transfer", 5),
        _record("2025-01-05", "Income", "Salary", 80),
    ]

    result = aggregate_transactions(records, date(2025, 1, 5))

    assert [item.type for item in result.distribution_by_type] == [
        TransactionType.INCOME,
        TransactionType.EXPENSE,
        TransactionType.TRANSFER,
    ]
    assert [
        (item.category, item.amount)
        for item in result.breakdown_by_type("Expense")
    ] == [
        ("Rent", Decimal("70")),
        ("Bills", Decimal("50")),
        ("Food", Decimal("50")),
        ("food", Decimal("10")),
    ]


def test_source_flow_excludes_silent_sources_and_orders_by_total() -> None:
    """Sources without income or expense are excluded."""
    result = aggregate_transactions(_mixed_records(), date(2025, 3, 5))

    flows = {entry.source: entry for entry in result.source_flow}

    assert "InstaPay" not in flows
    assert [entry.source for entry in result.source_flow] == [
        "Banque Misr",
        "Other",
        "Cash",
        "Vodafone Cash",
    ]
    assert flows["Banque Misr"].balance == Decimal("600.50")
    assert flows["Other"].inflow == Decimal("300")
    assert flows["Other"].outflow == Decimal("79.75")
    assert flows["Cash"].balance == Decimal("-135.35")


def test_daily_trend_uses_trailing_window_without_zero_fill() -> None:
    """Only days with records inside the window become buckets."""
    records = [
        _record("2025-01-01", "Expense", "Food", 10),
        _record("2025-01-20", "Income", "Salary", 500),
        _record("2025-01-20", "Expense", "Food", 20),
        _record("2025-01-25", "Investment", "Gold", 70),
        _record("2025-02-05", "Expense", "Bills", 40),
        _record("2025-02-06", "Expense", "Bills", 99),
    ]

    result = aggregate_transactions(
        records,
        datetime(2025, 2, 5, 18, 30),
        AggregationOptions(window_days=30),
    )

    assert [
        (point.day, point.income, point.expense)
        for point in result.daily_trend
    ] == [
        ("01-20", Decimal("500"), Decimal("20")),
        ("01-25", Decimal("0"), Decimal("0")),
        ("02-05", Decimal("0"), Decimal("40")),
    ]


def test_daily_trend_window_covers_exactly_window_days() -> None:
    """The window holds window_days calendar days ending at now."""
    records = [
        _record("2025-01-06", "Expense", "Food", 5),
        _record("2025-01-07", "Expense", "Food", 7),
        _record("2025-02-05", "Expense", "Food", 9),
    ]

    result = aggregate_transactions(
        records,
        date(2025, 2, 5),
        AggregationOptions(window_days=30, max_trend_buckets=30),
    )
    single_day = aggregate_transactions(
        records,
        date(2025, 2, 5),
        AggregationOptions(window_days=1),
    )
    no_days = aggregate_transactions(
        records,
        date(2025, 2, 5),
        AggregationOptions(window_days=0),
    )

    assert [point.day for point in result.daily_trend] == ["01-07", "02-05"]
    assert [point.day for point in single_day.daily_trend] == ["02-05"]
    assert no_days.daily_trend == ()


def test_daily_trend_keeps_most_recent_buckets_across_year_end() -> None:
    """Truncation should keep the latest days, ordered by real date."""
    records = [
        _record("2024-12-30", "Expense", "Food", 1),
        _record("2024-12-31", "Expense", "Food", 2),
        _record("2025-01-01", "Expense", "Food", 3),
        _record("2025-01-02", "Expense", "Food", 4),
    ]

    result = aggregate_transactions(
        records,
        date(2025, 1, 2),
        AggregationOptions(max_trend_buckets=3),
    )

    assert [point.day for point in result.daily_trend] == [
        "12-31",
        "01-01",
        "01-02",
    ]


def test_build_daily_trend_with_zero_buckets_is_empty() -> None:
    """A zero bucket limit should emit nothing."""
    days = {date(2025, 1, 1): [Decimal("1"), Decimal("0")]}

    assert build_daily_trend(days, 0) == []


def test_weekday_pattern_is_fixed_grid_of_expenses() -> None:
    """Weekday buckets are always seven, Sunday first."""
    records = [
        _record("2025-03-02", "Expense", "Food", 10),
        _record("2025-03-02", "Expense", "Food", 5),
        _record("2025-03-03", "Expense", "Food", 7),
        _record("2025-03-03", "Income", "Salary", 1000),
    ]

    result = aggregate_transactions(records, date(2025, 3, 3))

    assert [bucket.day for bucket in result.weekday_pattern] == [
        "Sun",
        "Mon",
        "Tue",
        "Wed",
        "Thu",
        "Fri",
        "Sat",
    ]
    sunday, monday, tuesday = result.weekday_pattern[:3]
    assert (sunday.total_expense, sunday.count) == (Decimal("15"), 2)
    assert sunday.average == Decimal("7.5")
    assert (monday.total_expense, monday.count) == (Decimal("7"), 1)
    assert tuesday.count == 0
    assert tuesday.average == Decimal("0")


def test_type_summaries_report_count_average_and_top_category() -> None:
    """Per-type summaries should expose headline figures."""
    result = aggregate_transactions(_mixed_records(), date(2025, 3, 5))

    income = result.summary_by_type(TransactionType.INCOME)
    assert income.total == Decimal("1300.50")
    assert income.count == 2
    assert income.average == Decimal("650.25")
    assert income.top_category == "Salary"
    expense = result.summary_by_type("Expense")
    assert expense.top_category == "Rent"


def test_period_bounds_restrict_every_view() -> None:
    """Records outside the optional period are ignored silently."""
    result = aggregate_transactions(
        _mixed_records(),
        date(2025, 3, 5),
        AggregationOptions(
            start_date=date(2025, 2, 1),
            end_date=date(2025, 2, 28),
        ),
    )

    assert [point.month for point in result.monthly_series] == ["2025-02"]
    assert result.totals.total_income == Decimal("300")
    assert result.totals.total_expense == Decimal("79.75")
    assert result.totals.total_investment == Decimal("250")
    assert result.rejected_count == 3


def test_aggregation_is_deterministic_and_input_untouched() -> None:
    """Repeated calls on the same snapshot give identical output."""
    records = _mixed_records()
    snapshot = [dict(record) for record in records]

    first = aggregate_transactions(records, date(2025, 3, 5))
    second = aggregate_transactions(list(reversed(records)), date(2025, 3, 5))
    third = aggregate_transactions(records, date(2025, 3, 5))

    assert first == third
    assert repr(first) == repr(third)
    assert first.totals == second.totals
    assert first.monthly_series == second.monthly_series
    assert first.source_flow == second.source_flow
    assert first.category_breakdowns == second.category_breakdowns
    assert records == snapshot


def test_accepts_raw_transaction_rows() -> None:
    """RawTransaction rows are accepted like mappings."""
    rows = [
        RawTransaction(
            id=1,
            date=date(2025, 1, 10),
            type="Income",
            category="Salary",
            source=None,
            amount=Decimal("10.10"),
        ),
        RawTransaction(
            id=2,
            date="2025-01-11T09:15:00",
            type=TransactionType.EXPENSE,
            category="Food",
            source="Cash",
            amount=0.1,
        ),
    ]

    result = aggregate_transactions(rows, date(2025, 1, 11))

    assert result.totals.total_income == Decimal("10.10")
    assert result.totals.total_expense == Decimal("0.1")
    assert [entry.source for entry in result.source_flow] == ["Other", "Cash"]


def test_rejections_are_logged_as_warning() -> None:
    """Skipped records should be summarized in a warning."""
    logger = MagicMock()

    aggregate_transactions(
        [_record("2025-01-10", "Income", "Salary", "abc")],
        date(2025, 1, 10),
        logger=logger,
    )

    logger.warning.assert_called_once_with(
        "Skipped 1 invalid records: InvalidAmount=1"
    )


def test_non_iterable_snapshot_raises_type_error() -> None:
    """A non-iterable snapshot is a caller error."""
    with pytest.raises(TypeError):
        aggregate_transactions(None, date(2025, 1, 1))

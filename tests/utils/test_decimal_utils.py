"""Tests for Decimal helpers."""

from decimal import Decimal

from ledger_analytics.utils.decimal_utils import coerce_decimal, parse_decimal


def test_coerce_decimal_handles_none_and_numbers() -> None:
    """coerce_decimal should normalize numbers without float drift."""
    assert coerce_decimal(None) == Decimal("0")
    assert coerce_decimal(Decimal("1.5")) == Decimal("1.5")
    assert coerce_decimal(0.1) == Decimal("0.1")
    assert coerce_decimal(3) == Decimal("3")


def test_parse_decimal_returns_none_for_unparseable_values() -> None:
    """parse_decimal should never raise for bad input."""
    assert parse_decimal("12.30") == Decimal("12.30")
    assert parse_decimal("abc") is None
    assert parse_decimal("  ") is None
    assert parse_decimal(False) is None
    assert parse_decimal(["1"]) is None
    assert parse_decimal("-inf") is None


def test_summing_many_parsed_amounts_is_exact() -> None:
    """Ten thousand cents should add up to exactly one hundred."""
    total = sum(
        (parse_decimal("0.01") for _ in range(10_000)),
        Decimal("0"),
    )

    assert total == Decimal("100")

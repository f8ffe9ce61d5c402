"""Tests for infrastructure settings."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from ledger_analytics.infrastructure import settings as settings_module
from ledger_analytics.infrastructure.settings import AggregationSettings


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    for name in (
        "LEDGER_TREND_WINDOW_DAYS",
        "LEDGER_TREND_MAX_BUCKETS",
        "LEDGER_RADAR_TOP_N",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_uses_defaults_when_unset() -> None:
    """Unset variables should keep the built-in defaults."""
    settings = AggregationSettings.from_env(logger=MagicMock())

    assert settings == AggregationSettings(
        window_days=30,
        max_trend_buckets=15,
        radar_top_n=6,
    )


def test_from_env_reads_integers(monkeypatch) -> None:
    """Integer values should override the defaults."""
    monkeypatch.setenv("LEDGER_TREND_WINDOW_DAYS", "14")
    monkeypatch.setenv("LEDGER_TREND_MAX_BUCKETS", " 7 ")
    monkeypatch.setenv("LEDGER_RADAR_TOP_N", "4")

    settings = AggregationSettings.from_env(logger=MagicMock())

    assert settings.window_days == 14
    assert settings.max_trend_buckets == 7
    assert settings.radar_top_n == 4


def test_from_env_warns_and_falls_back_on_bad_values(monkeypatch) -> None:
    """Invalid values should log a warning and use defaults."""
    monkeypatch.setenv("LEDGER_TREND_WINDOW_DAYS", "soon")
    monkeypatch.setenv("LEDGER_RADAR_TOP_N", "-2")
    logger = MagicMock()

    settings = AggregationSettings.from_env(logger=logger)

    assert settings.window_days == 30
    assert settings.radar_top_n == 6
    assert logger.warning.call_count == 2


def test_to_options_carries_period_overrides() -> None:
    """Settings should convert to engine options."""
    options = AggregationSettings(radar_top_n=3).to_options(
        start_date=date(2025, 1, 1),
    )

    assert options.radar_top_n == 3
    assert options.window_days == 30
    assert options.start_date == date(2025, 1, 1)
    assert options.end_date is None

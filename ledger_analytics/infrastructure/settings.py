"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from ledger_analytics.domain.constants import (
    DEFAULT_MAX_TREND_BUCKETS,
    DEFAULT_RADAR_TOP_N,
    DEFAULT_WINDOW_DAYS,
)
from ledger_analytics.domain.models import AggregationOptions
from ledger_analytics.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class AggregationSettings:
    """Settings for the windowed and top-N views.

    Attributes:
        window_days: Trailing window of the daily trend, in days.
        max_trend_buckets: Most recent daily buckets kept.
        radar_top_n: Categories kept in each radar view.
    """

    window_days: int = DEFAULT_WINDOW_DAYS
    max_trend_buckets: int = DEFAULT_MAX_TREND_BUCKETS
    radar_top_n: int = DEFAULT_RADAR_TOP_N

    @classmethod
    def from_env(cls, logger=None) -> "AggregationSettings":
        """Build settings from environment variables.

        Args:
            logger: Optional logger used for warnings.

        Returns:
            AggregationSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        resolved_logger = logger or get_app_logger()
        return cls(
            window_days=cls._read_int(
                "LEDGER_TREND_WINDOW_DAYS",
                DEFAULT_WINDOW_DAYS,
                resolved_logger,
            ),
            max_trend_buckets=cls._read_int(
                "LEDGER_TREND_MAX_BUCKETS",
                DEFAULT_MAX_TREND_BUCKETS,
                resolved_logger,
            ),
            radar_top_n=cls._read_int(
                "LEDGER_RADAR_TOP_N",
                DEFAULT_RADAR_TOP_N,
                resolved_logger,
            ),
        )

    @staticmethod
    def _read_int(name: str, default: int, logger) -> int:
        """Read a non-negative integer environment variable.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Ignoring non-integer {name}={raw!r}")
            return default
        if value < 0:
            logger.warning(f"Ignoring negative {name}={value}")
            return default
        return value

    def to_options(self, **overrides) -> AggregationOptions:
        """Return engine options, with optional period bounds.

        Args:
            **overrides: Extra AggregationOptions fields such as start_date.

        Returns:
            AggregationOptions: Options for aggregate_transactions.
        """
        return AggregationOptions(
            window_days=self.window_days,
            max_trend_buckets=self.max_trend_buckets,
            radar_top_n=self.radar_top_n,
            **overrides,
        )


__all__ = ["AggregationSettings"]

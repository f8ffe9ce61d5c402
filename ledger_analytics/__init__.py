"""Transaction aggregation engine for personal finance dashboards."""

__version__ = "0.1.0"

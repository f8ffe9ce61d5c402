"""Composition root for wiring infrastructure adapters."""

from ledger_analytics.application.ports.database import DatabaseEnginePort
from ledger_analytics.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from ledger_analytics.application.use_cases.aggregate_transactions import (
    AggregateTransactionsUseCase,
)
from ledger_analytics.application.use_cases.get_period_report import (
    GetPeriodReportUseCase,
)
from ledger_analytics.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from ledger_analytics.infrastructure.logging.logger import get_app_logger
from ledger_analytics.infrastructure.settings import AggregationSettings
from ledger_analytics.infrastructure.transactions_repository import (
    SqlAlchemyTransactionsRepository,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_transactions_repository(
    db_port: DatabaseEnginePort | None = None,
) -> TransactionsRepositoryPort:
    """Return the read-only transactions repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyTransactionsRepository(resolved_db)


def build_aggregate_transactions_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> AggregateTransactionsUseCase:
    """Return the aggregation use case configured from the environment."""
    logger = get_app_logger()
    settings = AggregationSettings.from_env(logger=logger)
    return AggregateTransactionsUseCase(
        build_transactions_repository(db_port),
        logger=logger,
        options=settings.to_options(),
    )


def build_period_report_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetPeriodReportUseCase:
    """Return the report figures use case."""
    return GetPeriodReportUseCase(
        build_transactions_repository(db_port),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_transactions_repository",
    "build_aggregate_transactions_use_case",
    "build_period_report_use_case",
]

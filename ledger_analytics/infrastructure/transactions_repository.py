"""SQLAlchemy-backed reader for transaction snapshots."""

from datetime import date, timedelta

from sqlalchemy import text

from ledger_analytics.application.ports.database import DatabaseEnginePort
from ledger_analytics.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from ledger_analytics.domain.models import RawTransaction


class SqlAlchemyTransactionsRepository(TransactionsRepositoryPort):
    """Repository reading the ``transactions`` table of the store.

    Rows are returned as stored; parsing and validation happen in the
    aggregation engine. The upper bound is applied as "before the next
    day" so timestamped dates on the last day are still returned.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the store engine.
        """
        self._db_port = db_port

    def fetch_transactions(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[RawTransaction]:
        query = self._build_query(start_date, end_date)
        params = self._build_date_params(start_date, end_date)
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()
        return [
            RawTransaction(
                id=row.id,
                date=row.date,
                type=row.type,
                category=row.category,
                source=row.source,
                amount=row.amount,
                description=row.description,
            )
            for row in rows
        ]

    @staticmethod
    def _build_query(
        start_date: date | None,
        end_date: date | None,
    ):
        base_sql = """
        SELECT id, date, type, category, source, amount, description
        FROM transactions
        WHERE 1=1
        """
        if start_date:
            base_sql += " AND date >= :start_date"
        if end_date:
            base_sql += " AND date < :end_before"
        base_sql += " ORDER BY date, id"
        return text(base_sql)

    @staticmethod
    def _build_date_params(
        start_date: date | None,
        end_date: date | None,
    ) -> dict[str, date]:
        params: dict[str, date] = {}
        if start_date:
            params["start_date"] = start_date
        if end_date:
            params["end_before"] = end_date + timedelta(days=1)
        return params


__all__ = ["SqlAlchemyTransactionsRepository"]

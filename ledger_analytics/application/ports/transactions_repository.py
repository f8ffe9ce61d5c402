"""Port for reading transaction snapshots."""

from datetime import date
from typing import Protocol

from ledger_analytics.domain.models import RawTransaction


class TransactionsRepositoryPort(Protocol):
    """Port listing raw transaction records from the store."""

    def fetch_transactions(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[RawTransaction]:
        """Return a snapshot of records, optionally bounded by date."""


__all__ = ["TransactionsRepositoryPort"]

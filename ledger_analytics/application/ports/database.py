"""Database ports for the transaction store.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations are expected to provide
concrete adapters that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the transaction store."""

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the transaction store.

        Returns:
            Engine: SQLAlchemy engine connected to the store.
        """


__all__ = ["DatabaseEnginePort"]

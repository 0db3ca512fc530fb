"""Persistence provider interface."""

from abc import ABC, abstractmethod
from datetime import date

from re_portfolio.models import EquityHistoryPoint, PropertyRecord


class PersistenceProvider(ABC):
    """Durable store for property records and history points.

    Every method takes an opaque ``scope`` (the owner's identity). Scope-less
    stores ignore it. Failures are raised as
    :class:`~re_portfolio.exceptions.ProviderError`.
    """

    @abstractmethod
    def list_properties(self, scope: str) -> list[PropertyRecord]:
        """Return the scope's records in insertion order."""

    @abstractmethod
    def insert_properties(self, scope: str, records: list[PropertyRecord]) -> list[PropertyRecord]:
        """Create records for a scope and return the scope's records."""

    @abstractmethod
    def upsert_properties(self, scope: str, records: list[PropertyRecord]) -> None:
        """Insert or replace records keyed by ``id``."""

    @abstractmethod
    def list_history(self, scope: str) -> list[EquityHistoryPoint]:
        """Return the scope's history ascending by date."""

    @abstractmethod
    def upsert_history_point(self, scope: str, day: date, equity: int) -> None:
        """Record ``equity`` for ``day``, replacing any existing point."""

    @abstractmethod
    def clear_scope(self, scope: str) -> None:
        """Delete every record and history point of a scope."""

    def close(self) -> None:
        """Release resources held by the provider."""

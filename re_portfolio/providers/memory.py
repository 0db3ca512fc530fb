"""In-memory scoped persistence, for tests and demos."""

from dataclasses import dataclass, field, replace
from datetime import date

from re_portfolio.history import upsert_point
from re_portfolio.models import EquityHistoryPoint, PropertyRecord
from re_portfolio.providers.base import PersistenceProvider


@dataclass
class InMemoryPersistence(PersistenceProvider):
    """Scoped store held in dictionaries.

    Behaves like the remote store: records keep insertion order, upserts are
    keyed by ``(scope, id)`` and history by ``(scope, date)`` with no bound.
    """

    properties: dict[str, dict[str, PropertyRecord]] = field(default_factory=dict)
    history: dict[str, list[EquityHistoryPoint]] = field(default_factory=dict)

    def list_properties(self, scope: str) -> list[PropertyRecord]:
        return [replace(r) for r in self.properties.get(scope, {}).values()]

    def insert_properties(self, scope: str, records: list[PropertyRecord]) -> list[PropertyRecord]:
        rows = self.properties.setdefault(scope, {})
        for record in records:
            rows.setdefault(record.id, replace(record))
        return self.list_properties(scope)

    def upsert_properties(self, scope: str, records: list[PropertyRecord]) -> None:
        rows = self.properties.setdefault(scope, {})
        for record in records:
            rows[record.id] = replace(record)

    def list_history(self, scope: str) -> list[EquityHistoryPoint]:
        return [replace(p) for p in self.history.get(scope, [])]

    def upsert_history_point(self, scope: str, day: date, equity: int) -> None:
        self.history[scope] = upsert_point(
            self.history.get(scope, []), EquityHistoryPoint(date=day, equity=equity)
        )

    def clear_scope(self, scope: str) -> None:
        self.properties.pop(scope, None)
        self.history.pop(scope, None)

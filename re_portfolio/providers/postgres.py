"""PostgreSQL persistence for per-user portfolios."""

import logging
import time
from collections.abc import Callable
from datetime import date
from typing import Any, TypeVar

from re_portfolio.config import PostgresConfig, RetryConfig
from re_portfolio.exceptions import ProviderError
from re_portfolio.models import AMOUNT_FIELDS, EquityHistoryPoint, PropertyRecord
from re_portfolio.providers.base import PersistenceProvider
from re_portfolio.providers.serialization import parse_history_point, parse_property

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROPERTY_COLUMNS = ["id", "name", "kind", "location", *AMOUNT_FIELDS]

DDL = """
CREATE TABLE IF NOT EXISTS properties (
    owner_id TEXT NOT NULL,
    id TEXT NOT NULL,
    position BIGSERIAL,
    name TEXT NOT NULL,
    kind TEXT NOT NULL CHECK (kind IN ('apartment', 'house')),
    location TEXT,
    value BIGINT NOT NULL DEFAULT 0 CHECK (value >= 0),
    debt BIGINT NOT NULL DEFAULT 0 CHECK (debt >= 0),
    rent BIGINT NOT NULL DEFAULT 0 CHECK (rent >= 0),
    mortgage_payment BIGINT NOT NULL DEFAULT 0 CHECK (mortgage_payment >= 0),
    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    PRIMARY KEY (owner_id, id)
);

CREATE TABLE IF NOT EXISTS equity_history (
    owner_id TEXT NOT NULL,
    date DATE NOT NULL,
    equity BIGINT NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    PRIMARY KEY (owner_id, date)
);
"""

SELECT_PROPERTIES = f"""
SELECT {", ".join(PROPERTY_COLUMNS)}
FROM properties
WHERE owner_id = %s
ORDER BY position
"""

INSERT_PROPERTY = f"""
INSERT INTO properties (owner_id, {", ".join(PROPERTY_COLUMNS)})
VALUES (%s, {", ".join(["%s"] * len(PROPERTY_COLUMNS))})
ON CONFLICT (owner_id, id) DO NOTHING
"""

UPSERT_PROPERTY = f"""
INSERT INTO properties (owner_id, {", ".join(PROPERTY_COLUMNS)})
VALUES (%s, {", ".join(["%s"] * len(PROPERTY_COLUMNS))})
ON CONFLICT (owner_id, id) DO UPDATE SET
    {", ".join(f"{c} = EXCLUDED.{c}" for c in AMOUNT_FIELDS)},
    updated_at = now()
"""

SELECT_HISTORY = """
SELECT date, equity
FROM equity_history
WHERE owner_id = %s
ORDER BY date
"""

UPSERT_HISTORY = """
INSERT INTO equity_history (owner_id, date, equity)
VALUES (%s, %s, %s)
ON CONFLICT (owner_id, date) DO UPDATE SET
    equity = EXCLUDED.equity,
    updated_at = now()
"""


class PostgresPersistence(PersistenceProvider):
    """Remote store: rows scoped by ``owner_id``.

    Records come back in insertion order; writes are upserts keyed by
    ``(owner_id, id)`` for records and ``(owner_id, date)`` for history, so a
    retried statement is harmless. Each multi-row write runs in one
    transaction.
    """

    def __init__(
        self,
        config: PostgresConfig | None = None,
        retry: RetryConfig | None = None,
    ) -> None:
        """Initialize and connect.

        Parameters
        ----------
        config : PostgresConfig | None
            Connection settings (defaults if None).
        retry : RetryConfig | None
            Retry policy for connection-level failures.
        """
        import psycopg

        self._psycopg = psycopg
        self.config = config or PostgresConfig()
        self.retry = retry or RetryConfig()
        self.conn: Any = None
        self._connect()

    def create_tables(self) -> None:
        """Create the tables if they do not exist."""

        def run() -> None:
            with self.conn.cursor() as cur:
                cur.execute(DDL)

        self._run("create tables", run, write=True)
        logger.info("PostgreSQL tables ready")

    def list_properties(self, scope: str) -> list[PropertyRecord]:
        def run() -> list[PropertyRecord]:
            with self.conn.cursor() as cur:
                cur.execute(SELECT_PROPERTIES, (scope,))
                rows = cur.fetchall()
            records = []
            for index, row in enumerate(rows):
                record = parse_property(dict(zip(PROPERTY_COLUMNS, row)), index)
                if record is not None:
                    records.append(record)
            return records

        return self._run("list properties", run)

    def insert_properties(self, scope: str, records: list[PropertyRecord]) -> list[PropertyRecord]:
        def run() -> None:
            with self.conn.cursor() as cur:
                cur.executemany(INSERT_PROPERTY, [self._row(scope, r) for r in records])

        self._run("insert properties", run, write=True)
        logger.info("Inserted %d properties for %s", len(records), scope)
        return self.list_properties(scope)

    def upsert_properties(self, scope: str, records: list[PropertyRecord]) -> None:
        if not records:
            return

        def run() -> None:
            with self.conn.cursor() as cur:
                cur.executemany(UPSERT_PROPERTY, [self._row(scope, r) for r in records])

        self._run("upsert properties", run, write=True)

    def list_history(self, scope: str) -> list[EquityHistoryPoint]:
        def run() -> list[EquityHistoryPoint]:
            with self.conn.cursor() as cur:
                cur.execute(SELECT_HISTORY, (scope,))
                rows = cur.fetchall()
            points = (parse_history_point({"date": d, "equity": e}) for d, e in rows)
            return [p for p in points if p is not None]

        return self._run("list history", run)

    def upsert_history_point(self, scope: str, day: date, equity: int) -> None:
        def run() -> None:
            with self.conn.cursor() as cur:
                cur.execute(UPSERT_HISTORY, (scope, day, equity))

        self._run("upsert history point", run, write=True)

    def clear_scope(self, scope: str) -> None:
        def run() -> None:
            with self.conn.cursor() as cur:
                cur.execute("DELETE FROM equity_history WHERE owner_id = %s", (scope,))
                cur.execute("DELETE FROM properties WHERE owner_id = %s", (scope,))

        self._run("clear scope", run, write=True)
        logger.info("Cleared portfolio data for %s", scope)

    def close(self) -> None:
        """Close the connection."""
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    @staticmethod
    def _row(scope: str, record: PropertyRecord) -> tuple:
        return (
            scope,
            record.id,
            record.name,
            record.kind.value,
            record.location,
            *(getattr(record, name) for name in AMOUNT_FIELDS),
        )

    def _connect(self) -> None:
        try:
            self.conn = self._open()
        except self._psycopg.Error as e:
            raise ProviderError(f"Could not connect to PostgreSQL: {e}") from e

    def _open(self) -> Any:
        return self._psycopg.connect(
            self.config.connection_string,
            connect_timeout=self.config.connect_timeout,
            options=f"-c statement_timeout={self.config.statement_timeout_ms}",
        )

    def _run(self, description: str, operation: Callable[[], T], write: bool = False) -> T:
        """Run ``operation``, retrying connection-level failures.

        Writes are committed on success and rolled back on failure. Other
        database errors are not retried.
        """
        attempts = max(self.retry.attempts, 1)
        for attempt in range(1, attempts + 1):
            try:
                if self.conn is None:
                    self.conn = self._open()
                result = operation()
                if write:
                    self.conn.commit()
                return result
            except self._psycopg.OperationalError as e:
                self._discard_connection()
                if attempt == attempts:
                    raise ProviderError(f"Failed to {description} after {attempts} attempts: {e}") from e
                logger.warning(
                    "Failed to %s (attempt %d/%d): %s",
                    description,
                    attempt,
                    attempts,
                    e,
                    extra={"operation": description, "attempt": attempt},
                )
                time.sleep(self.retry.backoff_seconds * attempt)
            except self._psycopg.Error as e:
                self._rollback()
                raise ProviderError(f"Failed to {description}: {e}") from e
        raise ProviderError(f"Failed to {description}")

    def _rollback(self) -> None:
        if self.conn is None:
            return
        try:
            self.conn.rollback()
        except self._psycopg.Error:
            logger.debug("Rollback failed, dropping connection", exc_info=True)
            self._discard_connection()

    def _discard_connection(self) -> None:
        if self.conn is None:
            return
        try:
            self.conn.close()
        except self._psycopg.Error:
            logger.debug("Ignoring error while closing connection", exc_info=True)
        self.conn = None

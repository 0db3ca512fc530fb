"""Portfolio reconciler: records, drafts and the daily equity series."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import date

from re_portfolio.config import PortfolioConfig
from re_portfolio.defaults import DEFAULT_LOCATION, default_properties
from re_portfolio.exceptions import ProviderError
from re_portfolio.history import make_clock, upsert_point
from re_portfolio.models import (
    AMOUNT_FIELDS,
    CommitResult,
    DraftRow,
    EquityHistoryPoint,
    PortfolioTotals,
    PropertyRecord,
)
from re_portfolio.providers import create_persistence
from re_portfolio.providers.base import PersistenceProvider
from re_portfolio.providers.session import Identity, SessionProvider, StaticSessionProvider
from re_portfolio.totals import compute_totals

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Could not save the portfolio. Please try again."
NOT_SIGNED_IN_MESSAGE = "Sign in to save the portfolio."
NOT_LOADED_MESSAGE = "The portfolio has not been loaded yet."


def merge_drafts(
    records: Sequence[PropertyRecord],
    drafts: Sequence[DraftRow],
) -> list[PropertyRecord]:
    """Apply draft text onto records by position.

    The four amounts of each record are replaced by the normalized draft
    text; a record without a draft gets zeros. Identity fields (id, name,
    kind, location) are carried over. Extra drafts are ignored.
    """
    merged = []
    for i, record in enumerate(records):
        draft = drafts[i] if i < len(drafts) else DraftRow()
        merged.append(replace(record, **draft.to_amounts()))
    return merged


class PortfolioReconciler:
    """Owns one session's records and history.

    All provider calls happen in a fixed sequence: resolve identity, load
    records (seeding an empty scope), load history; and on save: normalize,
    commit records, compute total equity, upsert today's point, reload
    history. Provider failures are logged and stop the current operation;
    only saving reports them back, through :class:`CommitResult`.

    Parameters
    ----------
    persistence : PersistenceProvider
        Durable store.
    session : SessionProvider
        Source of the current identity. Nothing is read or written without
        one.
    clock : Callable[[], date] | None
        Returns "today" for history keys (process-local date if None).
    default_location : str | None
        Location given to the seeded apartments.
    """

    def __init__(
        self,
        persistence: PersistenceProvider,
        session: SessionProvider,
        clock: Callable[[], date] | None = None,
        default_location: str | None = DEFAULT_LOCATION,
    ) -> None:
        self.persistence = persistence
        self.session = session
        self.clock = clock or make_clock()
        self.default_location = default_location

        self.scope: str | None = None
        self.properties: list[PropertyRecord] = []
        self.history: list[EquityHistoryPoint] = []
        self.drafts: list[DraftRow] = []
        self.is_loaded = False
        self.is_editing = False

        self._unsubscribe = session.on_identity_change(self._on_identity_change)

    @classmethod
    def from_config(
        cls,
        config: PortfolioConfig,
        session: SessionProvider | None = None,
    ) -> "PortfolioReconciler":
        """Build a reconciler with the provider and clock ``config`` selects.

        Without ``session``, the configured ``user_id`` is treated as signed in.
        """
        if session is None:
            session = StaticSessionProvider(Identity(user_id=config.user_id))
        return cls(
            persistence=create_persistence(config),
            session=session,
            clock=make_clock(config.history_timezone),
            default_location=config.default_location,
        )

    @property
    def totals(self) -> PortfolioTotals:
        return compute_totals(self.properties)

    @property
    def last_point(self) -> EquityHistoryPoint | None:
        return self.history[-1] if self.history else None

    # Loading

    def load(self) -> bool:
        """Load records and history for the signed-in identity.

        Returns
        -------
        bool
            True when both were loaded. On failure the previous state is
            kept and ``is_loaded`` stays False.
        """
        scope = self._current_scope()
        if scope is None:
            return False

        try:
            records = self.persistence.list_properties(scope)
            if not records:
                records = self._seed(scope)
            history = self.persistence.list_history(scope)
        except ProviderError:
            logger.exception("Failed to load portfolio for %s", scope, extra={"scope": scope, "operation": "load"})
            return False

        self.scope = scope
        self.properties = records
        self.history = history
        self.is_loaded = True
        logger.info(
            "Loaded %d properties and %d history points for %s",
            len(records),
            len(history),
            scope,
            extra={"scope": scope, "operation": "load"},
        )
        return True

    def _seed(self, scope: str) -> list[PropertyRecord]:
        defaults = default_properties(self.default_location)
        logger.info("No properties for %s, creating %d defaults", scope, len(defaults))
        return self.persistence.insert_properties(scope, defaults)

    # Editor session

    def open_editor(self) -> list[DraftRow]:
        """Start editing with drafts pre-filled from the committed records."""
        self.drafts = [DraftRow.from_record(r) for r in self.properties]
        self.is_editing = True
        return self.drafts

    def set_draft_field(self, index: int, field: str, text: str) -> None:
        """Change one draft cell (``field`` is one of the amount names)."""
        if field not in AMOUNT_FIELDS:
            raise ValueError(f"Unknown draft field {field!r}")
        setattr(self.drafts[index], field, text)

    def cancel_editor(self) -> None:
        """Close the editor, discarding the drafts."""
        self.is_editing = False

    def save_editor(self) -> CommitResult:
        """Commit the open drafts; the editor stays open if saving fails."""
        result = self.commit(self.drafts)
        if result.ok:
            self.is_editing = False
        return result

    # Commit

    def commit(self, drafts: Sequence[DraftRow]) -> CommitResult:
        """Merge ``drafts`` into the records, persist them, record today's equity.

        If the records cannot be persisted, the in-memory records are put back
        as they were so that they keep matching the store.
        """
        scope = self._current_scope()
        if scope is None:
            return CommitResult(ok=False, error=NOT_SIGNED_IN_MESSAGE)
        if not self.is_loaded:
            logger.warning("Commit requested before the portfolio was loaded")
            return CommitResult(ok=False, error=NOT_LOADED_MESSAGE)

        previous = self.properties
        committed = merge_drafts(previous, drafts)
        self.properties = committed

        try:
            self.persistence.upsert_properties(scope, committed)
        except ProviderError:
            logger.exception(
                "Failed to save %d properties for %s",
                len(committed),
                scope,
                extra={"scope": scope, "operation": "commit"},
            )
            self.properties = previous
            return CommitResult(ok=False, error=SAVE_FAILED_MESSAGE)

        equity = compute_totals(committed).total_equity
        day = self.clock()
        recorded = self._record_history(scope, day, equity)
        logger.info(
            "Saved portfolio for %s: equity %d on %s",
            scope,
            equity,
            day.isoformat(),
            extra={"scope": scope, "operation": "commit", "equity": equity, "history_date": day},
        )
        return CommitResult(ok=True, total_equity=equity, history_date=day, history_recorded=recorded)

    def _record_history(self, scope: str, day: date, equity: int) -> bool:
        try:
            self.persistence.upsert_history_point(scope, day, equity)
        except ProviderError:
            logger.exception(
                "Failed to record equity for %s on %s",
                scope,
                day.isoformat(),
                extra={"scope": scope, "operation": "record_history", "history_date": day},
            )
            return False

        try:
            self.history = self.persistence.list_history(scope)
        except ProviderError:
            logger.warning("Could not reload history for %s, updating it locally", scope, exc_info=True)
            self.history = upsert_point(self.history, EquityHistoryPoint(date=day, equity=equity))
        return True

    # Reset

    def reset(self) -> bool:
        """Delete the scope's stored data and return to the default records.

        The defaults are only persisted again by the next :meth:`load`.
        """
        scope = self._current_scope()
        if scope is None:
            return False

        try:
            self.persistence.clear_scope(scope)
        except ProviderError:
            logger.exception("Failed to reset portfolio for %s", scope, extra={"scope": scope, "operation": "reset"})
            return False

        self.properties = default_properties(self.default_location)
        self.drafts = [DraftRow() for _ in self.properties]
        self.history = []
        self.is_editing = False
        logger.info("Reset portfolio for %s", scope, extra={"scope": scope, "operation": "reset"})
        return True

    def close(self) -> None:
        """Stop listening to the session and release the store."""
        self._unsubscribe()
        self.persistence.close()

    def _current_scope(self) -> str | None:
        identity = self.session.get_current_identity()
        if identity is None:
            logger.info("No signed-in identity, skipping portfolio access")
            return None
        return identity.user_id

    def _on_identity_change(self, identity: Identity | None) -> None:
        if identity is not None and identity.user_id == self.scope:
            return
        # Another scope (or none): drop what belongs to the previous one.
        self.scope = None
        self.properties = []
        self.history = []
        self.drafts = []
        self.is_loaded = False
        self.is_editing = False

"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from re_portfolio.providers import InMemoryPersistence
from re_portfolio.providers.session import Identity, StaticSessionProvider
from re_portfolio.reconciler import PortfolioReconciler


@pytest.fixture
def today() -> date:
    """Fixed "today" for history keys."""
    return date(2024, 6, 15)


@pytest.fixture
def identity() -> Identity:
    """Sample signed-in user."""
    return Identity(user_id="user-test-001", email="test@example.com")


@pytest.fixture
def session(identity: Identity) -> StaticSessionProvider:
    """Session with the sample user signed in."""
    return StaticSessionProvider(identity)


@pytest.fixture
def persistence() -> InMemoryPersistence:
    """Fresh scoped in-memory store."""
    return InMemoryPersistence()


@pytest.fixture
def reconciler(
    persistence: InMemoryPersistence,
    session: StaticSessionProvider,
    today: date,
) -> PortfolioReconciler:
    """Reconciler over the in-memory store, not loaded yet."""
    return PortfolioReconciler(persistence, session, clock=lambda: today)

"""Session and persistence providers used by the portfolio reconciler."""

from re_portfolio.config import PortfolioConfig
from re_portfolio.providers.base import PersistenceProvider
from re_portfolio.providers.local import LocalStoragePersistence
from re_portfolio.providers.memory import InMemoryPersistence
from re_portfolio.providers.session import Identity, SessionProvider, StaticSessionProvider


def create_persistence(config: PortfolioConfig) -> PersistenceProvider:
    """Build the persistence provider selected by ``config.backend``."""
    if config.backend == "postgres":
        from re_portfolio.providers.postgres import PostgresPersistence

        return PostgresPersistence(config.postgres, config.retry)
    if config.backend == "memory":
        return InMemoryPersistence()
    return LocalStoragePersistence(
        config.local.data_dir,
        properties_key=config.local.properties_key,
        history_key=config.local.history_key,
        max_history_points=config.local.max_history_points,
    )


__all__ = [
    "Identity",
    "InMemoryPersistence",
    "LocalStoragePersistence",
    "PersistenceProvider",
    "SessionProvider",
    "StaticSessionProvider",
    "create_persistence",
]

"""Configuration management for re-portfolio."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from re_portfolio.exceptions import ConfigurationError

BACKENDS = ("local", "memory", "postgres")


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "portfolio"
    user: str = "postgres"
    password: str = "postgres"
    connect_timeout: int = 10  # seconds
    statement_timeout_ms: int = 15000

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class LocalStorageConfig:
    """Scope-less on-disk store: one JSON blob per key."""

    data_dir: Path = field(default_factory=lambda: Path(".re_portfolio"))
    properties_key: str = "re_portfolio_v1"
    history_key: str = "re_portfolio_history_v1"
    max_history_points: int = 3650  # ~10 years of daily points


@dataclass
class RetryConfig:
    """Retry policy applied at the remote provider boundary."""

    attempts: int = 3
    backoff_seconds: float = 0.5


@dataclass
class PortfolioConfig:
    """Main configuration for re-portfolio."""

    backend: str = "local"
    local: LocalStorageConfig = field(default_factory=LocalStorageConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    user_id: str = "local"
    history_timezone: str | None = None  # None: process-local calendar date
    default_location: str = "Praha"
    log_level: str = "INFO"
    log_format: str = "standard"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check values that would otherwise only fail on first use.

        Runs on construction; call it again after changing fields in place.

        Raises
        ------
        ConfigurationError
            If the backend or the history time zone is unknown.
        """
        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"Unknown backend {self.backend!r}, expected one of {', '.join(BACKENDS)}"
            )
        if self.history_timezone is not None:
            try:
                ZoneInfo(self.history_timezone)
            except (ZoneInfoNotFoundError, ValueError, OSError) as e:
                raise ConfigurationError(
                    f"Unknown history time zone {self.history_timezone!r}"
                ) from e

    @classmethod
    def from_env(cls) -> "PortfolioConfig":
        """Create config from environment variables."""
        local = LocalStorageConfig(
            data_dir=Path(os.getenv("PORTFOLIO_DATA_DIR", ".re_portfolio")),
            max_history_points=_env_int("HISTORY_MAX_POINTS", 3650),
        )

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=_env_int("POSTGRES_PORT", 5432),
            database=os.getenv("POSTGRES_DB", "portfolio"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            connect_timeout=_env_int("POSTGRES_CONNECT_TIMEOUT", 10),
            statement_timeout_ms=_env_int("POSTGRES_STATEMENT_TIMEOUT_MS", 15000),
        )

        retry = RetryConfig(
            attempts=_env_int("PROVIDER_RETRIES", 3),
            backoff_seconds=_env_float("PROVIDER_RETRY_BACKOFF", 0.5),
        )

        return cls(
            backend=os.getenv("PORTFOLIO_BACKEND", "local").lower(),
            local=local,
            postgres=postgres,
            retry=retry,
            user_id=os.getenv("PORTFOLIO_USER", "local"),
            history_timezone=os.getenv("HISTORY_TIMEZONE") or None,
            default_location=os.getenv("PORTFOLIO_DEFAULT_LOCATION", "Praha"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e

"""Value objects returned by portfolio computations and operations."""

from dataclasses import dataclass
from datetime import date


@dataclass
class PortfolioTotals:
    """Aggregates over every property in the portfolio."""

    total_value: int = 0
    total_debt: int = 0
    total_equity: int = 0
    total_rent: int = 0
    total_mortgage: int = 0
    net_cashflow: int = 0


@dataclass
class CommitResult:
    """Outcome of saving an edited draft."""

    ok: bool
    total_equity: int | None = None
    history_date: date | None = None
    history_recorded: bool = False
    error: str | None = None

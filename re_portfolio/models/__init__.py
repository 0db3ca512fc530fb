"""Domain models for the real-estate portfolio."""

from re_portfolio.models.draft import DraftRow
from re_portfolio.models.enums import PropertyKind
from re_portfolio.models.history import EquityHistoryPoint
from re_portfolio.models.property import AMOUNT_FIELDS, PropertyRecord
from re_portfolio.models.results import CommitResult, PortfolioTotals

__all__ = [
    "AMOUNT_FIELDS",
    "CommitResult",
    "DraftRow",
    "EquityHistoryPoint",
    "PortfolioTotals",
    "PropertyKind",
    "PropertyRecord",
]

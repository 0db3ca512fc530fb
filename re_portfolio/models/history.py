"""Net worth history point."""

from dataclasses import dataclass
from datetime import date


@dataclass
class EquityHistoryPoint:
    """Total portfolio equity recorded for one calendar day."""

    date: date
    equity: int  # May be negative when debt exceeds value

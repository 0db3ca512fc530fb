"""Real-estate portfolio tracker: equity, cashflow and net worth history."""

__version__ = "0.1.0"

"""Display formatting for amounts."""

NBSP = "\u00a0"


def format_czk(amount: int) -> str:
    """Format whole crowns the way the cs-CZ locale does.

    >>> format_czk(7450000)
    '7\\xa0450\\xa0000\\xa0Kč'
    """
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,}".replace(",", NBSP)
    return f"{sign}{grouped}{NBSP}Kč"


def format_millions(amount: int) -> str:
    """Chart axis label in millions with one decimal (``5450000`` -> ``5.5M``)."""
    return f"{amount / 1_000_000:.1f}M"

"""Aggregate equity and cashflow over a portfolio."""

from collections.abc import Iterable

from re_portfolio.models import PortfolioTotals, PropertyRecord


def compute_totals(records: Iterable[PropertyRecord]) -> PortfolioTotals:
    """Sum values, debts, rents and mortgage payments.

    Pure: the same records always give the same totals.
    """
    totals = PortfolioTotals()
    for record in records:
        totals.total_value += record.value
        totals.total_debt += record.debt
        totals.total_rent += record.rent
        totals.total_mortgage += record.mortgage_payment
    totals.total_equity = totals.total_value - totals.total_debt
    totals.net_cashflow = totals.total_rent - totals.total_mortgage
    return totals


def total_equity(records: Iterable[PropertyRecord]) -> int:
    """Sum of per-record equity (value minus debt)."""
    return sum(record.equity for record in records)

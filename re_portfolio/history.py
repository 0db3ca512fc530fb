"""Equity history series: one point per calendar day, ascending."""

from collections.abc import Callable, Iterable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from re_portfolio.models import EquityHistoryPoint


def upsert_point(
    series: Iterable[EquityHistoryPoint],
    point: EquityHistoryPoint,
    max_points: int | None = None,
) -> list[EquityHistoryPoint]:
    """Insert ``point``, replacing any existing point for the same date.

    Parameters
    ----------
    series : Iterable[EquityHistoryPoint]
        Current series. Left untouched.
    point : EquityHistoryPoint
        Point to record.
    max_points : int | None
        Keep only the most recent ``max_points`` points (None for unbounded).

    Returns
    -------
    list[EquityHistoryPoint]
        New series sorted ascending by date, unique by date.
    """
    updated = [p for p in series if p.date != point.date]
    updated.append(point)
    updated.sort(key=lambda p: p.date)
    return clamp_history(updated, max_points)


def clamp_history(
    series: list[EquityHistoryPoint],
    max_points: int | None,
) -> list[EquityHistoryPoint]:
    """Drop the oldest points beyond ``max_points``."""
    if max_points is None or len(series) <= max_points:
        return series
    return series[len(series) - max_points :]


def today_in(timezone: str | None = None) -> date:
    """Calendar date of now, in ``timezone`` or in the process-local zone."""
    if timezone is None:
        return date.today()
    return datetime.now(ZoneInfo(timezone)).date()


def make_clock(timezone: str | None = None) -> Callable[[], date]:
    """Build the "today" callable used to key history points."""
    return lambda: today_in(timezone)

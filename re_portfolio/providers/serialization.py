"""Serialization of portfolio entities at the storage boundary.

Writers turn dataclasses into plain JSON-compatible dicts. Readers are
parse-or-default: persisted data may be stale or hand-edited, so unexpected
shapes are replaced with defaults or skipped, never raised.
"""

import logging
import math
from dataclasses import fields
from datetime import date, datetime
from enum import Enum
from typing import Any

from re_portfolio.models import EquityHistoryPoint, PropertyKind, PropertyRecord
from re_portfolio.normalize import coerce_amount

logger = logging.getLogger(__name__)

# Field names used by blobs written before the current layout
LEGACY_FIELDS = {
    "kind": "type",
    "location": "city",
    "value": "valueCZK",
    "debt": "debtCZK",
    "rent": "rentCZK",
    "mortgage_payment": "mortgagePaymentCZK",
}

# Legacy blobs store this instead of leaving the location out
NO_LOCATION = "—"


def serialize_value(value: Any) -> Any:
    """Serialize a scalar field value for JSON output."""
    if isinstance(value, Enum):
        return value.value
    elif isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def to_dict(obj: Any) -> dict:
    """Convert a flat dataclass to a dict without deep copying."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def record_to_dict(record: PropertyRecord) -> dict:
    return to_dict(record)


def point_to_dict(point: EquityHistoryPoint) -> dict:
    return to_dict(point)


def parse_property(raw: Any, index: int = 0) -> PropertyRecord | None:
    """Build a record from stored data, defaulting whatever is unusable.

    Entries in the legacy layout (``type``, ``city``, ``valueCZK`` ...) are
    read as well; when both names are present the current one wins.

    Parameters
    ----------
    raw : Any
        Stored entry, expected to be a dict.
    index : int
        Position in the stored sequence; ``index + 1`` is the fallback id.

    Returns
    -------
    PropertyRecord | None
        Parsed record, or None when ``raw`` is not a mapping at all.
    """
    if not isinstance(raw, dict):
        return None

    record_id = raw.get("id")
    if record_id is None or record_id == "":
        record_id = str(index + 1)

    try:
        kind = PropertyKind(_field(raw, "kind"))
    except ValueError:
        kind = PropertyKind.APARTMENT

    location = _field(raw, "location")
    if not isinstance(location, str) or location == NO_LOCATION:
        location = None
    name = raw.get("name")

    return PropertyRecord(
        id=str(record_id),
        name=name if isinstance(name, str) else f"#{index + 1}",
        kind=kind,
        location=location,
        value=coerce_amount(_field(raw, "value")),
        debt=coerce_amount(_field(raw, "debt")),
        rent=coerce_amount(_field(raw, "rent")),
        mortgage_payment=coerce_amount(_field(raw, "mortgage_payment")),
    )


def _field(raw: dict, name: str) -> Any:
    if name in raw:
        return raw[name]
    return raw.get(LEGACY_FIELDS[name])


def parse_properties(raw: Any) -> list[PropertyRecord]:
    """Parse a stored record sequence; anything but a list gives ``[]``."""
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Ignoring stored properties of type %s", type(raw).__name__)
        return []

    records = []
    for index, entry in enumerate(raw):
        record = parse_property(entry, index)
        if record is None:
            logger.warning("Skipping malformed stored property at position %d", index)
            continue
        records.append(record)
    return records


def parse_history_point(raw: Any) -> EquityHistoryPoint | None:
    """Parse one stored point; None when the date is missing or invalid."""
    if not isinstance(raw, dict):
        return None

    day = raw.get("date")
    if isinstance(day, datetime):
        day = day.date()
    elif isinstance(day, str):
        try:
            day = date.fromisoformat(day[:10])
        except ValueError:
            return None
    elif not isinstance(day, date):
        return None

    equity = raw.get("equity")
    if isinstance(equity, bool) or not isinstance(equity, (int, float)):
        equity = 0
    elif isinstance(equity, float) and not math.isfinite(equity):
        equity = 0
    return EquityHistoryPoint(date=day, equity=int(equity))


def parse_history(raw: Any) -> list[EquityHistoryPoint]:
    """Parse a stored series into a date-unique ascending list.

    When the stored data repeats a date, the later entry wins.
    """
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Ignoring stored history of type %s", type(raw).__name__)
        return []

    by_date: dict[date, EquityHistoryPoint] = {}
    for entry in raw:
        point = parse_history_point(entry)
        if point is None:
            logger.warning("Skipping malformed stored history point: %r", entry)
            continue
        by_date[point.date] = point
    return sorted(by_date.values(), key=lambda p: p.date)

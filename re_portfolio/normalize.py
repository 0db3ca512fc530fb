"""Conversion of free-form numeric text into whole currency amounts."""

import math
import re
from typing import Any

_NON_DIGITS = re.compile(r"[^0-9]")


def parse_amount(text: str | None) -> int:
    """Parse user-typed amount text into a non-negative integer.

    Every character that is not a decimal digit is dropped, so grouping
    separators are ignored rather than interpreted: ``"7 450 000"``,
    ``"7,450,000"`` and ``"7.450.000"`` all give ``7450000``. A minus sign is
    dropped as well, which turns ``"-500"`` into ``500``.

    Parameters
    ----------
    text : str | None
        Raw input. ``None`` is treated as empty.

    Returns
    -------
    int
        Parsed amount, ``0`` when no digits are present.
    """
    cleaned = _NON_DIGITS.sub("", text or "")
    return int(cleaned) if cleaned else 0


def amount_to_text(amount: int) -> str:
    """Render an amount the way draft fields are pre-filled."""
    return str(amount)


def coerce_amount(value: Any) -> int:
    """Coerce a stored value into a non-negative integer amount.

    Used at the storage boundary, where persisted data may come from an older
    build or be hand-edited. Unusable values become ``0``; nothing raises.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return max(int(value), 0)
    if isinstance(value, str):
        text = value.strip()
        try:
            return coerce_amount(int(text))
        except ValueError:
            pass
        try:
            return coerce_amount(float(text))
        except ValueError:
            return 0
    return 0

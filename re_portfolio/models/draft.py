"""Editable text form of a property's amounts."""

from dataclasses import dataclass

from re_portfolio.models.property import AMOUNT_FIELDS, PropertyRecord
from re_portfolio.normalize import amount_to_text, parse_amount


@dataclass
class DraftRow:
    """Free-text amounts for one record while the editor is open."""

    value: str = "0"
    debt: str = "0"
    rent: str = "0"
    mortgage_payment: str = "0"

    @classmethod
    def from_record(cls, record: PropertyRecord) -> "DraftRow":
        """Pre-fill a draft from a committed record."""
        return cls(**{name: amount_to_text(getattr(record, name)) for name in AMOUNT_FIELDS})

    def to_amounts(self) -> dict[str, int]:
        """Normalize every field into a whole amount."""
        return {name: parse_amount(getattr(self, name)) for name in AMOUNT_FIELDS}

"""Property record for a real-estate holding."""

from dataclasses import dataclass

from re_portfolio.models.enums import PropertyKind
from re_portfolio.normalize import coerce_amount

AMOUNT_FIELDS = ("value", "debt", "rent", "mortgage_payment")


@dataclass
class PropertyRecord:
    """One holding with its current value, debt, rent and mortgage payment.

    Amounts are whole currency units. They are coerced to non-negative
    integers whenever a record is built, including through
    ``dataclasses.replace``.
    """

    id: str
    name: str
    kind: PropertyKind
    location: str | None = None
    value: int = 0
    debt: int = 0
    rent: int = 0  # Monthly
    mortgage_payment: int = 0  # Monthly

    def __post_init__(self) -> None:
        self.kind = PropertyKind(self.kind)
        for name in AMOUNT_FIELDS:
            setattr(self, name, coerce_amount(getattr(self, name)))

    @property
    def equity(self) -> int:
        return self.value - self.debt

    @property
    def cashflow(self) -> int:
        return self.rent - self.mortgage_payment

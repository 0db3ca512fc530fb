"""Default holdings created the first time a scope is opened."""

from re_portfolio.models import PropertyKind, PropertyRecord

DEFAULT_LOCATION = "Praha"


def default_properties(location: str | None = DEFAULT_LOCATION) -> list[PropertyRecord]:
    """Three apartments in ``location`` and one house, every amount zero."""
    return [
        PropertyRecord(id="1", name="Byt #1", kind=PropertyKind.APARTMENT, location=location),
        PropertyRecord(id="2", name="Byt #2", kind=PropertyKind.APARTMENT, location=location),
        PropertyRecord(id="3", name="Byt #3", kind=PropertyKind.APARTMENT, location=location),
        PropertyRecord(id="4", name="Dům", kind=PropertyKind.HOUSE),
    ]

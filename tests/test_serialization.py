"""Tests for storage-boundary serialization."""

from datetime import date, datetime

from re_portfolio.models import EquityHistoryPoint, PropertyKind, PropertyRecord
from re_portfolio.providers.serialization import (
    parse_history,
    parse_history_point,
    parse_properties,
    parse_property,
    point_to_dict,
    record_to_dict,
    serialize_value,
)


class TestWriters:
    """Tests for record_to_dict and point_to_dict."""

    def test_record_to_dict(self) -> None:
        record = PropertyRecord("1", "Byt #1", PropertyKind.APARTMENT, "Praha", 7450000, 2000000, 25000, 18000)

        assert record_to_dict(record) == {
            "id": "1",
            "name": "Byt #1",
            "kind": "apartment",
            "location": "Praha",
            "value": 7450000,
            "debt": 2000000,
            "rent": 25000,
            "mortgage_payment": 18000,
        }

    def test_point_to_dict(self) -> None:
        point = EquityHistoryPoint(date=date(2024, 6, 15), equity=5450000)
        assert point_to_dict(point) == {"date": "2024-06-15", "equity": 5450000}

    def test_serialize_value_scalars(self) -> None:
        assert serialize_value(PropertyKind.HOUSE) == "house"
        assert serialize_value(date(2024, 1, 1)) == "2024-01-01"
        assert serialize_value(datetime(2024, 1, 1, 8, 30)) == "2024-01-01T08:30:00"
        assert serialize_value(None) is None
        assert serialize_value(7450000) == 7450000


class TestParseProperty:
    """Tests for parse-or-default record reading."""

    def test_round_trip(self) -> None:
        record = PropertyRecord("4", "Dům", PropertyKind.HOUSE, None, 12000000, 0, 0, 0)
        assert parse_property(record_to_dict(record)) == record

    def test_not_a_mapping(self) -> None:
        assert parse_property(["1", "Byt"]) is None
        assert parse_property(None) is None

    def test_missing_fields_defaulted(self) -> None:
        record = parse_property({}, index=2)

        assert record is not None
        assert record.id == "3"
        assert record.name == "#3"
        assert record.kind is PropertyKind.APARTMENT
        assert record.location is None
        assert record.value == 0

    def test_bad_amounts_coerced(self) -> None:
        record = parse_property(
            {"id": "1", "name": "Byt", "kind": "apartment", "value": "abc", "debt": -5, "rent": 25000.5}
        )

        assert record is not None
        assert record.value == 0
        assert record.debt == 0
        assert record.rent == 25000

    def test_unknown_kind_defaults_to_apartment(self) -> None:
        record = parse_property({"id": "9", "name": "Chata", "kind": "cottage"})
        assert record is not None
        assert record.kind is PropertyKind.APARTMENT

    def test_numeric_id_becomes_text(self) -> None:
        record = parse_property({"id": 7, "name": "Byt", "kind": "apartment"})
        assert record is not None
        assert record.id == "7"

    def test_legacy_layout(self) -> None:
        raw = {
            "id": "1",
            "name": "Byt #1",
            "type": "apartment",
            "city": "Praha",
            "valueCZK": 7450000,
            "debtCZK": 2000000,
            "rentCZK": 25000,
            "mortgagePaymentCZK": 18000,
        }

        assert parse_property(raw) == PropertyRecord(
            "1", "Byt #1", PropertyKind.APARTMENT, "Praha", 7450000, 2000000, 25000, 18000
        )

    def test_legacy_placeholder_location(self) -> None:
        record = parse_property({"id": "4", "name": "Dům", "type": "house", "city": "—", "valueCZK": 0})

        assert record is not None
        assert record.kind is PropertyKind.HOUSE
        assert record.location is None

    def test_current_names_win_over_legacy(self) -> None:
        record = parse_property({"id": "1", "name": "Byt", "value": 100, "valueCZK": 999})
        assert record is not None
        assert record.value == 100


class TestParseProperties:
    """Tests for parse_properties."""

    def test_not_a_list(self) -> None:
        assert parse_properties({"id": "1"}) == []
        assert parse_properties(None) == []

    def test_skips_malformed_entries(self) -> None:
        records = parse_properties([{"id": "1", "name": "Byt", "kind": "apartment"}, "junk", 42])
        assert [r.id for r in records] == ["1"]

    def test_preserves_order(self) -> None:
        raw = [{"id": str(i), "name": f"Byt #{i}", "kind": "apartment"} for i in (3, 1, 2)]
        assert [r.id for r in parse_properties(raw)] == ["3", "1", "2"]


class TestParseHistory:
    """Tests for parse_history and parse_history_point."""

    def test_point_from_string_date(self) -> None:
        point = parse_history_point({"date": "2024-06-15", "equity": 100})
        assert point == EquityHistoryPoint(date(2024, 6, 15), 100)

    def test_point_from_date_object(self) -> None:
        point = parse_history_point({"date": date(2024, 6, 15), "equity": 100})
        assert point == EquityHistoryPoint(date(2024, 6, 15), 100)

    def test_point_from_timestamp_string(self) -> None:
        point = parse_history_point({"date": "2024-06-15T22:10:00.000Z", "equity": 1})
        assert point is not None
        assert point.date == date(2024, 6, 15)

    def test_point_invalid_date(self) -> None:
        assert parse_history_point({"date": "yesterday", "equity": 1}) is None
        assert parse_history_point({"equity": 1}) is None
        assert parse_history_point("2024-06-15") is None

    def test_point_bad_equity(self) -> None:
        assert parse_history_point({"date": "2024-06-15", "equity": "lots"}).equity == 0
        assert parse_history_point({"date": "2024-06-15", "equity": float("nan")}).equity == 0

    def test_point_negative_equity(self) -> None:
        assert parse_history_point({"date": "2024-06-15", "equity": -2500}).equity == -2500

    def test_sorted_and_deduplicated(self) -> None:
        raw = [
            {"date": "2024-06-20", "equity": 3},
            {"date": "2024-06-01", "equity": 1},
            {"date": "2024-06-20", "equity": 4},
            {"date": "bad", "equity": 9},
        ]

        assert parse_history(raw) == [
            EquityHistoryPoint(date(2024, 6, 1), 1),
            EquityHistoryPoint(date(2024, 6, 20), 4),
        ]

    def test_not_a_list(self) -> None:
        assert parse_history("[]") == []
        assert parse_history(None) == []

"""Tests for domain models."""

from dataclasses import replace
from datetime import date

import pytest

from re_portfolio.models import (
    AMOUNT_FIELDS,
    CommitResult,
    DraftRow,
    EquityHistoryPoint,
    PortfolioTotals,
    PropertyKind,
    PropertyRecord,
)


class TestPropertyRecord:
    """Tests for PropertyRecord model."""

    def test_defaults(self) -> None:
        record = PropertyRecord(id="1", name="Byt #1", kind=PropertyKind.APARTMENT)

        assert record.location is None
        for name in AMOUNT_FIELDS:
            assert getattr(record, name) == 0

    def test_kind_from_string(self) -> None:
        record = PropertyRecord(id="4", name="Dům", kind="house")
        assert record.kind is PropertyKind.HOUSE

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValueError):
            PropertyRecord(id="5", name="Pozemek", kind="land")

    def test_amounts_coerced_on_construction(self) -> None:
        record = PropertyRecord(
            id="1",
            name="Byt #1",
            kind=PropertyKind.APARTMENT,
            value=7450000.9,
            debt=-5,
            rent="25000",
            mortgage_payment=None,
        )

        assert record.value == 7450000
        assert record.debt == 0
        assert record.rent == 25000
        assert record.mortgage_payment == 0

    def test_amounts_coerced_on_replace(self) -> None:
        record = PropertyRecord(id="1", name="Byt #1", kind=PropertyKind.APARTMENT)
        updated = replace(record, value=-100, debt=2.5)

        assert updated.value == 0
        assert updated.debt == 2

    def test_equity_and_cashflow(self) -> None:
        record = PropertyRecord(
            id="1",
            name="Byt #1",
            kind=PropertyKind.APARTMENT,
            value=7450000,
            debt=2000000,
            rent=25000,
            mortgage_payment=18000,
        )

        assert record.equity == 5450000
        assert record.cashflow == 7000

    def test_equity_and_cashflow_may_be_negative(self) -> None:
        record = PropertyRecord(
            id="1",
            name="Byt #1",
            kind=PropertyKind.APARTMENT,
            value=1000,
            debt=5000,
            rent=0,
            mortgage_payment=300,
        )

        assert record.equity == -4000
        assert record.cashflow == -300


class TestDraftRow:
    """Tests for DraftRow model."""

    def test_defaults_are_zero_text(self) -> None:
        draft = DraftRow()
        assert (draft.value, draft.debt, draft.rent, draft.mortgage_payment) == ("0", "0", "0", "0")

    def test_from_record(self) -> None:
        record = PropertyRecord(
            id="1", name="Byt #1", kind=PropertyKind.APARTMENT, value=7450000, rent=25000
        )
        draft = DraftRow.from_record(record)

        assert draft.value == "7450000"
        assert draft.debt == "0"
        assert draft.rent == "25000"

    def test_to_amounts(self) -> None:
        draft = DraftRow(value="7 450 000", debt="2,000,000", rent="", mortgage_payment="abc")

        assert draft.to_amounts() == {
            "value": 7450000,
            "debt": 2000000,
            "rent": 0,
            "mortgage_payment": 0,
        }


class TestValueObjects:
    """Tests for history points and result objects."""

    def test_history_point(self) -> None:
        point = EquityHistoryPoint(date=date(2024, 6, 15), equity=-1000)
        assert point.date == date(2024, 6, 15)
        assert point.equity == -1000

    def test_totals_default_zero(self) -> None:
        assert PortfolioTotals() == PortfolioTotals(0, 0, 0, 0, 0, 0)

    def test_commit_result_defaults(self) -> None:
        result = CommitResult(ok=False, error="boom")
        assert result.total_equity is None
        assert result.history_date is None
        assert result.history_recorded is False

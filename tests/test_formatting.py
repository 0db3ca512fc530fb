"""Tests for amount display formatting."""

from re_portfolio.formatting import NBSP, format_czk, format_millions


class TestFormatCzk:
    """Tests for format_czk."""

    def test_grouping(self) -> None:
        assert format_czk(7450000) == f"7{NBSP}450{NBSP}000{NBSP}Kč"

    def test_small_amount(self) -> None:
        assert format_czk(950) == f"950{NBSP}Kč"

    def test_zero(self) -> None:
        assert format_czk(0) == f"0{NBSP}Kč"

    def test_negative(self) -> None:
        assert format_czk(-7000) == f"-7{NBSP}000{NBSP}Kč"


class TestFormatMillions:
    """Tests for format_millions."""

    def test_millions(self) -> None:
        assert format_millions(2500000) == "2.5M"

    def test_zero(self) -> None:
        assert format_millions(0) == "0.0M"

    def test_negative(self) -> None:
        assert format_millions(-1000000) == "-1.0M"

"""Tests for the portfolio command line script."""

import argparse
import os
import runpy
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from re_portfolio.exceptions import ConfigurationError

SCRIPT = Path(__file__).parent.parent / "scripts" / "portfolio.py"


@pytest.fixture(scope="module")
def cli() -> dict[str, Any]:
    """Globals of scripts/portfolio.py, loaded without running main()."""
    return runpy.run_path(str(SCRIPT))


def _args(**overrides: Any) -> argparse.Namespace:
    values = {"backend": None, "data_dir": None, "user": None, "timezone": None, "log_level": None}
    values.update(overrides)
    return argparse.Namespace(**values)


class TestBuildConfig:
    """Tests for build_config."""

    def test_overrides_applied(self, cli: dict[str, Any], tmp_path: Path) -> None:
        with patch.dict(os.environ, {"PORTFOLIO_BACKEND": "local"}):
            config = cli["build_config"](
                _args(backend="memory", data_dir=tmp_path, user="alice", timezone="Europe/Prague")
            )

        assert config.backend == "memory"
        assert config.local.data_dir == tmp_path
        assert config.user_id == "alice"
        assert config.history_timezone == "Europe/Prague"

    def test_unknown_timezone_override(self, cli: dict[str, Any]) -> None:
        with pytest.raises(ConfigurationError, match="Mars/Olympus"):
            cli["build_config"](_args(timezone="Mars/Olympus"))

    def test_main_reports_bad_timezone(self, cli: dict[str, Any]) -> None:
        argv = ["portfolio.py", "--backend", "memory", "--timezone", "Mars/Olympus", "show"]
        with patch("sys.argv", argv):
            assert cli["main"]() == 1

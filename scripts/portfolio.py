#!/usr/bin/env python3
"""Command line front end for the real-estate portfolio.

Shows totals and per-property equity/cashflow, edits amounts, prints the
net worth history and resets stored data. The backend (local JSON files,
in-memory or PostgreSQL) comes from the environment unless overridden.

Examples::

    python scripts/portfolio.py show
    python scripts/portfolio.py edit --record 1 --value "7 450 000" --debt "2 000 000"
    python scripts/portfolio.py --backend postgres --user alice init-db
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from re_portfolio.config import PortfolioConfig
from re_portfolio.exceptions import PortfolioError
from re_portfolio.formatting import format_czk, format_millions
from re_portfolio.logging import setup_logging
from re_portfolio.reconciler import PortfolioReconciler

logger = logging.getLogger(__name__)

EDIT_OPTIONS = {
    "value": "value",
    "debt": "debt",
    "rent": "rent",
    "mortgage": "mortgage_payment",
}


def print_portfolio(reconciler: PortfolioReconciler) -> None:
    """Print totals and one block per property."""
    totals = reconciler.totals
    print("=" * 60)
    print("Real Estate Portfolio (CZ)")
    print("=" * 60)
    print(f"  Total Property Value:        {format_czk(totals.total_value)}")
    print(f"  Total Debt:                  {format_czk(totals.total_debt)}")
    print(f"  Total Equity (Value - Debt): {format_czk(totals.total_equity)}")
    print(f"  Monthly Rent (gross):        {format_czk(totals.total_rent)}")
    print(f"  Monthly Mortgage (payments): {format_czk(totals.total_mortgage)}")
    print(f"  Net Monthly Cashflow:        {format_czk(totals.net_cashflow)}")

    if reconciler.last_point:
        print(f"  Last saved point:            {reconciler.last_point.date.isoformat()}")

    print("-" * 60)
    for index, record in enumerate(reconciler.properties, start=1):
        print(f"[{index}] {record.name} ({record.kind.value} · {record.location or '—'})")
        print(f"    Value:            {format_czk(record.value)}")
        print(f"    Debt:             {format_czk(record.debt)}")
        print(f"    Rent / month:     {format_czk(record.rent)}")
        print(f"    Mortgage / month: {format_czk(record.mortgage_payment)}")
        print(f"    Equity:           {format_czk(record.equity)}")
        print(f"    Cashflow / month: {format_czk(record.cashflow)}")


def print_history(reconciler: PortfolioReconciler) -> None:
    """Print the net worth series, one line per saved day."""
    if not reconciler.history:
        print("No history yet. Run 'edit' to record the first point.")
        return

    print("Net Worth History (Equity)")
    for point in reconciler.history:
        print(f"  {point.date.isoformat()}  {format_millions(point.equity):>8}  {format_czk(point.equity)}")


def cmd_edit(reconciler: PortfolioReconciler, args: argparse.Namespace) -> int:
    """Change amounts of one property and save."""
    index = args.record - 1
    if not 0 <= index < len(reconciler.properties):
        logger.error("Record %d does not exist (1-%d)", args.record, len(reconciler.properties))
        return 2

    reconciler.open_editor()
    for option, field_name in EDIT_OPTIONS.items():
        text = getattr(args, option)
        if text is not None:
            reconciler.set_draft_field(index, field_name, text)

    result = reconciler.save_editor()
    if not result.ok:
        print(result.error)
        return 1

    print(f"Saved. Total equity {format_czk(result.total_equity)} recorded for {result.history_date.isoformat()}.")
    if not result.history_recorded:
        print("Warning: the history point could not be recorded.")
    return 0


def build_config(args: argparse.Namespace) -> PortfolioConfig:
    """Environment configuration with command line overrides."""
    config = PortfolioConfig.from_env()
    if args.backend:
        config.backend = args.backend
    if args.data_dir:
        config.local.data_dir = args.data_dir
    if args.user:
        config.user_id = args.user
    if args.timezone:
        config.history_timezone = args.timezone
    if args.log_level:
        config.log_level = args.log_level
    config.validate()
    return config


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Track real-estate equity and cashflow")
    parser.add_argument(
        "--backend",
        choices=["local", "memory", "postgres"],
        default=None,
        help="Persistence backend (default: PORTFOLIO_BACKEND or local)",
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory for the local backend")
    parser.add_argument("--user", type=str, default=None, help="Owner identity (default: PORTFOLIO_USER)")
    parser.add_argument("--timezone", type=str, default=None, help="IANA zone used to date history points")
    parser.add_argument("--log-level", type=str, default=None, help="Log level (default: LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("show", help="Show totals and properties")
    subparsers.add_parser("history", help="Show the net worth history")
    subparsers.add_parser("reset", help="Delete stored properties and history")
    subparsers.add_parser("init-db", help="Create PostgreSQL tables")

    edit = subparsers.add_parser("edit", help="Edit one property's amounts and save")
    edit.add_argument("--record", type=int, required=True, help="Property number as listed by 'show'")
    edit.add_argument("--value", type=str, default=None, help='Value, e.g. "7 450 000"')
    edit.add_argument("--debt", type=str, default=None, help="Outstanding debt")
    edit.add_argument("--rent", type=str, default=None, help="Monthly rent")
    edit.add_argument("--mortgage", type=str, default=None, help="Monthly mortgage payment")

    args = parser.parse_args()

    try:
        config = build_config(args)
        setup_logging(config.log_level, config.log_format)
        reconciler = PortfolioReconciler.from_config(config)
    except PortfolioError as e:
        logger.error("%s", e)
        return 1

    try:
        if args.command == "init-db":
            if config.backend != "postgres":
                logger.error("init-db only applies to the postgres backend")
                return 2
            reconciler.persistence.create_tables()
            return 0

        if args.command == "reset":
            return 0 if reconciler.reset() else 1

        if not reconciler.load():
            logger.error("Could not load the portfolio")
            return 1

        if args.command == "show":
            print_portfolio(reconciler)
        elif args.command == "history":
            print_history(reconciler)
        elif args.command == "edit":
            return cmd_edit(reconciler, args)
        return 0
    except PortfolioError as e:
        logger.error("%s", e)
        return 1
    finally:
        reconciler.close()


if __name__ == "__main__":
    sys.exit(main())

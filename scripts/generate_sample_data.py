#!/usr/bin/env python3
"""Fill a local portfolio with sample amounts for manual validation.

Amounts are drawn with Faker and typed the way people type them ("7 450 000",
"7,450,000", "7450000") so the whole save path, normalization included, is
exercised. Only today's history point is written.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from faker import Faker

from re_portfolio.config import LocalStorageConfig, PortfolioConfig
from re_portfolio.formatting import format_czk
from re_portfolio.logging import setup_logging
from re_portfolio.models import DraftRow, PropertyKind, PropertyRecord
from re_portfolio.reconciler import PortfolioReconciler


def typed_amount(fake: Faker, amount: int) -> str:
    """Render ``amount`` with one of the grouping styles users type."""
    style = fake.random_element(["space", "comma", "dot", "plain"])
    grouped = f"{amount:,}"
    if style == "space":
        return grouped.replace(",", " ")
    if style == "dot":
        return grouped.replace(",", ".")
    if style == "comma":
        return grouped
    return str(amount)


def sample_draft(fake: Faker, record: PropertyRecord) -> DraftRow:
    """Plausible Czech amounts for one property."""
    if record.kind == PropertyKind.HOUSE:
        value = fake.random_int(min=8_000_000, max=20_000_000, step=50_000)
        rent = 0
    else:
        value = fake.random_int(min=3_500_000, max=12_000_000, step=10_000)
        rent = fake.random_int(min=12_000, max=35_000, step=500)

    debt = fake.random_int(min=0, max=int(value * 0.8), step=10_000)
    mortgage = fake.random_int(min=0, max=max(debt // 200, 1), step=100) if debt else 0

    return DraftRow(
        value=typed_amount(fake, value),
        debt=typed_amount(fake, debt),
        rent=typed_amount(fake, rent),
        mortgage_payment=typed_amount(fake, mortgage),
    )


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Generate a sample local portfolio")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("local"),
        help="Directory for the local store (default: local/)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility (default: 42)")
    args = parser.parse_args()

    setup_logging("INFO")

    fake = Faker("cs_CZ")
    fake.seed_instance(args.seed)

    config = PortfolioConfig(backend="local", local=LocalStorageConfig(data_dir=args.data_dir))
    reconciler = PortfolioReconciler.from_config(config)
    try:
        if not reconciler.load():
            print("Could not load the portfolio")
            return 1

        drafts = reconciler.open_editor()
        for i, record in enumerate(reconciler.properties):
            drafts[i] = sample_draft(fake, record)
            print(f"{record.name}: value={drafts[i].value!r} debt={drafts[i].debt!r}")

        result = reconciler.save_editor()
        if not result.ok:
            print(result.error)
            return 1

        totals = reconciler.totals
        print(f"\nTotal equity: {format_czk(totals.total_equity)}")
        print(f"Net monthly cashflow: {format_czk(totals.net_cashflow)}")
        print(f"Saved to: {args.data_dir}")
        return 0
    finally:
        reconciler.close()


if __name__ == "__main__":
    sys.exit(main())

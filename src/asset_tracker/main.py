"""CLI entry point for syncing scraped asset valuations to Lunch Money.

Usage:
    python -m src.asset_tracker.main
    python -m src.asset_tracker.main --assets config/assets.json --dry-run
    python -m src.asset_tracker.main --output data/last_run.json --verbose
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from src.common.config import Settings, get_lunch_money_api_key
from src.common.logging import setup_logging

from .assets import ConfigError, load_assets
from .browser import BrowserSession
from .ledger_client import LunchMoneyClient
from .models import RunSummary
from .pipeline import SyncPipeline

logger = logging.getLogger(__name__)


async def run(
    settings: Settings,
    api_key: str,
    assets_path: Path,
    dry_run: bool = False,
) -> RunSummary:
    """Load assets, then value and update each one with a shared browser."""
    entries = load_assets(assets_path)

    with LunchMoneyClient(api_key, settings.ledger, dry_run=dry_run) as ledger:
        session = BrowserSession(settings.browser)
        await session.start()
        try:
            pipeline = SyncPipeline(session, ledger)
            return await pipeline.run(entries)
        finally:
            await session.stop()


def write_report(summary: RunSummary, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(summary.to_dict(), f, ensure_ascii=False, indent=2)
    logger.info("Run report written to %s", output_path)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Scrape vehicle and home valuations and update Lunch Money assets",
    )
    parser.add_argument(
        "--assets",
        type=str,
        default=None,
        help="Path to assets JSON (default: settings assets_path, 'assets.json')",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Scrape and reconcile, but do not call the Lunch Money API",
    )
    parser.add_argument(
        "--headful",
        action="store_true",
        help="Show the browser window (default: headless)",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Write a JSON run report to this path",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        module_name="src",
    )

    try:
        api_key = get_lunch_money_api_key()
    except ValueError:
        print("Lunch Money API key not set", file=sys.stderr)
        return 1

    settings = Settings.load()
    if args.headful:
        settings.browser.headless = False
    assets_path = Path(args.assets or settings.assets_path)

    try:
        summary = asyncio.run(run(settings, api_key, assets_path, dry_run=args.dry_run))
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    if args.output:
        write_report(summary, Path(args.output))

    print("assets updated")
    return 0


if __name__ == "__main__":
    sys.exit(main())

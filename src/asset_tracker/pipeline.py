"""Sync pipeline: valuation pages to ledger balances.

Orchestrates, one asset at a time:
assets.json entry → site extractor(s) → reconcile → LunchMoneyClient.update_asset

Usage:
    pipeline = SyncPipeline(session, ledger)
    summary = await pipeline.run(entries)
"""

from __future__ import annotations

import logging

from .base_extractor import BaseSiteExtractor
from .browser import TextExtractor
from .home_extractors import RedfinExtractor, ZillowExtractor
from .kbb_extractor import KbbExtractor
from .ledger_client import LunchMoneyClient
from .models import AssetEntry, AssetKind, AssetOutcome, RunSummary
from .parsing import is_valid
from .reconciler import reconcile

logger = logging.getLogger(__name__)


def classify(entry: AssetEntry) -> AssetKind:
    """Decide which extractors apply from the entry's URLs."""
    if KbbExtractor.handles(entry.url):
        return AssetKind.VEHICLE
    if ZillowExtractor.handles(entry.url) or RedfinExtractor.handles(entry.redfin):
        return AssetKind.HOME
    return AssetKind.UNSUPPORTED


class SyncPipeline:
    """Values every configured asset and pushes the result to the ledger.

    Steps per asset:
    1. Classify the entry (vehicle / home / unsupported)
    2. Extract a price from each configured source
    3. Use the single vehicle price, or reconcile home readings (rounded mean)
    4. Update the ledger balance, unless no reading was valid
    """

    def __init__(self, session: TextExtractor, ledger: LunchMoneyClient) -> None:
        self.session = session
        self.ledger = ledger
        self.kbb = KbbExtractor(session)
        self.zillow = ZillowExtractor(session)
        self.redfin = RedfinExtractor(session)

    async def run(self, entries: list[AssetEntry]) -> RunSummary:
        summary = RunSummary()
        for entry in entries:
            summary.outcomes.append(await self.sync_asset(entry))

        logger.info(
            "Sync complete: %d updated, %d skipped, %d failed (of %d)",
            summary.updated, summary.skipped, summary.failed, summary.total,
        )
        return summary

    async def sync_asset(self, entry: AssetEntry) -> AssetOutcome:
        kind = classify(entry)
        outcome = AssetOutcome(asset_id=entry.asset_id, kind=kind)

        if not entry.has_source:
            logger.error("unsupported asset type: %d has no source URL", entry.asset_id)
            outcome.error = "no source configured"
            return outcome

        if kind is AssetKind.VEHICLE:
            sources = [(self.kbb, entry.url)]
        elif kind is AssetKind.HOME:
            # Zillow reads whatever page is in "url", Redfin the "redfin" page
            sources = [(self.zillow, entry.url), (self.redfin, entry.redfin)]
        else:
            logger.error("unsupported asset type: %d (%s)", entry.asset_id, entry.url or entry.redfin)
            outcome.error = "unsupported asset type"
            return outcome

        values = await self._collect(sources, outcome)
        logger.debug("Asset %d readings: %s", entry.asset_id, values)

        if kind is AssetKind.VEHICLE:
            # Single source: the parsed price is sent as-is, unrounded
            value = values[0] if values and is_valid(values[0]) else None
        else:
            value = reconcile(values)
        if value is None:
            logger.warning("No valid price for asset %d, skipping update", entry.asset_id)
            outcome.error = "no valid price"
            return outcome

        outcome.reconciled_value = value
        result = self.ledger.update_asset(entry.asset_id, value)
        outcome.updated = result.ok
        outcome.error = result.error
        return outcome

    async def _collect(
        self,
        sources: list[tuple[BaseSiteExtractor, str | None]],
        outcome: AssetOutcome,
    ) -> list[float | None]:
        """Query each configured source in order; failures become None."""
        values: list[float | None] = []
        for extractor, url in sources:
            if not url:
                continue
            result = await extractor.fetch_price(url)
            price = result.value if result.succeeded else None
            if not result.succeeded:
                logger.debug(
                    "%s failed for %s: %s %s",
                    extractor.SOURCE_NAME, url, result.reason.value, result.detail,
                )
            outcome.source_values[extractor.SOURCE_NAME] = price
            values.append(price)
        return values

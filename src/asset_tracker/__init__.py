"""Asset Tracker - scrape vehicle and home valuations into Lunch Money."""

from .assets import ConfigError, load_assets
from .browser import BrowserSession
from .home_extractors import RedfinExtractor, ZillowExtractor
from .kbb_extractor import KbbExtractor
from .ledger_client import LunchMoneyClient, UpdateResult
from .models import (
    AssetEntry,
    AssetKind,
    AssetOutcome,
    ExtractionResult,
    FailureReason,
    RunSummary,
)
from .parsing import is_valid, parse_currency
from .pipeline import SyncPipeline
from .reconciler import reconcile

__version__ = "0.1.0"

__all__ = [
    "AssetEntry",
    "AssetKind",
    "AssetOutcome",
    "BrowserSession",
    "ConfigError",
    "ExtractionResult",
    "FailureReason",
    "KbbExtractor",
    "LunchMoneyClient",
    "RedfinExtractor",
    "RunSummary",
    "SyncPipeline",
    "UpdateResult",
    "ZillowExtractor",
    "is_valid",
    "load_assets",
    "parse_currency",
    "reconcile",
]

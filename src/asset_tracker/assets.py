"""Loading of the assets.json mapping of ledger asset IDs to valuation pages.

Format:
    {
        "101": {"url": "https://www.kbb.com/..."},
        "102": {"url": "https://www.zillow.com/...", "redfin": "https://www.redfin.com/..."}
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .models import AssetEntry

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """The assets file is missing or is not a JSON object."""


def load_assets(path: Path | str) -> list[AssetEntry]:
    """Read and validate asset entries, preserving file order.

    Malformed entries are logged and dropped so one bad line does not
    stop the remaining assets from syncing.

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Assets file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Assets file is not valid JSON: {path} ({e})") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Assets file must contain a JSON object: {path}")

    entries: list[AssetEntry] = []
    for key, metadata in data.items():
        entry = parse_entry(key, metadata)
        if entry is not None:
            entries.append(entry)

    logger.info("Loaded %d/%d asset entries from %s", len(entries), len(data), path)
    return entries


def parse_entry(key: str, metadata: object) -> AssetEntry | None:
    """Build an AssetEntry from one key/value pair, or None if malformed."""
    try:
        asset_id = int(key)
    except (TypeError, ValueError):
        logger.error("unsupported asset type: asset id %r is not an integer", key)
        return None

    if not isinstance(metadata, dict):
        logger.error("unsupported asset type: entry %s is not an object", key)
        return None

    try:
        return AssetEntry(asset_id=asset_id, **metadata)
    except (TypeError, ValidationError) as e:
        logger.error("unsupported asset type: entry %s is invalid (%s)", key, e)
        return None

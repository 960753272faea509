"""Shared test fixtures for the asset tracker."""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.asset_tracker.ledger_client import UpdateResult
from src.asset_tracker.models import ExtractionResult, FailureReason


class FakeSession:
    """Stands in for BrowserSession, answering queries from a lookup table.

    responses maps (url, xpath) to the text returned, or to an Exception
    instance to simulate an evaluation failure.
    """

    def __init__(self, responses: dict | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[str, str]] = []

    async def extract_text(self, page_url: str, xpath: str) -> ExtractionResult:
        self.calls.append((page_url, xpath))
        response = self.responses.get((page_url, xpath))
        if isinstance(response, Exception):
            return ExtractionResult.fail(FailureReason.EVALUATION_ERROR, str(response))
        if response is None:
            return ExtractionResult.fail(FailureReason.NODE_NOT_FOUND, xpath)
        return ExtractionResult.ok(response)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def fake_session_factory():
    """Build a FakeSession from a {(url, xpath): text} mapping."""
    return FakeSession


@pytest.fixture
def mock_ledger() -> MagicMock:
    """LunchMoneyClient double whose updates always succeed."""
    ledger = MagicMock()
    ledger.update_asset.side_effect = lambda asset_id, price: UpdateResult(
        asset_id=asset_id, balance=str(price)
    )
    return ledger


@pytest.fixture
def write_assets(tmp_path):
    """Write an assets mapping to a temporary assets.json and return its path."""

    def _write(data) -> Path:
        path = tmp_path / "assets.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write

"""Lunch Money API client for updating manually-managed asset balances.

API docs: https://lunchmoney.dev/#update-asset
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from src.common.config import LedgerSettings

logger = logging.getLogger(__name__)

ASSETS_PATH = "/v1/assets"


def format_balance(price: float) -> str:
    """Render a balance the way the API stores it: 8450.0 -> "8450"."""
    if isinstance(price, float) and price.is_integer():
        return str(int(price))
    return str(price)


@dataclass
class UpdateResult:
    """Response to one asset update. error is None on success."""

    asset_id: int
    balance: str
    error: str | None = None
    response: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LunchMoneyClient:
    """Client for the Lunch Money assets endpoint.

    Usage:
        client = LunchMoneyClient(api_key, settings.ledger)
        result = client.update_asset(42, 305000)
    """

    def __init__(
        self,
        api_key: str,
        settings: LedgerSettings | None = None,
        dry_run: bool = False,
    ) -> None:
        self.settings = settings or LedgerSettings()
        self.dry_run = dry_run
        self._session = requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def update_asset(self, asset_id: int, price: float) -> UpdateResult:
        """Set the balance of asset_id. Failures are logged, never raised."""
        balance = format_balance(price)
        logger.info("updating %d to price: %s", asset_id, balance)

        if self.dry_run:
            logger.info("Dry run: skipping API call for asset %d", asset_id)
            return UpdateResult(asset_id=asset_id, balance=balance)

        url = f"{self.settings.base_url.rstrip('/')}{ASSETS_PATH}/{asset_id}"
        try:
            resp = self._session.put(
                url,
                json={"balance": balance},
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as e:
            logger.error("Error updating asset: %s", e)
            return UpdateResult(asset_id=asset_id, balance=balance, error=str(e))

        data = self._parse_body(resp)
        error = self._extract_error(resp, data)
        if error:
            logger.error("Error updating asset: %s", error)
        return UpdateResult(
            asset_id=asset_id, balance=balance, error=error, response=data,
        )

    @staticmethod
    def _parse_body(resp: requests.Response) -> dict[str, Any] | None:
        try:
            data = resp.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    @staticmethod
    def _extract_error(
        resp: requests.Response, data: dict[str, Any] | None
    ) -> str | None:
        """Error message from the body's error field or the HTTP status."""
        if data and data.get("error"):
            err = data["error"]
            # The API reports validation problems as a list of messages
            if isinstance(err, list):
                return "; ".join(str(e) for e in err)
            return str(err)
        if not resp.ok:
            return f"HTTP {resp.status_code}: {resp.text[:200]}"
        return None

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> LunchMoneyClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

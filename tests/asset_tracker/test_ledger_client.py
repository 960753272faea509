"""Tests for the Lunch Money client (mocked HTTP)."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.asset_tracker.ledger_client import LunchMoneyClient, format_balance
from src.common.config import LedgerSettings


def make_response(status_code: int = 200, json_data=None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture
def client() -> LunchMoneyClient:
    return LunchMoneyClient(
        "test-token",
        LedgerSettings(base_url="https://ledger.test/", request_timeout=5),
    )


class TestFormatBalance:
    def test_integral_float(self):
        assert format_balance(8450.0) == "8450"

    def test_int(self):
        assert format_balance(305000) == "305000"

    def test_fractional(self):
        assert format_balance(12345.67) == "12345.67"


class TestUpdateAsset:
    def test_success(self, client):
        resp = make_response(200, {"id": 1, "balance": "8450.0000"})
        with patch.object(client._session, "put", return_value=resp) as mock_put:
            result = client.update_asset(1, 8450.0)

        assert result.ok
        assert result.balance == "8450"
        assert result.response == {"id": 1, "balance": "8450.0000"}
        mock_put.assert_called_once_with(
            "https://ledger.test/v1/assets/1",
            json={"balance": "8450"},
            timeout=5,
        )

    def test_auth_header(self, client):
        assert client._session.headers["Authorization"] == "Bearer test-token"

    def test_error_field_is_reported(self, client, caplog):
        resp = make_response(200, {"error": "Asset not found"})
        with patch.object(client._session, "put", return_value=resp):
            with caplog.at_level("ERROR"):
                result = client.update_asset(99, 100.0)

        assert not result.ok
        assert result.error == "Asset not found"
        assert "Error updating asset: Asset not found" in caplog.text

    def test_error_list_joined(self, client):
        resp = make_response(400, {"error": ["balance must be a number", "bad id"]})
        with patch.object(client._session, "put", return_value=resp):
            result = client.update_asset(2, 1.0)
        assert result.error == "balance must be a number; bad id"

    def test_http_error_without_body(self, client):
        resp = make_response(502, None, text="Bad Gateway")
        with patch.object(client._session, "put", return_value=resp):
            result = client.update_asset(3, 1.0)
        assert result.error == "HTTP 502: Bad Gateway"

    def test_transport_error_not_raised(self, client):
        with patch.object(
            client._session, "put",
            side_effect=requests.ConnectionError("connection refused"),
        ):
            result = client.update_asset(4, 1.0)
        assert not result.ok
        assert "connection refused" in result.error

    def test_dry_run_makes_no_request(self):
        client = LunchMoneyClient("token", dry_run=True)
        with patch.object(client._session, "put") as mock_put:
            result = client.update_asset(5, 450000)
        assert result.ok
        assert result.balance == "450000"
        mock_put.assert_not_called()

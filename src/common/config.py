"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class BrowserSettings(BaseModel):
    """Settings for the headless browser session."""
    headless: bool = True
    screenshot_dir: str = "/tmp"
    wait_timeout_ms: int = 30_000  # node-appearance wait; navigation has no ceiling
    user_agent: str | None = None
    stealth: bool = True


class LedgerSettings(BaseModel):
    """Lunch Money API settings."""
    base_url: str = "https://dev.lunchmoney.app"
    request_timeout: int = 30


class Settings(BaseModel):
    """Top-level application settings."""
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    assets_path: str = "assets.json"

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment variables override file values.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        settings = cls(**data)
        settings.apply_env_overrides()
        return settings

    def apply_env_overrides(self) -> None:
        if path := os.getenv("ASSETS_PATH"):
            self.assets_path = path
        if url := os.getenv("LUNCH_MONEY_BASE_URL"):
            self.ledger.base_url = url
        if screenshot_dir := os.getenv("SCREENSHOT_DIR"):
            self.browser.screenshot_dir = screenshot_dir
        if headless := os.getenv("HEADLESS"):
            self.browser.headless = headless.strip().lower() not in ("0", "false", "no")


def get_lunch_money_api_key() -> str:
    """Get Lunch Money API key from environment."""
    key = os.getenv("LUNCH_MONEY_API_KEY", "")
    if not key:
        raise ValueError("LUNCH_MONEY_API_KEY not set in environment")
    return key


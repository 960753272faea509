"""Headless browser session for XPath text extraction using Playwright.

One Chromium instance is launched per run and shared by every extractor.
Each extract_text() call opens its own page and closes it before returning,
so no query sees another query's page state.

Page text is read with document.evaluate() inside the page rather than a
Playwright locator, because locators only resolve elements and several of
the queries select attribute nodes (e.g. //object/@data).
"""

from __future__ import annotations

import logging
import os
import re
import time
from pathlib import Path
from typing import Optional, Protocol

from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)
from playwright_stealth import Stealth

from src.common.config import BrowserSettings

from .models import ExtractionResult, FailureReason

logger = logging.getLogger(__name__)

# Returns the first matching node's textContent (attribute nodes included)
EVALUATE_XPATH_JS = """
(xpath) => {
    const node = document.evaluate(
        xpath, document, null, XPathResult.FIRST_ORDERED_NODE_TYPE, null
    ).singleNodeValue;
    return node ? node.textContent : null;
}
"""

# Trailing attribute step, e.g. "//object/@data" -> "//object"
_ATTRIBUTE_STEP_RE = re.compile(r"/@[\w:-]+$")


class TextExtractor(Protocol):
    """Anything that can answer an XPath text query for a page URL."""

    async def extract_text(self, page_url: str, xpath: str) -> ExtractionResult:
        ...


def _is_root_user() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0


def launch_args() -> list[str]:
    """Chromium flags; the sandbox cannot start when running as root."""
    if _is_root_user():
        return ["--no-sandbox", "--disable-setuid-sandbox"]
    return ["--disable-setuid-sandbox"]


def wait_selector_for(xpath: str) -> str:
    """Playwright selector to wait on before evaluating xpath.

    Playwright only waits for elements, so an attribute query waits for
    the element that owns the attribute.
    """
    return "xpath=" + _ATTRIBUTE_STEP_RE.sub("", xpath)


class BrowserSession:
    """Shared Playwright browser for a sync run.

    Usage:
        async with BrowserSession(settings.browser) as session:
            result = await session.extract_text(url, "//h3")
    """

    def __init__(self, settings: BrowserSettings | None = None) -> None:
        self.settings = settings or BrowserSettings()
        self._playwright = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._stealth = Stealth() if self.settings.stealth else None

    # --- Lifecycle ---

    async def start(self) -> None:
        """Launch headless Chromium and open a browser context."""
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.settings.headless,
            args=launch_args(),
        )
        context_kwargs = {}
        if self.settings.user_agent:
            context_kwargs["user_agent"] = self.settings.user_agent
        self._context = await self._browser.new_context(**context_kwargs)
        logger.info(
            "Chromium launched (headless=%s, stealth=%s)",
            self.settings.headless, self._stealth is not None,
        )

    async def stop(self) -> None:
        """Close the browser and the Playwright driver."""
        if self._context:
            await self._context.close()
            self._context = None
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        logger.info("Browser closed")

    async def __aenter__(self) -> BrowserSession:
        await self.start()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.stop()

    # --- Extraction ---

    async def _new_page(self) -> Page:
        if self._context is None:
            raise RuntimeError("BrowserSession.start() has not been called")
        page = await self._context.new_page()
        if self._stealth is not None:
            await self._stealth.apply_stealth_async(page)
        return page

    async def extract_text(self, page_url: str, xpath: str) -> ExtractionResult:
        """Load page_url and return the text content of the first xpath match.

        Navigation has no timeout. A timeout while waiting for the node is
        logged and evaluation proceeds anyway. Navigation and evaluation
        errors save a full-page screenshot and return a failure result.
        """
        page = await self._new_page()
        try:
            try:
                await page.goto(page_url, timeout=0)
            except Exception as e:
                logger.warning("Navigation to %s failed: %s", page_url, e)
                await self._save_screenshot(page)
                return ExtractionResult.fail(FailureReason.NAVIGATION_FAILED, str(e))

            try:
                await page.wait_for_selector(
                    wait_selector_for(xpath),
                    state="attached",
                    timeout=self.settings.wait_timeout_ms,
                )
            except PlaywrightTimeoutError:
                logger.info("wait for xpath was not successful: %s", xpath)
            except Exception as e:
                # e.g. the page navigated mid-wait; evaluation decides the result
                logger.info("wait for xpath %s failed: %s", xpath, e)

            try:
                text = await page.evaluate(EVALUATE_XPATH_JS, xpath)
            except Exception as e:
                logger.warning(
                    "Error pulling xpath (%s) from page (%s) with error: %s",
                    xpath, page_url, e,
                )
                await self._save_screenshot(page)
                return ExtractionResult.fail(FailureReason.EVALUATION_ERROR, str(e))

            if not text:
                return ExtractionResult.fail(
                    FailureReason.NODE_NOT_FOUND, f"{xpath} on {page_url}"
                )
            return ExtractionResult.ok(text)
        finally:
            await page.close()

    # --- Debug ---

    async def _save_screenshot(self, page: Page) -> Optional[Path]:
        """Save a full-page screenshot for debugging; never raises."""
        screenshot_dir = Path(self.settings.screenshot_dir)
        path = screenshot_dir / f"xpath-error-{int(time.time() * 1000)}.png"
        try:
            screenshot_dir.mkdir(parents=True, exist_ok=True)
            await page.screenshot(path=str(path), full_page=True)
            logger.info("Screenshot saved: %s", path)
            return path
        except Exception as e:
            logger.warning("Screenshot failed: %s", e)
            return None

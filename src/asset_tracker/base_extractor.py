"""Base class for valuation-site extractors.

Each site keeps its XPath queries in its own class, so a layout change on
one site means editing one module. Extractors receive the shared browser
session explicitly and return an ExtractionResult holding a parsed price.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .browser import TextExtractor
from .models import ExtractionResult, FailureReason
from .parsing import is_valid, parse_currency

logger = logging.getLogger(__name__)


class BaseSiteExtractor(ABC):
    """Abstract base for per-site price extractors."""

    # Short label used in logs and run reports
    SOURCE_NAME = ""
    # Substring identifying the site's URLs
    DOMAIN = ""

    def __init__(self, session: TextExtractor) -> None:
        self.session = session

    @classmethod
    def handles(cls, url: str | None) -> bool:
        return bool(url) and cls.DOMAIN in url

    @abstractmethod
    async def fetch_price(self, url: str) -> ExtractionResult:
        """Return the page's price as a float result. Site-specific."""
        ...

    @staticmethod
    def _to_price(text: str, source: str) -> ExtractionResult:
        """Normalize scraped price text; NaN becomes an invalid-value failure."""
        price = parse_currency(text)
        if not is_valid(price):
            logger.warning("Unparseable price %r from %s", text, source)
            return ExtractionResult.fail(
                FailureReason.INVALID_VALUE, f"{text!r} from {source}"
            )
        return ExtractionResult.ok(price)


class SingleQueryExtractor(BaseSiteExtractor):
    """Site whose price is plain text at one XPath in the page DOM."""

    PRICE_XPATH = ""

    async def fetch_price(self, url: str) -> ExtractionResult:
        result = await self.session.extract_text(url, self.PRICE_XPATH)
        if result.succeeded and not is_valid(result.value):
            result = ExtractionResult.fail(FailureReason.NODE_NOT_FOUND, url)
        if not result.succeeded:
            logger.info(
                "could not find %s home value for %s", self.SOURCE_NAME, url
            )
            return result
        return self._to_price(result.value, url)

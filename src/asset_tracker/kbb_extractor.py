"""Kelley Blue Book vehicle valuation extractor.

KBB draws its price range as an SVG loaded through an <object> element,
so the price is not in the page DOM. Extraction takes two steps:

1. read the SVG address from //object/@data on the vehicle page
2. open the SVG itself and read the 4th <text> inside the RangeBox group
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin

from .base_extractor import BaseSiteExtractor
from .models import ExtractionResult, FailureReason
from .parsing import is_valid

logger = logging.getLogger(__name__)


class KbbExtractor(BaseSiteExtractor):
    """Two-stage extractor for kbb.com valuation pages."""

    SOURCE_NAME = "kbb"
    DOMAIN = "kbb.com"

    # The <object> sometimes sits outside #priceAdvisorWrapper, so match any
    SVG_PATH_XPATH = "//object/@data"
    PRICE_XPATH = "//*[@id='RangeBox']/*[name()='text'][4]"

    async def fetch_price(self, url: str) -> ExtractionResult:
        svg_result = await self.session.extract_text(url, self.SVG_PATH_XPATH)
        if svg_result.succeeded and not is_valid(svg_result.value):
            svg_result = ExtractionResult.fail(FailureReason.NODE_NOT_FOUND, url)
        if not svg_result.succeeded:
            logger.info("could not find svg path for %s", url)
            return svg_result

        svg_url = urljoin(url, svg_result.value.strip())
        price_result = await self.session.extract_text(svg_url, self.PRICE_XPATH)
        if price_result.succeeded and not is_valid(price_result.value):
            price_result = ExtractionResult.fail(FailureReason.NODE_NOT_FOUND, svg_url)
        if not price_result.succeeded:
            logger.info("could not find kbb price on svg %s", svg_url)
            return price_result

        return self._to_price(price_result.value, svg_url)

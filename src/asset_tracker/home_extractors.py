"""Home valuation extractors for Zillow and Redfin.

Both sites render the estimate as plain text in the page DOM. If either
query stops matching, open the listing in a browser, locate the estimate
and copy its new XPath here.
"""

from __future__ import annotations

from .base_extractor import SingleQueryExtractor


class ZillowExtractor(SingleQueryExtractor):
    """Zestimate from the home-details values panel."""

    SOURCE_NAME = "zillow"
    DOMAIN = "zillow.com"
    PRICE_XPATH = (
        '//*[@id="home-details-home-values"]/div/div[1]/div/div/div[1]/div/p/h3'
    )


class RedfinExtractor(SingleQueryExtractor):
    """Redfin Estimate from the above-the-fold price stats."""

    SOURCE_NAME = "redfin"
    DOMAIN = "redfin.com"
    PRICE_XPATH = '//*[@data-rf-test-id="abp-price"]/div[@class="statsValue"]'

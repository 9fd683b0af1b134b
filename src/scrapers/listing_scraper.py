# src/scrapers/listing_scraper.py

"""Listing extractor for the resultspage.com product search."""

from datetime import datetime, timezone
from urllib.parse import quote, urlencode

from bs4 import Tag

from src.models.product import ProductSummary
from src.scrapers.base_scraper import BaseScraper
from src.scrapers.errors import FetchError


class ListingScraper(BaseScraper):
    """Fetch one search-results page and parse it into summaries.

    Every field lookup is independent: a listing node missing its
    title, price or SKU still yields a summary, with ``""`` in place
    of whatever could not be found.
    """

    def __init__(self) -> None:
        super().__init__("listing")
        self.listing_selectors: dict[str, str] = self.selectors["listing"]

    def build_search_url(self, search_term: str) -> str:
        """Return the search URL with *search_term* encoded into ``w``."""
        params = {
            **self.settings.SEARCH_PARAMS,
            self.settings.SEARCH_TERM_PARAM: search_term,
        }
        return (
            f"{self.settings.SEARCH_URL}?"
            f"{urlencode(params, quote_via=quote)}"
        )

    @staticmethod
    def _text(card: Tag, selector: str) -> str:
        # Every match contributes, e.g. a was/now pair under one card
        return "".join(el.get_text() for el in card.select(selector)).strip()

    @staticmethod
    def _attr(card: Tag, selector: str, attr: str) -> str:
        el = card.select_one(selector)
        if el is None:
            return ""
        value = el.get(attr)
        return str(value).strip() if value else ""

    def _parse_card(
        self, card: Tag, fetched_at: datetime,
    ) -> ProductSummary:
        """Parse a single listing node into a ProductSummary."""
        sel = self.listing_selectors
        sku = card.get(sel["sku_attr"])
        return ProductSummary(
            id=str(sku).strip() if sku else "",
            name=self._text(card, sel["title"]),
            description=self._text(card, sel["excerpt"]),
            thumbnail_url=self._attr(card, sel["image"], "src"),
            detail_url=self._attr(card, sel["main_link"], "href"),
            price=self._text(card, sel["price"]),
            fetched_at=fetched_at,
        )

    def extract_listings(self, search_term: str) -> list[ProductSummary]:
        """Search for *search_term* and return listings in page order.

        Raises:
            FetchError: the search endpoint is unreachable or answered
                with a non-2xx status.
        """
        url = self.build_search_url(search_term)
        self.logger.info("[listing] Searching '%s'", search_term)
        try:
            soup = self._get_page(url)
        except FetchError as exc:
            self.logger.error(
                "[listing] Search for '%s' failed: %s",
                search_term,
                exc,
                exc_info=True,
            )
            raise

        cards = soup.select(self.listing_selectors["product_card"])
        fetched_at = datetime.now(timezone.utc)
        products = [self._parse_card(card, fetched_at) for card in cards]

        self.logger.info(
            "[listing] '%s' yielded %d listings",
            search_term,
            len(products),
        )
        return products

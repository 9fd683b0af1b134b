# src/scrapers/base_scraper.py

"""Shared HTTP and parsing plumbing for the ingestion scrapers."""

import json
import logging
from typing import Any

from bs4 import BeautifulSoup
from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.scrapers.errors import FetchError


class BaseScraper:
    """Base class for the listing extractor and the image resolver.

    Each instance owns its own browser-impersonating session, so
    instances must not be shared across threads.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.logger = logging.getLogger(f"productscout.{name}")
        self.settings = Settings()
        self.selectors: dict[str, Any] = self._load_selectors()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()

    def _load_selectors(self) -> dict[str, Any]:
        """Load the markup selectors from selectors.json."""
        with open(self.settings.SELECTORS_PATH, encoding="utf-8") as f:
            all_selectors: dict[str, Any] = json.load(f)
        return all_selectors

    def _fetch_get(
        self,
        url: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> curl_requests.Response:
        """Single GET attempt; raises FetchError on failure or non-2xx."""
        try:
            resp = self.session.get(
                url,
                headers=headers,
                params=params,
                timeout=timeout or self._request_timeout,
            )
        except Exception as exc:
            raise FetchError(
                f"[{self.name}] request to {url} failed: {exc}",
                url=url,
            ) from exc

        if not 200 <= resp.status_code < 300:
            raise FetchError(
                f"[{self.name}] HTTP {resp.status_code} from {url}",
                url=url,
                status_code=resp.status_code,
            )
        return resp

    def _get_page(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> BeautifulSoup:
        """Fetch *url* and parse the body with lxml."""
        resp = self._fetch_get(
            url,
            headers or self.settings.DEFAULT_HEADERS,
            params=params,
            timeout=timeout,
        )
        return BeautifulSoup(resp.text, "lxml")

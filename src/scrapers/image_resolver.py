# src/scrapers/image_resolver.py

"""Full-size image resolution for a single listing.

Two strategies run in order and their candidates are concatenated
before de-duplication:

1. Thumbnail variants: unwrap the thumbnail proxy's ``f=`` origin URL
   and, for resizable CDN hosts, synthesise fixed size presets.
2. Gallery scrape: follow the listing's tracking redirect to the
   product page and probe the gallery rules from ``selectors.json``.

Nothing in here raises to the caller; failures are logged and the
listing keeps whatever candidates were already collected.
"""

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse, urlunparse

from bs4 import BeautifulSoup, Tag

from src.models.image_candidate import ImageCandidate, ImageStrategy
from src.scrapers.base_scraper import BaseScraper
from src.scrapers.url_unwrap import (
    absolutize,
    is_absolute_http,
    origin_of,
    unwrap_query_url,
)


@dataclass(frozen=True)
class GalleryRule:
    """A gallery selector and the per-node attribute priority."""

    selector: str
    attributes: tuple[str, ...]


def best_from_srcset(srcset: str) -> str:
    """Return the largest entry of a ``srcset`` value.

    Handles ``800w`` and ``2x`` descriptors; entries without a
    descriptor rank lowest, ties go to the later entry.
    """
    best_url = ""
    best_value = -1.0
    for entry in srcset.split(","):
        parts = entry.strip().split()
        if not parts:
            continue
        value = 0.0
        if len(parts) >= 2:
            descriptor = parts[-1].lower()
            if descriptor.endswith(("w", "x")):
                try:
                    value = float(descriptor[:-1])
                except ValueError:
                    value = 0.0
        if value >= best_value:
            best_url, best_value = parts[0], value
    return best_url


def dedupe_candidates(candidates: list[ImageCandidate]) -> list[str]:
    """Drop exact-duplicate URLs, keeping first-occurrence order."""
    return list(dict.fromkeys(c.url for c in candidates))


class ImageResolver(BaseScraper):
    """Resolve the ordered, de-duplicated image list for one product."""

    def __init__(self) -> None:
        super().__init__("images")
        raw_rules: list[dict[str, Any]] = self.selectors["gallery"]
        self.gallery_rules: list[GalleryRule] = [
            GalleryRule(
                selector=rule["selector"],
                attributes=tuple(rule["attributes"]),
            )
            for rule in raw_rules
        ]
        self._cdn_patterns = [
            re.compile(pattern, re.IGNORECASE)
            for pattern in self.settings.IMAGE_CDN_HOST_PATTERNS
        ]

    # ── Thumbnail strategy ───────────────────────────────

    def _is_thumbnail_proxy(self, url: str) -> bool:
        host = (urlparse(url).hostname or "").lower()
        return any(
            host == proxy or host.endswith("." + proxy)
            for proxy in self.settings.THUMBNAIL_PROXY_HOSTS
        )

    def _is_resizable_cdn(self, url: str) -> bool:
        host = (urlparse(url).hostname or "").lower()
        return any(p.search(host) for p in self._cdn_patterns)

    def size_variants(self, origin_url: str) -> list[str]:
        """Build one resized URL per preset from the origin's base path."""
        base = urlunparse(
            urlparse(origin_url)._replace(query="", fragment="")
        )
        return [
            f"{base}?w={width}&h={height}"
            for width, height in self.settings.IMAGE_SIZE_PRESETS.values()
        ]

    def thumbnail_candidates(
        self, thumbnail_url: str,
    ) -> list[ImageCandidate]:
        """Strategy (a): origin image and size variants from the thumbnail."""
        if not thumbnail_url.strip():
            return []
        thumb = absolutize(thumbnail_url, self.settings.SEARCH_BASE_URL)
        strategy = ImageStrategy.THUMBNAIL_VARIANT

        if not self._is_thumbnail_proxy(thumb):
            return [ImageCandidate(thumb, strategy)]

        unwrapped = unwrap_query_url(
            thumb, self.settings.THUMBNAIL_PROXY_PARAM
        )
        if not unwrapped.ok:
            self.logger.debug(
                "[images] Thumbnail proxy not unwrapped (%s): %s",
                unwrapped.reason,
                thumb,
            )
            return [ImageCandidate(thumb, strategy)]

        origin = unwrapped.url
        candidates = [ImageCandidate(origin, strategy)]
        if self._is_resizable_cdn(origin):
            candidates.extend(
                ImageCandidate(url, strategy)
                for url in self.size_variants(origin)
            )
        return candidates

    # ── Gallery strategy ─────────────────────────────────

    @staticmethod
    def _pick_source(node: Tag, attributes: tuple[str, ...]) -> str:
        """Return the first usable source attribute of *node*."""
        for attr in attributes:
            value = node.get(attr)
            if not value:
                continue
            text = str(value).strip()
            if "srcset" in attr:
                text = best_from_srcset(text)
            if text:
                return text
        return ""

    def _is_blocked(self, url: str) -> bool:
        lowered = url.lower()
        return any(
            token in lowered for token in self.settings.IMAGE_BLOCKLIST
        )

    def scrape_gallery(
        self, soup: BeautifulSoup, base_url: str,
    ) -> list[ImageCandidate]:
        """Probe the gallery rules in order; the first rule with hits wins."""
        for rule in self.gallery_rules:
            found: list[ImageCandidate] = []
            for node in soup.select(rule.selector):
                raw = self._pick_source(node, rule.attributes)
                if not raw or raw.startswith("data:"):
                    continue
                url = absolutize(raw, base_url)
                if not is_absolute_http(url) or self._is_blocked(url):
                    continue
                found.append(
                    ImageCandidate(url, ImageStrategy.GALLERY_SCRAPE)
                )
            if found:
                self.logger.debug(
                    "[images] Rule '%s' matched %d images",
                    rule.selector,
                    len(found),
                )
                return found
        return []

    def gallery_candidates(self, detail_url: str) -> list[ImageCandidate]:
        """Strategy (b): scrape the product page behind the redirect."""
        target = unwrap_query_url(
            detail_url, self.settings.REDIRECT_URL_PARAM
        )
        if not target.ok:
            self.logger.debug(
                "[images] Skipping gallery scrape (%s): %s",
                target.reason,
                detail_url,
            )
            return []

        try:
            soup = self._get_page(
                target.url,
                headers=self.settings.DETAIL_HEADERS,
                timeout=self.settings.DETAIL_REQUEST_TIMEOUT,
            )
            return self.scrape_gallery(soup, origin_of(target.url))
        except Exception as exc:
            self.logger.warning(
                "[images] Gallery scrape of %s failed: %s",
                target.url,
                exc,
                exc_info=True,
            )
            return []

    # ── Entry point ──────────────────────────────────────

    def resolve_images(
        self, detail_url: str, thumbnail_url: str,
    ) -> list[str]:
        """Return absolute, de-duplicated image URLs for one listing."""
        candidates: list[ImageCandidate] = []
        try:
            candidates.extend(self.thumbnail_candidates(thumbnail_url))
        except ValueError as exc:
            self.logger.warning(
                "[images] Malformed thumbnail url %r: %s",
                thumbnail_url,
                exc,
            )
        candidates.extend(self.gallery_candidates(detail_url))

        images = dedupe_candidates(candidates)
        self.logger.debug(
            "[images] %d candidates, %d unique for %s",
            len(candidates),
            len(images),
            detail_url or thumbnail_url,
        )
        return images

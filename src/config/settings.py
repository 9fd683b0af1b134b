# src/config/settings.py

"""Central configuration for the productscout ingestion service."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int, min_value: int = 1) -> int:
    """Read an integer override from the environment, clamped to *min_value*."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(min_value, value)


class Settings:
    """Central configuration for the productscout ingestion service."""

    # --- Listing endpoint ---
    SEARCH_BASE_URL: str = "https://harveynorman-au.resultspage.com"
    SEARCH_URL: str = f"{SEARCH_BASE_URL}/search"
    SEARCH_PARAMS: dict[str, str] = {
        "ts": "rac-data",
        "rt": "rac",
        "dv": "o",
        "strategy": "rac",
        "showProducts": "true",
    }
    SEARCH_TERM_PARAM: str = "w"

    # --- Timeouts / concurrency ---
    REQUEST_TIMEOUT: int = _env_int(
        "PRODUCTSCOUT_REQUEST_TIMEOUT", 15
    )
    DETAIL_REQUEST_TIMEOUT: int = _env_int(
        "PRODUCTSCOUT_DETAIL_TIMEOUT", 10
    )
    MAX_IMAGE_WORKERS: int = _env_int(
        "PRODUCTSCOUT_MAX_IMAGE_WORKERS", 6
    )
    HEALTH_TIMEOUT: int = 10
    HEALTH_SLOW_MS: float = 5000.0

    # --- Redirect / proxy unwrapping ---
    THUMBNAIL_PROXY_HOSTS: list[str] = ["resultspage.com"]
    THUMBNAIL_PROXY_PARAM: str = "f"
    REDIRECT_URL_PARAM: str = "url"

    # --- Image CDN resizing ---
    IMAGE_CDN_HOST_PATTERNS: list[str] = [
        r"\.imgix\.net$",
        r"^cdn\.",
    ]
    IMAGE_SIZE_PRESETS: dict[str, tuple[int, int]] = {
        "small": (300, 300),
        "medium": (600, 600),
        "large": (1200, 1200),
    }
    IMAGE_BLOCKLIST: list[str] = [
        "placeholder",
        "icon",
        "logo",
        "spinner",
    ]

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,image/avif,"
            "image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "en-AU,en;q=0.9",
        "sec-ch-ua": (
            '"Google Chrome";v="131", '
            '"Chromium";v="131", '
            '"Not_A Brand";v="24"'
        ),
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
        "sec-fetch-dest": "document",
        "sec-fetch-mode": "navigate",
        "sec-fetch-site": "none",
        "sec-fetch-user": "?1",
        "Upgrade-Insecure-Requests": "1",
    }
    DETAIL_HEADERS: dict[str, str] = {
        **DEFAULT_HEADERS,
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/131.0.0.0 Safari/537.36"
        ),
        "Accept-Encoding": "gzip, deflate, br",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    SELECTORS_PATH: Path = BASE_DIR / "src" / "config" / "selectors.json"
    LOGS_DIR: Path = BASE_DIR / "logs"

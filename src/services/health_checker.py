# src/services/health_checker.py

"""Connectivity health check for the listing search endpoint."""

import asyncio
import logging
import time
from dataclasses import dataclass

from curl_cffi import requests as curl_requests

from src.config.settings import Settings

logger = logging.getLogger("productscout.health")


@dataclass
class HealthResult:
    """Result of a single endpoint probe."""

    target: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_search_endpoint(
    url: str | None = None,
) -> HealthResult:
    """Issue one GET against the search endpoint and time it."""
    settings = Settings()
    target = url or settings.SEARCH_URL
    session = curl_requests.Session(
        impersonate=settings.IMPERSONATE_BROWSER
    )

    start = time.monotonic()
    try:
        resp = session.get(
            target,
            headers=settings.DEFAULT_HEADERS,
            params=settings.SEARCH_PARAMS,
            timeout=settings.HEALTH_TIMEOUT,
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        if not 200 <= resp.status_code < 300:
            return HealthResult(
                target=target,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )

        if elapsed_ms > settings.HEALTH_SLOW_MS:
            return HealthResult(
                target=target,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )

        return HealthResult(
            target=target,
            status="ok",
            latency_ms=elapsed_ms,
            message="",
        )

    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            target=target,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )
    finally:
        session.close()


class HealthChecker:
    """Runs the endpoint probe off the event loop."""

    async def check(self) -> HealthResult:
        """Probe the search endpoint."""
        result = await asyncio.to_thread(probe_search_endpoint)
        logger.info(
            "Health check %s: %s (%.0fms) %s",
            result.target,
            result.status,
            result.latency_ms,
            result.message,
        )
        return result

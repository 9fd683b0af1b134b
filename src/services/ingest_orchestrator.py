# src/services/ingest_orchestrator.py

"""Orchestrates listing extraction and per-product image resolution."""

import asyncio
import logging
from collections.abc import Callable

from src.config.settings import Settings
from src.models.product import EnrichedProduct, ProductSummary
from src.scrapers.image_resolver import ImageResolver
from src.scrapers.listing_scraper import ListingScraper

logger = logging.getLogger("productscout.orchestrator")


def _close_quietly(scraper: object) -> None:
    """Close *scraper*'s session if it has one; log close failures."""
    close = getattr(scraper, "close", None)
    if close is None:
        return
    try:
        close()
    except Exception as exc:
        logger.warning("Closing %r failed: %s", scraper, exc)


class IngestOrchestrator:
    """Run one search and enrich every listing with its images.

    Image resolution is spread over a fixed pool of workers.  Each
    worker owns its own :class:`ImageResolver` (and HTTP session) and
    writes results into a pre-sized list by listing index, so output
    order never depends on completion order.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        scraper: ListingScraper | None = None,
        resolver_factory: Callable[[], ImageResolver] | None = None,
    ) -> None:
        self.settings = Settings()
        self.max_workers = max(
            1, max_workers or self.settings.MAX_IMAGE_WORKERS
        )
        self._scraper = scraper
        self._resolver_factory = resolver_factory or ImageResolver

    # ── Private helpers ──────────────────────────────────

    async def _worker(
        self,
        worker_id: int,
        queue: "asyncio.Queue[tuple[int, ProductSummary]]",
        results: list[list[str]],
    ) -> None:
        """Drain (index, summary) pairs until the queue is empty.

        A worker whose resolver cannot be built exits without taking
        items; the rest of the pool drains the queue, and anything left
        over keeps its empty image list.
        """
        try:
            resolver = self._resolver_factory()
        except Exception as exc:
            logger.error(
                "Worker %d: could not create image resolver: %s",
                worker_id,
                exc,
                exc_info=True,
            )
            return

        try:
            while True:
                try:
                    index, summary = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                try:
                    results[index] = await asyncio.to_thread(
                        resolver.resolve_images,
                        summary.detail_url,
                        summary.thumbnail_url,
                    )
                except Exception as exc:
                    logger.error(
                        "Worker %d: image resolution for '%s' failed: %s",
                        worker_id,
                        summary.id or summary.detail_url,
                        exc,
                        exc_info=True,
                    )
                finally:
                    queue.task_done()
        finally:
            _close_quietly(resolver)

    async def _resolve_all(
        self, summaries: list[ProductSummary],
    ) -> list[list[str]]:
        """Resolve images for every summary, indexed like the input."""
        results: list[list[str]] = [[] for _ in summaries]
        if not summaries:
            return results

        queue: asyncio.Queue[tuple[int, ProductSummary]] = asyncio.Queue()
        for item in enumerate(summaries):
            queue.put_nowait(item)

        pool_size = min(self.max_workers, len(summaries))
        logger.debug(
            "Resolving images for %d listings with %d workers",
            len(summaries),
            pool_size,
        )
        await asyncio.gather(
            *(
                self._worker(worker_id, queue, results)
                for worker_id in range(pool_size)
            )
        )
        return results

    # ── Entry point ──────────────────────────────────────

    async def ingest(self, search_term: str) -> list[EnrichedProduct]:
        """Search for *search_term* and return enriched listings in order.

        Raises:
            FetchError: the primary search request failed.  Image
                resolution failures never propagate.
        """
        if self._scraper is not None:
            summaries = await asyncio.to_thread(
                self._scraper.extract_listings, search_term
            )
        else:
            scraper = ListingScraper()
            try:
                summaries = await asyncio.to_thread(
                    scraper.extract_listings, search_term
                )
            finally:
                _close_quietly(scraper)
        image_lists = await self._resolve_all(summaries)

        products = [
            EnrichedProduct.from_summary(summary, images)
            for summary, images in zip(summaries, image_lists)
        ]
        logger.info(
            "Ingested '%s': %d products, %d images",
            search_term,
            len(products),
            sum(len(p.images) for p in products),
        )
        return products


async def ingest(search_term: str) -> list[EnrichedProduct]:
    """Entry point for the API layer: one search, fully enriched."""
    return await IngestOrchestrator().ingest(search_term)

# tests/test_product_model.py

"""Tests for the product and image candidate data models."""

import unittest
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

from src.models.image_candidate import ImageCandidate, ImageStrategy
from src.models.product import EnrichedProduct, ProductSummary


class TestProductSummary(unittest.TestCase):
    """ProductSummary defaults and serialisation."""

    def test_defaults_are_empty_strings(self) -> None:
        """Unknown fields default to "" rather than None."""
        summary = ProductSummary()
        for value in (
            summary.id,
            summary.name,
            summary.description,
            summary.thumbnail_url,
            summary.detail_url,
            summary.price,
        ):
            self.assertEqual(value, "")

    def test_fetched_at_is_utc(self) -> None:
        """fetched_at defaults to a timezone-aware UTC instant."""
        summary = ProductSummary()
        self.assertEqual(summary.fetched_at.tzinfo, timezone.utc)

    def test_to_dict_uses_camel_case(self) -> None:
        """JSON keys follow the client-facing camelCase shape."""
        ts = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)
        summary = ProductSummary(
            id="WH1000XM5B",
            name="Sony WH-1000XM5",
            thumbnail_url="https://cdn.example/img.jpg",
            detail_url="https://example.com/p",
            price="$478.00",
            fetched_at=ts,
        )
        data = summary.to_dict()
        self.assertEqual(
            list(data),
            [
                "id",
                "name",
                "description",
                "thumbnailUrl",
                "detailUrl",
                "price",
                "fetchedAt",
            ],
        )
        self.assertEqual(data["fetchedAt"], "2026-10-18T09:30:00+00:00")
        self.assertEqual(data["price"], "$478.00")


class TestEnrichedProduct(unittest.TestCase):
    """EnrichedProduct copy semantics."""

    def test_from_summary_copies_fields(self) -> None:
        """All summary fields carry over and images are attached."""
        summary = ProductSummary(id="A1", name="Thing", price="$1.00")
        product = EnrichedProduct.from_summary(
            summary, ["https://cdn.example/a.jpg"]
        )
        self.assertEqual(product.id, "A1")
        self.assertEqual(product.name, "Thing")
        self.assertEqual(product.fetched_at, summary.fetched_at)
        self.assertEqual(product.images, ["https://cdn.example/a.jpg"])
        self.assertIsNot(product, summary)

    def test_images_list_is_copied(self) -> None:
        """Mutating the source list does not leak into the product."""
        images = ["https://cdn.example/a.jpg"]
        product = EnrichedProduct.from_summary(ProductSummary(), images)
        images.append("https://cdn.example/b.jpg")
        self.assertEqual(len(product.images), 1)

    def test_to_dict_includes_images(self) -> None:
        product = EnrichedProduct(id="A1")
        data = product.to_dict()
        self.assertEqual(data["images"], [])
        self.assertEqual(data["id"], "A1")

    def test_default_images_not_shared(self) -> None:
        first = EnrichedProduct()
        second = EnrichedProduct()
        first.images.append("x")
        self.assertEqual(second.images, [])


class TestImageCandidate(unittest.TestCase):
    """ImageCandidate is an immutable tagged URL."""

    def test_frozen(self) -> None:
        candidate = ImageCandidate(
            "https://cdn.example/a.jpg", ImageStrategy.GALLERY_SCRAPE
        )
        with self.assertRaises(FrozenInstanceError):
            candidate.url = "other"  # type: ignore[misc]

    def test_strategy_values(self) -> None:
        self.assertEqual(
            ImageStrategy.THUMBNAIL_VARIANT.value, "thumbnail_variant"
        )
        self.assertEqual(
            ImageStrategy.GALLERY_SCRAPE.value, "gallery_scrape"
        )


if __name__ == "__main__":
    unittest.main()

# src/models/product.py

"""Product data models for inter-module data flow."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ProductSummary:
    """A single listing from the remote search-results page.

    Empty string is the canonical "unknown" value for every text
    field; a listing is never dropped for missing markup.
    """

    id: str = ""
    name: str = ""
    description: str = ""
    thumbnail_url: str = ""
    detail_url: str = ""
    price: str = ""
    fetched_at: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, object]:
        """Serialise to the camelCase JSON shape served to clients."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "thumbnailUrl": self.thumbnail_url,
            "detailUrl": self.detail_url,
            "price": self.price,
            "fetchedAt": self.fetched_at.isoformat(),
        }


@dataclass
class EnrichedProduct(ProductSummary):
    """A listing plus its resolved full-size image URLs."""

    images: list[str] = field(
        default_factory=lambda: list[str]()
    )

    @classmethod
    def from_summary(
        cls, summary: ProductSummary, images: list[str],
    ) -> "EnrichedProduct":
        """Copy *summary* and attach *images*."""
        return cls(
            id=summary.id,
            name=summary.name,
            description=summary.description,
            thumbnail_url=summary.thumbnail_url,
            detail_url=summary.detail_url,
            price=summary.price,
            fetched_at=summary.fetched_at,
            images=list(images),
        )

    def to_dict(self) -> dict[str, object]:
        """Serialise including the ``images`` list."""
        data = super().to_dict()
        data["images"] = list(self.images)
        return data

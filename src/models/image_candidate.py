# src/models/image_candidate.py

"""Image URL candidates produced by the image resolver strategies."""

from dataclasses import dataclass
from enum import Enum


class ImageStrategy(str, Enum):
    """Which resolver strategy produced a candidate."""

    THUMBNAIL_VARIANT = "thumbnail_variant"
    GALLERY_SCRAPE = "gallery_scrape"


@dataclass(frozen=True)
class ImageCandidate:
    """An absolute image URL tagged with its originating strategy."""

    url: str
    strategy: ImageStrategy

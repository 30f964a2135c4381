"""
Recommendations Domain Services

Pure business rules shared by every pipeline: over-fetch sizing, ownership
filtering, ranking and image selection.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from music_discovery.domain.recommendations.entities import (
    ImageCandidate,
    Recommendation,
    SimilarItemEntry,
    ownership_key,
)
from music_discovery.domain.shared.constants import ImageConstants
from music_discovery.domain.shared.enums import EntityKind


class RecommendationDomainService:
    """Domain service for recommendation-related business rules."""

    @classmethod
    def overfetch_limit(cls, limit: int, factor: int, cap: int) -> int:
        """How many candidates to request so that filtering still leaves ``limit``."""
        return max(1, min(limit * factor, cap))

    @classmethod
    def candidate_key(cls, kind: EntityKind, entry: SimilarItemEntry) -> str:
        """Ownership key of a raw candidate, in the catalog's key shape."""
        if kind is EntityKind.ARTIST:
            return entry.name.lower()
        return ownership_key(entry.artist or "", entry.name)

    @classmethod
    def filter_owned(
        cls,
        kind: EntityKind,
        candidates: Iterable[SimilarItemEntry],
        owned: set[str],
    ) -> list[SimilarItemEntry]:
        """Drop candidates already present in the catalog, preserving order.

        ``owned`` may hold keys in any case; comparison is case-insensitive.
        """
        owned_lower = {key.lower() for key in owned}
        return [c for c in candidates if cls.candidate_key(kind, c) not in owned_lower]

    @classmethod
    def filter_owned_recommendations(
        cls, recommendations: Iterable[Recommendation], owned: set[str]
    ) -> list[Recommendation]:
        owned_lower = {key.lower() for key in owned}
        return [r for r in recommendations if r.ownership_key not in owned_lower]

    @classmethod
    def rank_by_score(cls, recommendations: Sequence[Recommendation]) -> list[Recommendation]:
        """Stable descending sort on match score."""
        return sorted(recommendations, key=lambda r: r.match_score, reverse=True)

    @classmethod
    def is_valid_image_url(cls, url: str | None) -> bool:
        if not url:
            return False
        return ImageConstants.PLACEHOLDER_MARKER not in url

    @classmethod
    def select_best_image(cls, images: Sequence[ImageCandidate] | None) -> str | None:
        """Pick the preferred-size image, skipping blanks and the Last.fm placeholder."""
        if not images:
            return None

        for size in ImageConstants.PREFERRED_SIZES:
            for image in images:
                if image.size == size and cls.is_valid_image_url(image.url):
                    return image.url

        for image in images:
            if cls.is_valid_image_url(image.url):
                return image.url
        return None

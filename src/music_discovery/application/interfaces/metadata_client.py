"""
Metadata Client Interface

Port interface for the remote "similar items" metadata service.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.recommendations.entities import AlbumInfo, ArtistInfo, SimilarItemEntry


class MetadataClient(ABC):
    """Abstract interface for similar-item metadata lookups.

    Every read is idempotent and cache-backed. Implementations should handle:
    - Caching successful responses under a TTL
    - Throttling outbound requests
    - Turning remote failures into empty results instead of raising
    """

    @abstractmethod
    async def similar_artists(self, artist: str, limit: int) -> list[SimilarItemEntry]:
        """Artists similar to ``artist``, most similar first.

        Returns:
            Candidate list; empty on any remote failure.
        """
        ...

    @abstractmethod
    async def similar_tracks(self, artist: str, track: str, limit: int) -> list[SimilarItemEntry]:
        """Tracks similar to ``artist`` - ``track``, most similar first.

        Returns:
            Candidate list; empty on any remote failure.
        """
        ...

    @abstractmethod
    async def album_info(self, artist: str, album: str) -> AlbumInfo | None:
        """Album details including tags, or None on failure."""
        ...

    @abstractmethod
    async def artist_info(self, artist: str) -> ArtistInfo | None:
        """Artist details including tags, or None on failure."""
        ...

    @abstractmethod
    async def artist_top_albums(self, artist: str, limit: int) -> list[SimilarItemEntry]:
        """An artist's most popular albums; empty on failure."""
        ...

    @abstractmethod
    async def artist_image_fallback(self, artist: str) -> str | None:
        """Secondary image source for artists the primary service has no picture for."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the client has the credential it needs."""
        ...

    @abstractmethod
    def clear_cache(self) -> int:
        """Clear cached responses.

        Returns:
            Number of entries cleared.
        """
        ...

    @abstractmethod
    def get_cache_stats(self) -> dict[str, int]:
        """Get cache statistics (size, hits, misses, hit rate)."""
        ...

"""
Recommendations Bounded Context

Domain logic for similar-artist, album and track recommendations.
"""

from music_discovery.domain.recommendations.entities import (
    AlbumInfo,
    ArtistInfo,
    ExternalLinks,
    ImageCandidate,
    Recommendation,
    RecommendationRequest,
    RecommendationsResponse,
    SimilarItemEntry,
    ownership_key,
)
from music_discovery.domain.recommendations.links import (
    build_album_links,
    build_artist_links,
    build_track_links,
)
from music_discovery.domain.recommendations.services import RecommendationDomainService

__all__ = [
    # Entities
    "AlbumInfo",
    "ArtistInfo",
    "ExternalLinks",
    "ImageCandidate",
    "Recommendation",
    "RecommendationRequest",
    "RecommendationsResponse",
    "SimilarItemEntry",
    "ownership_key",
    # Services
    "RecommendationDomainService",
    # Links
    "build_artist_links",
    "build_album_links",
    "build_track_links",
]

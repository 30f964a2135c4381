"""Application services orchestrating the domain and the ports."""

from music_discovery.application.services.pipelines import (
    PIPELINES,
    recommend_albums,
    recommend_artists,
    recommend_tracks,
)
from music_discovery.application.services.recommendation_service import RecommendationService
from music_discovery.application.services.saved_items_service import SavedItemStore

__all__ = [
    "PIPELINES",
    "RecommendationService",
    "SavedItemStore",
    "recommend_albums",
    "recommend_artists",
    "recommend_tracks",
]

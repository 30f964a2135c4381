"""
Saved Items Bounded Context

Per-user collections of recommendations kept for later.
"""

from music_discovery.domain.saved.entities import SavedItem, SavedItemKey, UserCollection
from music_discovery.domain.saved.repository import SavedCollectionRepository

__all__ = [
    # Entities
    "SavedItem",
    "SavedItemKey",
    "UserCollection",
    # Repository
    "SavedCollectionRepository",
]

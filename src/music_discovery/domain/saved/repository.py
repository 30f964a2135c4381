"""
Saved Items Domain Repository Interfaces

Abstract base classes defining the contract for persisting user collections.
"""

from abc import ABC, abstractmethod

from music_discovery.domain.saved.entities import UserCollection


class SavedCollectionRepository(ABC):
    """Abstract repository storing one self-contained record per user.

    Implementations read and write the whole collection at once; callers
    are responsible for serializing read-modify-write sequences.
    """

    @abstractmethod
    async def load(self, user_id: str) -> UserCollection:
        """Load a user's collection.

        Args:
            user_id: The owning user identity.

        Returns:
            The stored collection, or an empty one if the record is missing
            or unreadable.
        """
        ...

    @abstractmethod
    async def save(self, collection: UserCollection) -> None:
        """Replace the stored record for ``collection.user_id``.

        Args:
            collection: The full collection to persist.
        """
        ...


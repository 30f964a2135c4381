"""SQLite repository implementations."""

from music_discovery.infrastructure.persistence.repositories.saved_repository import (
    SAVED_COLLECTIONS_SCHEMA,
    SQLiteSavedCollectionRepository,
)

__all__ = [
    "SAVED_COLLECTIONS_SCHEMA",
    "SQLiteSavedCollectionRepository",
]

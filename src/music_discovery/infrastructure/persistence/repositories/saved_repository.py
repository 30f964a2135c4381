"""SQLite implementation of the saved collection repository."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from music_discovery.domain.saved.entities import SavedItem, UserCollection
from music_discovery.domain.saved.repository import SavedCollectionRepository
from music_discovery.domain.shared.constants import DatabaseTables
from music_discovery.domain.shared.datetime_utils import UtcDateTime
from music_discovery.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)

_ITEMS_ADAPTER: TypeAdapter[list[SavedItem]] = TypeAdapter(list[SavedItem])

SAVED_COLLECTIONS_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {DatabaseTables.SAVED_COLLECTIONS} (
    user_id TEXT PRIMARY KEY,
    items_json TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

_SELECT_ITEMS = f"SELECT items_json FROM {DatabaseTables.SAVED_COLLECTIONS} WHERE user_id = ?"

_UPSERT_ITEMS = f"""
INSERT INTO {DatabaseTables.SAVED_COLLECTIONS} (user_id, items_json, updated_at)
VALUES (?, ?, ?)
ON CONFLICT(user_id) DO UPDATE SET
    items_json = excluded.items_json,
    updated_at = excluded.updated_at
"""


class SQLiteSavedCollectionRepository(SavedCollectionRepository):
    """Stores each user's whole collection as one JSON row keyed by user id.

    The owning ``Database`` must be created with ``SAVED_COLLECTIONS_SCHEMA``.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    async def load(self, user_id: str) -> UserCollection:
        async with self._db.connection() as conn:
            cursor = await conn.execute(_SELECT_ITEMS, (user_id,))
            row = await cursor.fetchone()
        if row is None:
            return UserCollection(user_id=user_id)

        try:
            items = _ITEMS_ADAPTER.validate_json(row["items_json"])
        except (PydanticValidationError, ValueError) as e:
            logger.warning(LogTemplates.SAVED_COLLECTION_CORRUPT, user_id, e)
            return UserCollection(user_id=user_id)

        return UserCollection(user_id=user_id, items=items)

    async def save(self, collection: UserCollection) -> None:
        items_json = json.dumps(
            [item.model_dump(mode="json") for item in collection.items],
            ensure_ascii=False,
        )
        async with self._db.transaction() as conn:
            await conn.execute(
                _UPSERT_ITEMS, (collection.user_id, items_json, UtcDateTime.now().iso)
            )

"""Saved Items Application Service - per-user saved recommendations."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ...domain.saved.entities import SavedItem, SavedItemKey, UserCollection
from ...domain.shared.constants import SavedItemLimits
from ...domain.shared.enums import DeleteOutcome, SaveOutcome
from ...domain.shared.exceptions import ValidationError
from ...domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ...domain.saved.repository import SavedCollectionRepository

logger = logging.getLogger(__name__)


class SavedItemStore:
    """Save, list, delete and check saved items for any number of users.

    All writes are serialized by a single lock, so two concurrent saves of
    the same item for the same user produce one stored item.
    """

    def __init__(
        self,
        *,
        repository: SavedCollectionRepository,
        max_check_keys: int = SavedItemLimits.MAX_CHECK_KEYS,
    ) -> None:
        self._repository = repository
        self._max_check_keys = max_check_keys
        self._lock = asyncio.Lock()

    @staticmethod
    def _require_user(user_id: str) -> str:
        user_id = user_id.strip() if user_id else ""
        if not user_id:
            raise ValidationError(ErrorMessages.EMPTY_USER_ID, field="user_id")
        return user_id

    async def load(self, user_id: str) -> UserCollection:
        return await self._repository.load(self._require_user(user_id))

    async def list_saved(self, user_id: str, limit: int | None = None) -> list[SavedItem]:
        """Most recently saved first; ``limit`` applies only when positive."""
        collection = await self.load(user_id)
        return collection.most_recent(limit)

    async def save(self, user_id: str, item: SavedItem) -> SaveOutcome:
        user_id = self._require_user(user_id)
        async with self._lock:
            collection = await self._repository.load(user_id)
            if not collection.add(item):
                logger.debug(
                    LogTemplates.SAVED_ITEM_DUPLICATE, user_id, item.kind, item.name, item.artist
                )
                return SaveOutcome.ALREADY_SAVED
            await self._repository.save(collection)

        logger.info(LogTemplates.SAVED_ITEM_ADDED, item.kind, item.name, item.artist, user_id)
        return SaveOutcome.SAVED

    async def delete(self, user_id: str, key: SavedItemKey) -> DeleteOutcome:
        user_id = self._require_user(user_id)
        async with self._lock:
            collection = await self._repository.load(user_id)
            if not collection.remove(key):
                logger.debug(
                    LogTemplates.SAVED_ITEM_NOT_FOUND, key.kind, key.name, key.artist, user_id
                )
                return DeleteOutcome.NOT_FOUND
            await self._repository.save(collection)

        logger.info(LogTemplates.SAVED_ITEM_DELETED, key.kind, key.name, key.artist, user_id)
        return DeleteOutcome.DELETED

    async def check_many(self, user_id: str, keys: list[SavedItemKey]) -> list[SavedItemKey]:
        """Return the subset of ``keys`` the user has saved, in query order.

        Raises:
            ValidationError: If more than ``max_check_keys`` keys are given.
        """
        if len(keys) > self._max_check_keys:
            raise ValidationError(
                ErrorMessages.TOO_MANY_CHECK_KEYS.format(max_keys=self._max_check_keys),
                field="keys",
            )
        if not keys:
            return []

        collection = await self.load(user_id)
        return [key for key in keys if collection.contains(key)]

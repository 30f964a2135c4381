"""
Reference Catalog Interface

Read-only view of the library the caller already owns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

from ...domain.shared.enums import EntityKind
from ...domain.shared.types import NonEmptyStr


class CatalogItem(BaseModel):
    """One library entry: an artist, an album (with album artist) or a track."""

    model_config = ConfigDict(frozen=True)

    id: NonEmptyStr
    kind: EntityKind
    name: NonEmptyStr
    artist: str = ""


class ReferenceCatalog(ABC):
    """Ownership lookups against the caller's library.

    Calls are synchronous and in-memory. Each returned set is a snapshot as of
    the call; nothing guards against the library changing afterwards.
    """

    @abstractmethod
    def artist_names(self) -> set[str]:
        """Lowercased names of every artist in the library."""
        ...

    @abstractmethod
    def album_keys(self) -> set[str]:
        """Lowercased ``artist\\x00title`` keys of every album."""
        ...

    @abstractmethod
    def track_keys(self) -> set[str]:
        """Lowercased ``artist\\x00title`` keys of every track."""
        ...

    @abstractmethod
    def get_item(self, item_id: str) -> CatalogItem | None:
        """Look up a single library item, or None if it is not in the library."""
        ...

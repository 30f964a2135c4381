"""In-memory reference catalog built from a list of library items."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from music_discovery.application.interfaces.catalog import CatalogItem, ReferenceCatalog
from music_discovery.domain.recommendations.entities import ownership_key
from music_discovery.domain.shared.enums import EntityKind
from music_discovery.domain.shared.exceptions import ValidationError
from music_discovery.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)


class CatalogDocument(BaseModel):
    """On-disk layout: ``{"items": [{"id", "kind", "name", "artist"}, ...]}``."""

    items: list[CatalogItem] = Field(default_factory=list)


class InMemoryCatalog(ReferenceCatalog):
    def __init__(self, items: Iterable[CatalogItem] = ()) -> None:
        self._items: dict[str, CatalogItem] = {}
        for item in items:
            self.add(item)

    def add(self, item: CatalogItem) -> None:
        self._items[item.id] = item

    def remove(self, item_id: str) -> bool:
        return self._items.pop(item_id, None) is not None

    def __len__(self) -> int:
        return len(self._items)

    def _of_kind(self, kind: EntityKind) -> list[CatalogItem]:
        return [item for item in self._items.values() if item.kind is kind]

    def artist_names(self) -> set[str]:
        return {item.name.lower() for item in self._of_kind(EntityKind.ARTIST) if item.name}

    def album_keys(self) -> set[str]:
        return {ownership_key(item.artist, item.name) for item in self._of_kind(EntityKind.ALBUM)}

    def track_keys(self) -> set[str]:
        return {ownership_key(item.artist, item.name) for item in self._of_kind(EntityKind.TRACK)}

    def get_item(self, item_id: str) -> CatalogItem | None:
        return self._items.get(item_id)

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemoryCatalog:
        path = Path(path)
        try:
            document = CatalogDocument.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, PydanticValidationError) as e:
            raise ValidationError(
                ErrorMessages.CATALOG_FILE_INVALID.format(path=path), field="catalog_path"
            ) from e

        catalog = cls(document.items)
        logger.info(LogTemplates.CATALOG_LOADED, len(catalog), path)
        return catalog

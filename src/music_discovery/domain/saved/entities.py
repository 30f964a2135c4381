"""Core domain entities for the saved-items bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from music_discovery.domain.recommendations.entities import Recommendation
from music_discovery.domain.shared.datetime_utils import utcnow
from music_discovery.domain.shared.enums import EntityKind
from music_discovery.domain.shared.types import NonEmptyStr, UnitInterval, UserIdStr, UtcDatetimeField


class SavedItemKey(BaseModel):
    """Composite identity of a saved item: case-insensitive (name, artist, kind)."""

    model_config = ConfigDict(frozen=True)

    name: NonEmptyStr
    artist: str = ""
    kind: EntityKind

    @property
    def normalized(self) -> tuple[str, str, str]:
        return (self.name.lower(), self.artist.lower(), self.kind.value)

    def matches(self, other: SavedItemKey) -> bool:
        return self.normalized == other.normalized


class SavedItem(BaseModel):
    """A recommendation a user chose to keep."""

    name: NonEmptyStr
    artist: str = ""
    kind: EntityKind
    image_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    match_score: UnitInterval = 0.0
    link: str | None = None
    saved_at: UtcDatetimeField = Field(default_factory=utcnow)

    @property
    def key(self) -> SavedItemKey:
        return SavedItemKey(name=self.name, artist=self.artist, kind=self.kind)

    @classmethod
    def from_recommendation(cls, recommendation: Recommendation) -> SavedItem:
        return cls(
            name=recommendation.name,
            artist=recommendation.artist,
            kind=recommendation.kind,
            image_url=recommendation.image_url,
            tags=list(recommendation.tags),
            match_score=recommendation.match_score,
            link=recommendation.links.lastfm_url,
        )


class UserCollection(BaseModel):
    """Aggregate of everything one user saved, in insertion order."""

    user_id: UserIdStr
    items: list[SavedItem] = Field(default_factory=list)

    def find(self, key: SavedItemKey) -> SavedItem | None:
        for item in self.items:
            if item.key.matches(key):
                return item
        return None

    def contains(self, key: SavedItemKey) -> bool:
        return self.find(key) is not None

    def add(self, item: SavedItem) -> bool:
        """Append unless the composite key is already present."""
        if self.contains(item.key):
            return False
        self.items.append(item)
        return True

    def remove(self, key: SavedItemKey) -> bool:
        item = self.find(key)
        if item is None:
            return False
        self.items.remove(item)
        return True

    def most_recent(self, limit: int | None = None) -> list[SavedItem]:
        ordered = sorted(self.items, key=lambda i: i.saved_at, reverse=True)
        if limit is not None and limit > 0:
            return ordered[:limit]
        return ordered

    @property
    def count(self) -> int:
        return len(self.items)


"""Core domain entities for the recommendations bounded context."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from music_discovery.domain.shared.constants import OwnershipKeys, PipelineLimits
from music_discovery.domain.shared.enums import EntityKind
from music_discovery.domain.shared.messages import ErrorMessages
from music_discovery.domain.shared.types import MatchScore, NonEmptyStr, UnitInterval


def ownership_key(artist: str, title: str) -> str:
    """Lowercase ``artist\\x00title`` key used to match albums and tracks against the catalog."""
    return f"{artist}{OwnershipKeys.SEPARATOR}{title}".lower()


class ImageCandidate(BaseModel):
    """One (size, url) image offered by the remote service."""

    model_config = ConfigDict(frozen=True)

    size: str = ""
    url: str = ""


class SimilarItemEntry(BaseModel):
    """A candidate returned by the remote service before filtering and enrichment.

    ``artist`` is set for tracks and top albums; for similar artists the
    entry's own name is the artist.
    """

    model_config = ConfigDict(frozen=True)

    name: NonEmptyStr
    artist: str | None = None
    mbid: str | None = None
    match: MatchScore = 0.0
    images: tuple[ImageCandidate, ...] = ()
    url: str | None = None

    @field_validator("mbid", "url", mode="before")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        return v or None


class AlbumInfo(BaseModel):
    """Album details used for tag enrichment."""

    model_config = ConfigDict(frozen=True)

    name: NonEmptyStr
    artist: str = ""
    mbid: str | None = None
    url: str | None = None
    images: tuple[ImageCandidate, ...] = ()
    tags: tuple[str, ...] = ()


class ArtistInfo(BaseModel):
    """Artist details used for tag enrichment."""

    model_config = ConfigDict(frozen=True)

    name: NonEmptyStr
    mbid: str | None = None
    url: str | None = None
    images: tuple[ImageCandidate, ...] = ()
    tags: tuple[str, ...] = ()


class ExternalLinks(BaseModel):
    """Primary source link plus derived search/browse links for other catalogs."""

    lastfm_url: str | None = None
    musicbrainz_url: str | None = None
    discogs_search_url: str | None = None
    bandcamp_search_url: str | None = None


class Recommendation(BaseModel):
    """A single recommendation built by the pipeline."""

    name: NonEmptyStr
    artist: str
    image_url: str | None = None
    match_score: UnitInterval = 0.0
    tags: Annotated[list[str], Field(max_length=PipelineLimits.MAX_TAGS)] = Field(
        default_factory=list
    )
    kind: EntityKind
    links: ExternalLinks = Field(default_factory=ExternalLinks)

    @field_validator("tags", mode="before")
    @classmethod
    def _truncate_tags(cls, v: list[str]) -> list[str]:
        return list(v)[: PipelineLimits.MAX_TAGS]

    @property
    def ownership_key(self) -> str:
        if self.kind is EntityKind.ARTIST:
            return self.name.lower()
        return ownership_key(self.artist, self.name)


class RecommendationsResponse(BaseModel):
    """Result envelope: what the recommendations are for, and the ordered items."""

    source_name: str
    source_kind: EntityKind
    recommendations: list[Recommendation] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.recommendations) == 0

    @property
    def count(self) -> int:
        return len(self.recommendations)


class RecommendationRequest(BaseModel):
    """Value object for a recommendation request."""

    model_config = ConfigDict(frozen=True)

    kind: EntityKind
    name: NonEmptyStr
    artist: str = ""
    limit: int = PipelineLimits.DEFAULT_RESULT_LIMIT

    @field_validator("name", "artist", mode="before")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @field_validator("limit")
    @classmethod
    def _validate_limit(cls, v: int) -> int:
        if v not in PipelineLimits.ALLOWED_RESULT_LIMITS:
            raise ValueError(
                ErrorMessages.INVALID_RESULT_LIMIT.format(
                    allowed=PipelineLimits.ALLOWED_RESULT_LIMITS
                )
            )
        return v

    @property
    def primary_artist(self) -> str:
        """Artist the remote lookups are keyed on."""
        if self.kind is EntityKind.ARTIST:
            return self.name
        return self.artist

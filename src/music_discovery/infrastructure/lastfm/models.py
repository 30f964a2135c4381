"""Pydantic models for parsing Last.fm and iTunes JSON payloads.

These are infrastructure-specific models: they tolerate the quirks of the
remote JSON (single objects where lists are expected, empty strings where
objects are expected, scores as strings) and convert to domain entities.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from music_discovery.domain.recommendations.entities import (
    AlbumInfo,
    ArtistInfo,
    ImageCandidate,
    SimilarItemEntry,
)
from music_discovery.domain.shared.constants import ImageConstants
from music_discovery.domain.shared.types import MatchScore


def _as_list(v: Any) -> Any:
    if v is None or v == "":
        return []
    if isinstance(v, dict):
        return [v]
    return v


def _blank_to_none(v: Any) -> Any:
    if v == "":
        return None
    return v


def _artist_ref(v: Any) -> Any:
    # album.getInfo sends the artist as a plain string
    if isinstance(v, str):
        return {"name": v}
    return v


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LastFmImage(_Payload):
    url: str = Field(default="", alias="#text")
    size: str = ""

    def to_domain(self) -> ImageCandidate:
        return ImageCandidate(size=self.size, url=self.url)


ImageList = Annotated[list[LastFmImage], BeforeValidator(_as_list)]


class LastFmArtistRef(_Payload):
    name: str = ""
    mbid: str | None = None
    url: str | None = None


ArtistRef = Annotated[LastFmArtistRef, BeforeValidator(_artist_ref)]


class LastFmTag(_Payload):
    name: str = ""


class LastFmTags(_Payload):
    tag: Annotated[list[LastFmTag], BeforeValidator(_as_list)] = Field(default_factory=list)

    def names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self.tag if t.name)


TagsField = Annotated[LastFmTags | None, BeforeValidator(_blank_to_none)]


def _images(images: list[LastFmImage]) -> tuple[ImageCandidate, ...]:
    return tuple(image.to_domain() for image in images)


class LastFmSimilarArtist(_Payload):
    name: str = ""
    mbid: str | None = None
    match: MatchScore = 0.0
    url: str | None = None
    image: ImageList = Field(default_factory=list)

    def to_domain(self) -> SimilarItemEntry:
        return SimilarItemEntry(
            name=self.name,
            mbid=self.mbid,
            match=self.match,
            images=_images(self.image),
            url=self.url,
        )


class LastFmSimilarTrack(_Payload):
    name: str = ""
    mbid: str | None = None
    match: MatchScore = 0.0
    url: str | None = None
    artist: ArtistRef = Field(default_factory=LastFmArtistRef)
    image: ImageList = Field(default_factory=list)

    def to_domain(self) -> SimilarItemEntry:
        return SimilarItemEntry(
            name=self.name,
            artist=self.artist.name,
            mbid=self.mbid,
            match=self.match,
            images=_images(self.image),
            url=self.url,
        )


class LastFmTopAlbum(_Payload):
    name: str = ""
    mbid: str | None = None
    url: str | None = None
    artist: ArtistRef = Field(default_factory=LastFmArtistRef)
    image: ImageList = Field(default_factory=list)

    def to_domain(self) -> SimilarItemEntry:
        return SimilarItemEntry(
            name=self.name,
            artist=self.artist.name,
            mbid=self.mbid,
            images=_images(self.image),
            url=self.url,
        )


class _SimilarArtistsBody(_Payload):
    artist: Annotated[list[LastFmSimilarArtist], BeforeValidator(_as_list)] = Field(
        default_factory=list
    )


class SimilarArtistsResponse(_Payload):
    similarartists: _SimilarArtistsBody

    def to_domain(self) -> list[SimilarItemEntry]:
        return [a.to_domain() for a in self.similarartists.artist if a.name.strip()]


class _SimilarTracksBody(_Payload):
    track: Annotated[list[LastFmSimilarTrack], BeforeValidator(_as_list)] = Field(
        default_factory=list
    )


class SimilarTracksResponse(_Payload):
    similartracks: _SimilarTracksBody

    def to_domain(self) -> list[SimilarItemEntry]:
        return [t.to_domain() for t in self.similartracks.track if t.name.strip()]


class _TopAlbumsBody(_Payload):
    album: Annotated[list[LastFmTopAlbum], BeforeValidator(_as_list)] = Field(
        default_factory=list
    )


class TopAlbumsResponse(_Payload):
    topalbums: _TopAlbumsBody

    def to_domain(self) -> list[SimilarItemEntry]:
        return [a.to_domain() for a in self.topalbums.album if a.name.strip()]


class _AlbumInfoBody(_Payload):
    name: str
    artist: str = ""
    mbid: str | None = None
    url: str | None = None
    image: ImageList = Field(default_factory=list)
    tags: TagsField = None


class AlbumInfoResponse(_Payload):
    album: _AlbumInfoBody

    def to_domain(self) -> AlbumInfo:
        body = self.album
        return AlbumInfo(
            name=body.name,
            artist=body.artist,
            mbid=body.mbid or None,
            url=body.url or None,
            images=_images(body.image),
            tags=body.tags.names() if body.tags else (),
        )


class _ArtistInfoBody(_Payload):
    name: str
    mbid: str | None = None
    url: str | None = None
    image: ImageList = Field(default_factory=list)
    tags: TagsField = None


class ArtistInfoResponse(_Payload):
    artist: _ArtistInfoBody

    def to_domain(self) -> ArtistInfo:
        body = self.artist
        return ArtistInfo(
            name=body.name,
            mbid=body.mbid or None,
            url=body.url or None,
            images=_images(body.image),
            tags=body.tags.names() if body.tags else (),
        )


class LastFmErrorResponse(_Payload):
    """Application-level error: HTTP 200 with ``{"error": code, "message": ...}``."""

    error: int
    message: str = ""


class ITunesResult(_Payload):
    artwork_url_100: str | None = Field(default=None, alias="artworkUrl100")

    @property
    def large_artwork_url(self) -> str | None:
        if not self.artwork_url_100:
            return None
        return self.artwork_url_100.replace(
            ImageConstants.ITUNES_ARTWORK_SOURCE_SIZE, ImageConstants.ITUNES_ARTWORK_TARGET_SIZE
        )


class ITunesSearchResponse(_Payload):
    results: list[ITunesResult] = Field(default_factory=list)

    def first_artwork(self) -> str | None:
        for result in self.results:
            if result.large_artwork_url:
                return result.large_artwork_url
        return None

"""Pure functions building external catalog links for a recommendation."""

from __future__ import annotations

from typing import Final
from urllib.parse import quote

from music_discovery.domain.recommendations.entities import ExternalLinks

_DISCOGS_SEARCH: Final[str] = "https://www.discogs.com/search/?q={query}&type={type}"
_BANDCAMP_SEARCH: Final[str] = "https://bandcamp.com/search?q={query}&item_type={type}"
_MUSICBRAINZ: Final[str] = "https://musicbrainz.org/{entity}/{mbid}"


def _escape(value: str) -> str:
    return quote(value, safe="")


def _build(
    query: str,
    discogs_type: str,
    bandcamp_type: str,
    musicbrainz_entity: str,
    mbid: str | None,
    lastfm_url: str | None,
) -> ExternalLinks:
    escaped = _escape(query)
    return ExternalLinks(
        lastfm_url=lastfm_url or None,
        musicbrainz_url=_MUSICBRAINZ.format(entity=musicbrainz_entity, mbid=mbid) if mbid else None,
        discogs_search_url=_DISCOGS_SEARCH.format(query=escaped, type=discogs_type),
        bandcamp_search_url=_BANDCAMP_SEARCH.format(query=escaped, type=bandcamp_type),
    )


def build_artist_links(artist: str, mbid: str | None, lastfm_url: str | None) -> ExternalLinks:
    return _build(artist, "artist", "b", "artist", mbid, lastfm_url)


def build_album_links(
    artist: str, album: str, mbid: str | None, lastfm_url: str | None
) -> ExternalLinks:
    return _build(f"{artist} {album}", "release", "a", "release", mbid, lastfm_url)


def build_track_links(
    artist: str, track: str, mbid: str | None, lastfm_url: str | None
) -> ExternalLinks:
    return _build(f"{artist} {track}", "all", "t", "recording", mbid, lastfm_url)

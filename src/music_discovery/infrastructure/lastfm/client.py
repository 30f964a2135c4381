"""Last.fm metadata client with response caching and token-bucket throttling."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from music_discovery.application.interfaces.metadata_client import MetadataClient
from music_discovery.config.settings import LastFmSettings
from music_discovery.domain.recommendations.entities import (
    AlbumInfo,
    ArtistInfo,
    SimilarItemEntry,
)
from music_discovery.domain.shared.constants import LastFmDefaults, LastFmMethods
from music_discovery.domain.shared.messages import LogTemplates

from .cache import ResponseCache, make_cache_key
from .models import (
    AlbumInfoResponse,
    ArtistInfoResponse,
    ITunesSearchResponse,
    LastFmErrorResponse,
    SimilarArtistsResponse,
    SimilarTracksResponse,
    TopAlbumsResponse,
)
from .rate_limiter import TokenBucket

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


class LastFmClient(MetadataClient):
    """Reads similar artists/tracks, album and artist info, and top albums from Last.fm.

    One instance is meant to live for the whole process and be shared by all
    requests, so that the cache and the token bucket are shared too. Remote
    failures of any kind (transport, HTTP status, Last.fm error code,
    unparseable payload) are logged and returned as empty results; they are
    never cached, so the next call tries again.
    """

    def __init__(
        self,
        settings: LastFmSettings | None = None,
        cache: ResponseCache | None = None,
        rate_limiter: TokenBucket | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or LastFmSettings()
        self._cache = cache or ResponseCache(
            ttl_seconds=self._settings.cache_ttl_seconds,
            high_water_mark=self._settings.cache_high_water_mark,
        )
        self._rate_limiter = rate_limiter or TokenBucket(
            capacity=self._settings.rate_limit_capacity,
            refill_interval=self._settings.rate_limit_refill_ms / 1000.0,
        )
        self._http = http_client
        self._owns_http = http_client is None

    def _get_http(self) -> httpx.AsyncClient:
        if self._http is not None:
            return self._http

        self._http = httpx.AsyncClient(
            timeout=self._settings.timeout_seconds,
            headers={"User-Agent": LastFmDefaults.USER_AGENT},
        )
        logger.info(LogTemplates.LASTFM_CLIENT_INITIALIZED, self._settings.timeout_seconds)
        return self._http

    # === Public lookups ===

    async def similar_artists(self, artist: str, limit: int) -> list[SimilarItemEntry]:
        result = await self._lookup(
            LastFmMethods.ARTIST_GET_SIMILAR,
            {"artist": artist, "limit": limit},
            SimilarArtistsResponse,
            lambda r: tuple(r.to_domain()),
        )
        return list(result or ())

    async def similar_tracks(self, artist: str, track: str, limit: int) -> list[SimilarItemEntry]:
        result = await self._lookup(
            LastFmMethods.TRACK_GET_SIMILAR,
            {"artist": artist, "track": track, "limit": limit},
            SimilarTracksResponse,
            lambda r: tuple(r.to_domain()),
        )
        return list(result or ())

    async def album_info(self, artist: str, album: str) -> AlbumInfo | None:
        return await self._lookup(
            LastFmMethods.ALBUM_GET_INFO,
            {"artist": artist, "album": album},
            AlbumInfoResponse,
            lambda r: r.to_domain(),
        )

    async def artist_info(self, artist: str) -> ArtistInfo | None:
        return await self._lookup(
            LastFmMethods.ARTIST_GET_INFO,
            {"artist": artist},
            ArtistInfoResponse,
            lambda r: r.to_domain(),
        )

    async def artist_top_albums(self, artist: str, limit: int) -> list[SimilarItemEntry]:
        result = await self._lookup(
            LastFmMethods.ARTIST_GET_TOP_ALBUMS,
            {"artist": artist, "limit": limit},
            TopAlbumsResponse,
            lambda r: tuple(r.to_domain()),
        )
        return list(result or ())

    async def artist_image_fallback(self, artist: str) -> str | None:
        """Artwork from the iTunes Search API, used when Last.fm has no artist image.

        Unlike the Last.fm lookups, a successful search that finds nothing is
        cached too, so unknown artists are not searched again until the entry
        expires.
        """
        cache_key = make_cache_key(LastFmMethods.ITUNES_ARTIST_IMAGE, {"artist": artist})
        entry = self._cache.get_entry(cache_key)
        if entry is not None:
            logger.debug(LogTemplates.CACHE_HIT, cache_key)
            return entry.payload

        params = {
            "term": artist,
            "entity": "album",
            "attribute": "artistTerm",
            "limit": "1",
        }
        try:
            async with self._rate_limiter.slot():
                response = await self._get_http().get(
                    self._settings.itunes_search_url, params=params
                )
            response.raise_for_status()
            parsed = ITunesSearchResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            # pydantic's ValidationError is a ValueError as well
            logger.warning(LogTemplates.ITUNES_LOOKUP_FAILED, artist, e)
            return None

        artwork = parsed.first_artwork()
        self._cache.set(cache_key, artwork)
        return artwork

    # === Internals ===

    async def _lookup(
        self,
        method: str,
        params: dict[str, Any],
        response_model: type[M],
        convert: Callable[[M], T],
    ) -> T | None:
        cache_key = make_cache_key(method, params)
        entry = self._cache.get_entry(cache_key)
        if entry is not None:
            logger.debug(LogTemplates.CACHE_HIT, cache_key)
            return entry.payload

        logger.debug(LogTemplates.CACHE_MISS, cache_key)
        payload = await self._get_json(method, params)
        if payload is None:
            return None

        try:
            result = convert(response_model.model_validate(payload))
        except PydanticValidationError as e:
            logger.warning(LogTemplates.LASTFM_MALFORMED_PAYLOAD, method, e)
            return None

        self._cache.set(cache_key, result)
        return result

    async def _get_json(self, method: str, params: dict[str, Any]) -> dict[str, Any] | None:
        query = {
            "method": method,
            "api_key": self._settings.api_key.get_secret_value(),
            "format": "json",
            "autocorrect": "1",
        }
        query.update({name: str(value) for name, value in params.items()})

        try:
            async with self._rate_limiter.slot():
                response = await self._get_http().get(self._settings.base_url, params=query)
        except httpx.HTTPError as e:
            logger.error(LogTemplates.LASTFM_TRANSPORT_ERROR, method, e)
            return None

        if not response.is_success:
            logger.warning(LogTemplates.LASTFM_HTTP_STATUS, response.status_code, method)
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(LogTemplates.LASTFM_MALFORMED_PAYLOAD, method, e)
            return None

        if not isinstance(data, dict):
            logger.warning(LogTemplates.LASTFM_MALFORMED_PAYLOAD, method, type(data).__name__)
            return None

        if "error" in data:
            try:
                error = LastFmErrorResponse.model_validate(data)
            except PydanticValidationError as e:
                logger.warning(LogTemplates.LASTFM_MALFORMED_PAYLOAD, method, e)
                return None
            if error.error > 0:
                logger.warning(LogTemplates.LASTFM_API_ERROR, error.error, error.message)
                return None

        return data

    # === Lifecycle and introspection ===

    def is_available(self) -> bool:
        return self._settings.is_configured

    def clear_cache(self) -> int:
        return self._cache.clear()

    def get_cache_stats(self) -> dict[str, int]:
        return self._cache.get_stats()

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None
            logger.info(LogTemplates.LASTFM_CLIENT_CLOSED)
        self._rate_limiter.reset()

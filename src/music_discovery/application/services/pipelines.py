"""Per-kind recommendation pipelines.

Each pipeline has the same shape: over-fetch candidates, drop what the
catalog already owns, cut to the requested limit, then enrich what is left.
Ownership filtering always happens before enrichment so no external calls
are spent on discarded candidates.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING

from music_discovery.domain.recommendations.entities import (
    Recommendation,
    RecommendationRequest,
    SimilarItemEntry,
)
from music_discovery.domain.recommendations.links import (
    build_album_links,
    build_artist_links,
    build_track_links,
)
from music_discovery.domain.recommendations.services import RecommendationDomainService
from music_discovery.domain.shared.constants import PipelineLimits
from music_discovery.domain.shared.enums import EntityKind
from music_discovery.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from music_discovery.application.interfaces.catalog import ReferenceCatalog
    from music_discovery.application.interfaces.metadata_client import MetadataClient
    from music_discovery.config.settings import DiscoverySettings

logger = logging.getLogger(__name__)

Pipeline = Callable[
    ["MetadataClient", "ReferenceCatalog", RecommendationRequest, "DiscoverySettings"],
    Awaitable[list[Recommendation]],
]

_rules = RecommendationDomainService


# ── Artists ─────────────────────────────────────────────────────────


async def _enrich_artist(client: MetadataClient, rec: Recommendation) -> None:
    """Tags from artist info; image from the fallback source, then the top album cover."""
    try:
        info = await client.artist_info(rec.name)
        if info is not None and info.tags:
            rec.tags = list(info.tags[: PipelineLimits.MAX_TAGS])

        if rec.image_url is None:
            rec.image_url = await client.artist_image_fallback(rec.name)

        if rec.image_url is None:
            top_albums = await client.artist_top_albums(rec.name, PipelineLimits.FALLBACK_TOP_ALBUMS)
            if top_albums:
                rec.image_url = _rules.select_best_image(top_albums[0].images)
    except Exception as e:
        logger.warning(LogTemplates.ENRICHMENT_FAILED, rec.name, e)


async def recommend_artists(
    client: MetadataClient,
    catalog: ReferenceCatalog,
    request: RecommendationRequest,
    settings: DiscoverySettings,
) -> list[Recommendation]:
    fetch_limit = _rules.overfetch_limit(
        request.limit, settings.artist_overfetch_factor, settings.artist_overfetch_cap
    )
    similar = await client.similar_artists(request.name, fetch_limit)
    if not similar:
        return []

    owned = catalog.artist_names()
    survivors = _rules.filter_owned(EntityKind.ARTIST, similar, owned)
    logger.debug(
        LogTemplates.RECOMMENDATIONS_FILTERED,
        len(similar) - len(survivors),
        EntityKind.ARTIST,
        len(survivors),
    )
    survivors = survivors[: request.limit]
    if not survivors:
        return []

    recommendations = [
        Recommendation(
            name=entry.name,
            artist=entry.name,
            image_url=_rules.select_best_image(entry.images),
            match_score=entry.match,
            kind=EntityKind.ARTIST,
            links=build_artist_links(entry.name, entry.mbid, entry.url),
        )
        for entry in survivors
    ]

    await asyncio.gather(*(_enrich_artist(client, rec) for rec in recommendations))
    return recommendations


# ── Albums ──────────────────────────────────────────────────────────


def _album_candidates(
    artist: SimilarItemEntry, albums: list[SimilarItemEntry]
) -> list[Recommendation]:
    candidates = []
    for album in albums:
        album_artist = album.artist or artist.name
        candidates.append(
            Recommendation(
                name=album.name,
                artist=album_artist,
                image_url=_rules.select_best_image(album.images),
                match_score=artist.match,
                kind=EntityKind.ALBUM,
                links=build_album_links(album_artist, album.name, album.mbid, album.url),
            )
        )
    return candidates


async def _enrich_album(client: MetadataClient, rec: Recommendation) -> None:
    try:
        info = await client.album_info(rec.artist, rec.name)
        if info is not None and info.tags:
            rec.tags = list(info.tags[: PipelineLimits.MAX_TAGS])
    except Exception as e:
        logger.warning(LogTemplates.ENRICHMENT_FAILED, rec.name, e)


async def recommend_albums(
    client: MetadataClient,
    catalog: ReferenceCatalog,
    request: RecommendationRequest,
    settings: DiscoverySettings,
) -> list[Recommendation]:
    """Albums by artists similar to the source album's artist.

    Each similar artist contributes its top albums, scored with the artist's
    similarity. Results are ranked by that score.
    """
    artist_count = _rules.overfetch_limit(
        request.limit, settings.album_artist_factor, settings.album_artist_cap
    )
    similar_artists = await client.similar_artists(request.primary_artist, artist_count)
    if not similar_artists:
        return []

    album_lists = await asyncio.gather(
        *(client.artist_top_albums(a.name, settings.albums_per_artist) for a in similar_artists)
    )
    candidates = [
        rec
        for artist, albums in zip(similar_artists, album_lists, strict=True)
        for rec in _album_candidates(artist, albums)
    ]

    owned = catalog.album_keys()
    survivors = _rules.filter_owned_recommendations(candidates, owned)
    logger.debug(
        LogTemplates.RECOMMENDATIONS_FILTERED,
        len(candidates) - len(survivors),
        EntityKind.ALBUM,
        len(survivors),
    )
    recommendations = _rules.rank_by_score(survivors)[: request.limit]
    if not recommendations:
        return []

    to_enrich = recommendations[: settings.album_enrichment_count]
    await asyncio.gather(*(_enrich_album(client, rec) for rec in to_enrich))
    return recommendations


# ── Tracks ──────────────────────────────────────────────────────────


async def recommend_tracks(
    client: MetadataClient,
    catalog: ReferenceCatalog,
    request: RecommendationRequest,
    settings: DiscoverySettings,
) -> list[Recommendation]:
    fetch_limit = _rules.overfetch_limit(
        request.limit, settings.track_overfetch_factor, settings.track_overfetch_cap
    )
    similar = await client.similar_tracks(request.artist, request.name, fetch_limit)
    if not similar:
        return []

    owned = catalog.track_keys()
    survivors = _rules.filter_owned(EntityKind.TRACK, similar, owned)
    logger.debug(
        LogTemplates.RECOMMENDATIONS_FILTERED,
        len(similar) - len(survivors),
        EntityKind.TRACK,
        len(survivors),
    )

    recommendations = []
    for entry in survivors[: request.limit]:
        artist = entry.artist or ""
        recommendations.append(
            Recommendation(
                name=entry.name,
                artist=artist,
                image_url=_rules.select_best_image(entry.images),
                match_score=entry.match,
                kind=EntityKind.TRACK,
                links=build_track_links(artist, entry.name, entry.mbid, entry.url),
            )
        )
    return recommendations


PIPELINES: Mapping[EntityKind, Pipeline] = {
    EntityKind.ARTIST: recommend_artists,
    EntityKind.ALBUM: recommend_albums,
    EntityKind.TRACK: recommend_tracks,
}

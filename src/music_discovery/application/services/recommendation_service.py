"""Recommendation Application Service - runs the per-kind discovery pipelines."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.recommendations.entities import RecommendationRequest, RecommendationsResponse
from ...domain.shared.enums import EntityKind
from ...domain.shared.exceptions import MissingCredentialError
from ...domain.shared.messages import LogTemplates
from .pipelines import PIPELINES

if TYPE_CHECKING:
    from ...config.settings import DiscoverySettings
    from ..interfaces.catalog import ReferenceCatalog
    from ..interfaces.metadata_client import MetadataClient

logger = logging.getLogger(__name__)


class RecommendationService:
    """Produces recommendations the user does not already own.

    The metadata client and the catalog are shared across requests; the
    service itself holds no per-request state, so concurrent calls are safe.
    """

    def __init__(
        self,
        *,
        metadata_client: MetadataClient,
        catalog: ReferenceCatalog,
        discovery_settings: DiscoverySettings,
    ) -> None:
        self._client = metadata_client
        self._catalog = catalog
        self._settings = discovery_settings

    def is_enabled(self, kind: EntityKind) -> bool:
        return {
            EntityKind.ARTIST: self._settings.enable_for_artists,
            EntityKind.ALBUM: self._settings.enable_for_albums,
            EntityKind.TRACK: self._settings.enable_for_tracks,
        }[kind]

    async def recommend(self, request: RecommendationRequest) -> RecommendationsResponse:
        """Run the pipeline for ``request.kind``.

        Raises:
            MissingCredentialError: If the metadata client has no API key.
        """
        if not self._client.is_available():
            raise MissingCredentialError()

        response = RecommendationsResponse(source_name=request.name, source_kind=request.kind)
        if not self.is_enabled(request.kind):
            logger.info(LogTemplates.RECOMMENDATIONS_KIND_DISABLED, request.kind)
            return response

        logger.info(
            LogTemplates.RECOMMENDATIONS_REQUESTED, request.kind, request.name, request.limit
        )
        pipeline = PIPELINES[request.kind]
        response.recommendations = await pipeline(
            self._client, self._catalog, request, self._settings
        )
        logger.info(
            LogTemplates.RECOMMENDATIONS_BUILT, response.count, request.kind, request.name
        )
        return response

    async def recommend_for_item(
        self, item_id: str, limit: int | None = None
    ) -> RecommendationsResponse | None:
        """Recommendations seeded from a catalog item; ``None`` if the item is unknown."""
        if not self._client.is_available():
            raise MissingCredentialError()

        item = self._catalog.get_item(item_id)
        if item is None:
            logger.info(LogTemplates.RECOMMENDATIONS_ITEM_NOT_FOUND, item_id)
            return None

        request = RecommendationRequest(
            kind=item.kind,
            name=item.name,
            artist=item.artist,
            limit=limit or self._settings.max_recommendations,
        )
        return await self.recommend(request)

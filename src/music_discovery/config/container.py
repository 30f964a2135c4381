"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the metadata client, catalog, persistence and
application services. Components are created on first access and shared for
the lifetime of the process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.interfaces.catalog import ReferenceCatalog
    from ..application.services.recommendation_service import RecommendationService
    from ..application.services.saved_items_service import SavedItemStore
    from ..domain.saved.repository import SavedCollectionRepository
    from ..infrastructure.lastfm.cache import ResponseCache
    from ..infrastructure.lastfm.client import LastFmClient
    from ..infrastructure.lastfm.rate_limiter import TokenBucket
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    This container manages all application dependencies and their lifecycle.
    Components are lazily initialized when first accessed.
    """

    settings: Settings

    # Persistence layer
    _database: Database | None = None
    _saved_repository: SavedCollectionRepository | None = None

    # External metadata
    _rate_limiter: TokenBucket | None = None
    _response_cache: ResponseCache | None = None
    _metadata_client: LastFmClient | None = None

    # Library
    _catalog: ReferenceCatalog | None = None

    # Application services
    _recommendation_service: RecommendationService | None = None
    _saved_item_store: SavedItemStore | None = None

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database
            from ..infrastructure.persistence.repositories.saved_repository import (
                SAVED_COLLECTIONS_SCHEMA,
            )

            self._database = Database(
                self.settings.database.url,
                settings=self.settings.database,
                schema=(SAVED_COLLECTIONS_SCHEMA,),
            )
        return self._database

    @property
    def saved_repository(self) -> SavedCollectionRepository:
        """Get the saved collection repository."""
        if self._saved_repository is None:
            from ..infrastructure.persistence.repositories.saved_repository import (
                SQLiteSavedCollectionRepository,
            )

            self._saved_repository = SQLiteSavedCollectionRepository(self.database)
        return self._saved_repository

    # === External Metadata ===

    @property
    def rate_limiter(self) -> TokenBucket:
        """Get the token bucket shared by all outbound requests."""
        if self._rate_limiter is None:
            from ..infrastructure.lastfm.rate_limiter import TokenBucket

            lastfm = self.settings.lastfm
            self._rate_limiter = TokenBucket(
                capacity=lastfm.rate_limit_capacity,
                refill_interval=lastfm.rate_limit_refill_ms / 1000.0,
            )
        return self._rate_limiter

    @property
    def response_cache(self) -> ResponseCache:
        """Get the in-memory response cache."""
        if self._response_cache is None:
            from ..infrastructure.lastfm.cache import ResponseCache

            lastfm = self.settings.lastfm
            self._response_cache = ResponseCache(
                ttl_seconds=lastfm.cache_ttl_seconds,
                high_water_mark=lastfm.cache_high_water_mark,
            )
        return self._response_cache

    @property
    def metadata_client(self) -> LastFmClient:
        """Get the Last.fm metadata client."""
        if self._metadata_client is None:
            from ..infrastructure.lastfm.client import LastFmClient

            self._metadata_client = LastFmClient(
                settings=self.settings.lastfm,
                cache=self.response_cache,
                rate_limiter=self.rate_limiter,
            )
        return self._metadata_client

    # === Library ===

    @property
    def catalog(self) -> ReferenceCatalog:
        """Get the reference catalog; empty when no catalog file is configured."""
        if self._catalog is None:
            from ..infrastructure.catalog.memory_catalog import InMemoryCatalog

            if self.settings.catalog_path:
                self._catalog = InMemoryCatalog.from_json_file(self.settings.catalog_path)
            else:
                self._catalog = InMemoryCatalog()
        return self._catalog

    # === Application Services ===

    @property
    def recommendation_service(self) -> RecommendationService:
        """Get the recommendation application service."""
        if self._recommendation_service is None:
            from ..application.services.recommendation_service import RecommendationService

            self._recommendation_service = RecommendationService(
                metadata_client=self.metadata_client,
                catalog=self.catalog,
                discovery_settings=self.settings.discovery,
            )
        return self._recommendation_service

    @property
    def saved_item_store(self) -> SavedItemStore:
        """Get the saved item store."""
        if self._saved_item_store is None:
            from ..application.services.saved_items_service import SavedItemStore

            self._saved_item_store = SavedItemStore(repository=self.saved_repository)
        return self._saved_item_store

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        try:
            if self._metadata_client is not None:
                await self._metadata_client.aclose()
        except Exception as exc:
            logger.warning(LogTemplates.CONTAINER_SHUTDOWN_FAILED, "metadata client", exc)

        if self._database is not None:
            await self._database.close()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)

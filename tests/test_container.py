"""
Unit Tests for Dependency Injection Container

Tests for:
- Lazy initialization and caching of components
- Shared rate limiter and cache injected into the metadata client
- Catalog loading from the configured path
- Lifecycle methods (initialize, shutdown)
"""

import json
from unittest.mock import AsyncMock

import pytest

from music_discovery.application.services.recommendation_service import RecommendationService
from music_discovery.application.services.saved_items_service import SavedItemStore
from music_discovery.config.container import Container, create_container
from music_discovery.config.settings import DatabaseSettings, LastFmSettings, Settings
from music_discovery.infrastructure.catalog.memory_catalog import InMemoryCatalog
from music_discovery.infrastructure.lastfm.client import LastFmClient


@pytest.fixture
def settings():
    return Settings(
        database=DatabaseSettings(url="sqlite:///:memory:"),
        lastfm=LastFmSettings(api_key="k", rate_limit_capacity=3, cache_ttl_minutes=5),
    )


@pytest.fixture
def container(settings):
    return create_container(settings)


class TestContainerComponents:
    def test_factory(self, settings):
        container = create_container(settings)

        assert isinstance(container, Container)
        assert container.settings is settings

    def test_components_are_cached(self, container):
        assert container.metadata_client is container.metadata_client
        assert container.recommendation_service is container.recommendation_service
        assert container.saved_item_store is container.saved_item_store
        assert container.database is container.database

    def test_client_uses_shared_limiter_and_cache(self, container):
        client = container.metadata_client

        assert isinstance(client, LastFmClient)
        assert client.is_available() is True
        assert container.rate_limiter.capacity == 3
        assert container.response_cache.ttl_seconds == 300

    def test_services(self, container):
        assert isinstance(container.recommendation_service, RecommendationService)
        assert isinstance(container.saved_item_store, SavedItemStore)

    def test_empty_catalog_without_path(self, container):
        catalog = container.catalog

        assert isinstance(catalog, InMemoryCatalog)
        assert len(catalog) == 0

    def test_catalog_loaded_from_path(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"items": [{"id": "1", "kind": "artist", "name": "Mew"}]}))
        container = create_container(Settings(catalog_path=str(path)))

        assert container.catalog.artist_names() == {"mew"}


class TestContainerLifecycle:
    async def test_initialize_and_shutdown(self, container):
        await container.initialize()
        assert container.database.is_initialized is True

        await container.shutdown()
        assert container.database.is_initialized is False

    async def test_shutdown_closes_client(self, container):
        client = container.metadata_client
        client.aclose = AsyncMock()

        await container.shutdown()

        client.aclose.assert_awaited_once()

    async def test_shutdown_survives_client_failure(self, container):
        await container.initialize()
        container.metadata_client.aclose = AsyncMock(side_effect=RuntimeError("boom"))

        await container.shutdown()

        assert container.database.is_initialized is False

    async def test_shutdown_without_components(self, container):
        await container.shutdown()

import pytest
import pytest_asyncio

from music_discovery.config.settings import clear_settings_cache

# ============================================================================
# Settings Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep real environment variables and the settings cache out of tests."""
    for name in ("LASTFM__API_KEY", "LASTFM_API_KEY", "LOG_LEVEL", "CATALOG_PATH"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from music_discovery.infrastructure.persistence.database import Database
    from music_discovery.infrastructure.persistence.repositories.saved_repository import (
        SAVED_COLLECTIONS_SCHEMA,
    )

    db = Database(":memory:", schema=(SAVED_COLLECTIONS_SCHEMA,))
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def saved_repository(in_memory_database):
    """Create a saved collection repository with in-memory database."""
    from music_discovery.infrastructure.persistence.repositories.saved_repository import (
        SQLiteSavedCollectionRepository,
    )

    return SQLiteSavedCollectionRepository(in_memory_database)


@pytest_asyncio.fixture
async def saved_item_store(saved_repository):
    """Create a saved item store backed by the in-memory repository."""
    from music_discovery.application.services.saved_items_service import SavedItemStore

    return SavedItemStore(repository=saved_repository)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def lastfm_settings():
    """Last.fm settings with a key and no refill delay."""
    from music_discovery.config.settings import LastFmSettings

    return LastFmSettings(api_key="test-key", rate_limit_refill_ms=0)


@pytest.fixture
def discovery_settings():
    from music_discovery.config.settings import DiscoverySettings

    return DiscoverySettings()


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest.fixture
def sample_saved_item():
    """Create a sample saved album for testing."""
    from music_discovery.domain.saved.entities import SavedItem
    from music_discovery.domain.shared.enums import EntityKind

    return SavedItem(
        name="In Rainbows",
        artist="Radiohead",
        kind=EntityKind.ALBUM,
        image_url="https://lastfm.freetls.fastly.net/i/u/300x300/inrainbows.png",
        tags=["alternative", "rock"],
        match_score=0.8,
        link="https://www.last.fm/music/Radiohead/In+Rainbows",
    )


@pytest.fixture
def sample_catalog():
    """Library owning Radiohead, Portishead, one album and one track."""
    from music_discovery.application.interfaces.catalog import CatalogItem
    from music_discovery.domain.shared.enums import EntityKind
    from music_discovery.infrastructure.catalog.memory_catalog import InMemoryCatalog

    return InMemoryCatalog(
        [
            CatalogItem(id="ar-1", kind=EntityKind.ARTIST, name="Radiohead"),
            CatalogItem(id="ar-2", kind=EntityKind.ARTIST, name="Portishead"),
            CatalogItem(id="al-1", kind=EntityKind.ALBUM, name="OK Computer", artist="Radiohead"),
            CatalogItem(id="tr-1", kind=EntityKind.TRACK, name="Karma Police", artist="Radiohead"),
        ]
    )

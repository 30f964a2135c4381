"""Reference catalog implementations."""

from music_discovery.infrastructure.catalog.memory_catalog import CatalogDocument, InMemoryCatalog

__all__ = ["CatalogDocument", "InMemoryCatalog"]

"""Port interfaces the application layer depends on."""

from music_discovery.application.interfaces.catalog import CatalogItem, ReferenceCatalog
from music_discovery.application.interfaces.metadata_client import MetadataClient

__all__ = [
    "CatalogItem",
    "MetadataClient",
    "ReferenceCatalog",
]

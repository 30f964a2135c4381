"""Shared string enumerations for type-safe comparisons across layers."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Kind of music entity a recommendation is about."""

    ARTIST = "artist"
    ALBUM = "album"
    TRACK = "track"


class ImageSize(StrEnum):
    """Size tags used by Last.fm image candidates."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRALARGE = "extralarge"
    MEGA = "mega"


class SaveOutcome(StrEnum):
    """Result of saving an item into a user collection."""

    SAVED = "saved"
    ALREADY_SAVED = "already_saved"


class DeleteOutcome(StrEnum):
    """Result of deleting an item from a user collection."""

    DELETED = "deleted"
    NOT_FOUND = "not_found"

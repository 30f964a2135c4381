"""Shared kernel: exceptions, enums, constrained types and message constants."""

from music_discovery.domain.shared.enums import DeleteOutcome, EntityKind, ImageSize, SaveOutcome
from music_discovery.domain.shared.exceptions import (
    ConfigurationError,
    DomainError,
    EntityNotFoundError,
    MissingCredentialError,
    ValidationError,
)

__all__ = [
    # Enums
    "EntityKind",
    "ImageSize",
    "SaveOutcome",
    "DeleteOutcome",
    # Exceptions
    "DomainError",
    "ValidationError",
    "EntityNotFoundError",
    "ConfigurationError",
    "MissingCredentialError",
]

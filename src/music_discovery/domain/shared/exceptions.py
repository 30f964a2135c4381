"""Base exception classes for domain-level errors."""

from __future__ import annotations

from .messages import ErrorMessages


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when domain validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class EntityNotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, identifier: str | int, message: str | None = None) -> None:
        msg = message or f"{entity_type} with id '{identifier}' not found"
        super().__init__(msg, code="ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.identifier = identifier


class ConfigurationError(DomainError):
    """Raised when required configuration is missing or unusable."""

    def __init__(self, setting: str, message: str | None = None) -> None:
        msg = message or f"Setting '{setting}' is not configured"
        super().__init__(msg, code="CONFIGURATION_ERROR")
        self.setting = setting


class MissingCredentialError(ConfigurationError):
    """Raised when the external service credential is absent.

    This is the only fatal condition of a recommendation request and is kept
    distinct from an empty result.
    """

    def __init__(self, setting: str = "lastfm.api_key") -> None:
        super().__init__(setting, ErrorMessages.LASTFM_API_KEY_NOT_SET)
        self.code = "MISSING_CREDENTIAL"

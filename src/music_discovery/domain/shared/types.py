"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across bounded contexts is defined here once,
so models can simply annotate their fields::

    from music_discovery.domain.shared.types import NonEmptyStr, UnitInterval

    class MyModel(BaseModel):
        name: NonEmptyStr
        score: UnitInterval
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from .messages import ErrorMessages

# ── Numeric constraints ─────────────────────────────────────────────


def _clamp_unit(v: Any) -> Any:
    """Last.fm sends scores as strings or numbers; clamp them into [0, 1]."""
    if v is None or v == "":
        return 0.0
    try:
        value = float(v)
    except (TypeError, ValueError):
        return v
    return min(1.0, max(0.0, value))


UnitInterval = Annotated[float, Field(ge=0.0, le=1.0)]
"""Float in [0.0, 1.0], used for match scores."""

MatchScore = Annotated[float, BeforeValidator(_clamp_unit), Field(ge=0.0, le=1.0)]
"""Remote match score coerced from str/number and clamped to [0.0, 1.0]."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

UserIdStr = Annotated[str, Field(min_length=1, max_length=128)]
"""Opaque user identity: 1-128 characters."""


# ── Datetime constraints ────────────────────────────────────────────


def _ensure_utc(v: Any) -> Any:
    """Validate that a datetime is timezone-aware and normalise to UTC."""
    if isinstance(v, str):
        v = datetime.fromisoformat(v.replace("Z", "+00:00"))
    if isinstance(v, datetime):
        if v.tzinfo is None:
            raise ValueError(ErrorMessages.TIMEZONE_REQUIRED_UTC_DATETIME)
        return v.astimezone(UTC)
    return v


UtcDatetimeField = Annotated[datetime, BeforeValidator(_ensure_utc)]
"""Timezone-aware datetime, normalised to UTC on input."""

"""Pydantic schemas for the Web API.

Field names are snake_case in Python and camelCase on the wire, matching
the stored document.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================


class LoginRequest(CamelModel):
    """Request body for login (auto-registers unknown ids)."""

    # Numeric university ids are accepted and stored as strings
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True
    )

    name: str | None = None
    university_id: str | None = None


class ProgressUpdateRequest(CamelModel):
    """Request body for a progress update. ``progress`` is merged one level deep."""

    progress: dict[str, Any] | None = None

    @field_validator("progress")
    @classmethod
    def details_is_object(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        if value is not None and "details" in value:
            if not isinstance(value["details"], dict):
                raise ValueError("progress.details must be an object")
        return value


class NameUpdateRequest(CamelModel):
    """Request body for a name update."""

    name: str | None = None


# =============================================================================
# RECORD SCHEMAS
# =============================================================================


class ProgressResponse(CamelModel):
    """Reading progress of a student."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    books_read: Any = 0
    last_read: Any = None
    details: dict[str, Any] = Field(default_factory=dict)


class StudentResponse(CamelModel):
    """Response for a student record."""

    id: str
    name: str
    progress: ProgressResponse


class BookResponse(CamelModel):
    """Response for a catalog entry."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    id: str
    title: Any = ""
    author: Any = ""
    cover_url: Any = ""
    total_pages: Any = 0
    genre: Any = ""


class LeaderboardEntryResponse(CamelModel):
    """A ranked student."""

    rank: int
    id: str
    name: str
    total_pages_read: int


# =============================================================================
# MISC SCHEMAS
# =============================================================================


class ErrorResponse(BaseModel):
    """Error body for every non-2xx response."""

    error: str


class RootResponse(BaseModel):
    """Response for the API root."""

    status: str = "ok"
    message: str = "Backend is running"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

"""
Private Notes Backend — Pydantic Request/Response Schemas
==========================================================

What:  Pydantic models defining the API contract between client and backend.
How:   FastAPI uses these models to parse request bodies, serialize responses
       and generate the OpenAPI documentation.

Request bodies are typed but their fields are optional at the schema level:
presence and non-emptiness of title/content is a business rule checked by
NoteService so the API can answer 400 "Title and content are required"
without ever touching the record store.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Identity — resolved per request, never persisted
# ══════════════════════════════════════════════════════════════════════════


class Identity(BaseModel):
    """The caller as reported by the identity provider."""
    id: str = Field(description="Opaque user identifier")
    email: Optional[str] = Field(default=None, description="User email, if known")


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteWrite(BaseModel):
    """
    What:  Body of POST /api/notes and PUT /api/notes/{id}.
    How:   Unknown fields (e.g. `user_id`) are ignored, so ownership can never
           be changed through the body.
    """
    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    content: Optional[str] = Field(default=None, description="Note body (required, non-empty)")

    model_config = {"extra": "ignore"}

    @property
    def is_complete(self) -> bool:
        return bool(self.title) and bool(self.content)


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Full representation of a stored note.
    Who:   Returned by every note endpoint except DELETE.
    """
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    user_id: str = Field(description="Owner identity id")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the note was last written (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Title and content are required",
            "details": {"fields": ["title", "content"]},
            "request_id": "1f0c9a2b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

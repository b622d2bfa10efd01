"""
Private Notes Client — API Models
==================================

What:  Pydantic mirrors of the backend's note schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class Note(BaseModel):
    """A stored note as returned by the backend."""
    id: str
    user_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title or content."""
        needle = query.lower()
        return needle in self.title.lower() or needle in self.content.lower()


class NotePayload(BaseModel):
    """Body of create and update requests."""
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")

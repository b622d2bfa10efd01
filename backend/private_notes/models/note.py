"""
Private Notes Backend — Note SQLAlchemy Model
==============================================

What:  ORM model representing the `notes` table.
Who:   Used by SqlNoteStore for CRUD operations and by Alembic for schema management.

Table Design:
    - id: UUID primary key generated client-side (uuid4), globally unique
    - user_id: opaque identity id from the identity provider; never updated
    - title / content: TEXT, non-empty for every write the API accepts
    - created_at / updated_at: timezone-aware UTC timestamps

    Index on (user_id, created_at DESC) serves the only listing query:
    "this user's notes, newest first".
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from private_notes.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A personal text note owned by exactly one identity.

    Lifecycle:
        1. Inserted by an authenticated create (id, timestamps assigned here)
        2. title/content replaced by updates scoped to id AND user_id
        3. Hard-deleted by deletes scoped the same way
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique note identifier",
    )

    # Only ever set on insert; the store's update path refuses to touch it
    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Identity id of the owner, as reported by the identity provider",
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        comment="When this note was last written (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_user_created_at", user_id, created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, user_id='{self.user_id}', "
            f"created_at='{self.created_at}')>"
        )

"""
Private Notes Backend — Record Store
=====================================

What:  Ownership-scoped CRUD over the `notes` table.
How:   `RecordStore` is the abstract collaborator contract used by NoteService.
       `SqlNoteStore` implements it with async SQLAlchemy; each operation is a
       single-shot session (and transaction) from the injected session factory.
Who:   NoteService, via the `get_note_store` FastAPI dependency.

Ownership scoping:
    Every statement goes through `owned_by()`, which adds
    `WHERE notes.user_id = :owner_id`. This is the only access-control
    mechanism in the system.

Signals:
    RecordNotFoundError  no row matched id AND owner (a malformed id included)
    RecordStoreError     anything else the database reported; message verbatim
"""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import Delete, Select, delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from private_notes.database import async_session_factory
from private_notes.exceptions import RecordNotFoundError, RecordStoreError
from private_notes.models.note import Note

logger = logging.getLogger(__name__)

# Columns an update may write; user_id and timestamps are never client-settable
UPDATABLE_FIELDS = ("title", "content")


def owned_by(statement, owner_id: str):
    """Restrict a select/update/delete statement on Note to one owner's rows."""
    return statement.where(Note.user_id == owner_id)


def _parse_note_id(note_id: Any) -> Optional[uuid.UUID]:
    if isinstance(note_id, uuid.UUID):
        return note_id
    try:
        return uuid.UUID(str(note_id))
    except ValueError:
        return None


class RecordStore(ABC):
    """
    Abstract interface for the notes record store.

    Every method takes the caller's owner id; implementations must apply it
    as an equality filter on `user_id`.
    """

    @abstractmethod
    async def select_all(self, owner_id: str) -> List[Note]:
        """All rows owned by `owner_id`, newest `created_at` first."""
        ...

    @abstractmethod
    async def select_one(self, owner_id: str, note_id: Any) -> Note:
        """Exactly one row; raises RecordNotFoundError if none matches."""
        ...

    @abstractmethod
    async def insert(self, owner_id: str, values: Dict[str, Any]) -> Note:
        """Insert a row owned by `owner_id`; returns it with id and timestamps set."""
        ...

    @abstractmethod
    async def update(self, owner_id: str, note_id: Any, values: Dict[str, Any]) -> Note:
        """Write `values` to the matching row; raises RecordNotFoundError if none matches."""
        ...

    @abstractmethod
    async def delete(self, owner_id: str, note_id: Any) -> None:
        """Delete the matching row if it exists. Never signals a missing row."""
        ...


class SqlNoteStore(RecordStore):
    """RecordStore backed by async SQLAlchemy sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def select_all(self, owner_id: str) -> List[Note]:
        query: Select = owned_by(select(Note), owner_id).order_by(desc(Note.created_at))
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._store_error("select_all", e) from e

    async def select_one(self, owner_id: str, note_id: Any) -> Note:
        parsed_id = _parse_note_id(note_id)
        if parsed_id is None:
            raise RecordNotFoundError(record_id=str(note_id))

        query: Select = owned_by(select(Note), owner_id).where(Note.id == parsed_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._store_error("select_one", e) from e

        if note is None:
            raise RecordNotFoundError(record_id=str(note_id))
        return note

    async def insert(self, owner_id: str, values: Dict[str, Any]) -> Note:
        note = Note(user_id=owner_id, **{k: values[k] for k in UPDATABLE_FIELDS if k in values})
        try:
            async with self._session_factory() as session:
                session.add(note)
                await session.commit()
                await session.refresh(note)
        except SQLAlchemyError as e:
            raise self._store_error("insert", e) from e

        logger.info("Note %s created for user %s", note.id, owner_id)
        return note

    async def update(self, owner_id: str, note_id: Any, values: Dict[str, Any]) -> Note:
        parsed_id = _parse_note_id(note_id)
        if parsed_id is None:
            raise RecordNotFoundError(record_id=str(note_id))

        query: Select = owned_by(select(Note), owner_id).where(Note.id == parsed_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                note = result.scalar_one_or_none()
                if note is None:
                    raise RecordNotFoundError(record_id=str(note_id))

                for field in UPDATABLE_FIELDS:
                    if field in values:
                        setattr(note, field, values[field])
                # set explicitly: no UPDATE is emitted when the values are unchanged
                note.updated_at = datetime.now(timezone.utc)

                await session.commit()
                await session.refresh(note)
        except SQLAlchemyError as e:
            raise self._store_error("update", e) from e

        logger.info("Note %s updated for user %s", note.id, owner_id)
        return note

    async def delete(self, owner_id: str, note_id: Any) -> None:
        parsed_id = _parse_note_id(note_id)
        if parsed_id is None:
            return

        statement: Delete = owned_by(delete(Note), owner_id).where(Note.id == parsed_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                await session.commit()
        except SQLAlchemyError as e:
            raise self._store_error("delete", e) from e

        logger.info("Delete of note %s for user %s matched %d row(s)", note_id, owner_id, result.rowcount)

    @staticmethod
    def _store_error(operation: str, exc: SQLAlchemyError) -> RecordStoreError:
        original = getattr(exc, "orig", None)
        message = str(original) if original is not None else str(exc)
        logger.error("Record store %s failed: %s", operation, message)
        return RecordStoreError(
            message=message,
            context={"operation": operation, "error_type": type(exc).__name__},
        )


# ── Singleton Instance ────────────────────────────────────────────────────
note_store = SqlNoteStore(async_session_factory)


def get_note_store() -> RecordStore:
    """FastAPI dependency returning the process-wide store (overridable in tests)."""
    return note_store

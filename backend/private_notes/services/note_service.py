"""
Private Notes Backend — Note Service (Business Logic)
======================================================

What:  The five note operations (list, get, create, update, delete) for one
       authenticated identity.
How:   Validates input, composes an ownership-scoped RecordStore call and
       translates store signals into API exceptions.
Who:   Called by the route handlers in private_notes.routes.notes.

Error translation:
    RecordNotFoundError → NotFoundError  (404)
    RecordStoreError    → InternalError  (500, store message verbatim)

Design:
    NoteService is stateless; it receives the store and identity for each
    call, so tests can pass a mock store directly.
"""

import logging
from typing import List

from private_notes.exceptions import (
    InternalError,
    NotFoundError,
    RecordNotFoundError,
    RecordStoreError,
    ValidationError,
)
from private_notes.schemas.note import Identity, NoteResponse, NoteWrite
from private_notes.services.note_store import RecordStore

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Title and content are required"


class NoteService:
    """
    Business logic layer for note operations.

    Every store call is made with `identity.id` as the owner, so a note owned
    by someone else behaves exactly like a note that does not exist.
    """

    async def list_notes(self, store: RecordStore, identity: Identity) -> List[NoteResponse]:
        """The caller's notes, newest first. No pagination."""
        try:
            notes = await store.select_all(identity.id)
        except RecordStoreError as e:
            raise self._internal(e)
        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, store: RecordStore, identity: Identity, note_id: str) -> NoteResponse:
        """
        Fetch one of the caller's notes.

        Raises:
            NotFoundError: no note with this id belongs to the caller (→ 404)
            InternalError: the store failed (→ 500)
        """
        try:
            note = await store.select_one(identity.id, note_id)
        except RecordNotFoundError:
            raise NotFoundError(resource="Note", resource_id=note_id)
        except RecordStoreError as e:
            raise self._internal(e)
        return NoteResponse.model_validate(note)

    async def create_note(self, store: RecordStore, identity: Identity, payload: NoteWrite) -> NoteResponse:
        """
        Insert a note owned by the caller.

        Validation happens before any store call; an incomplete payload
        never reaches the database.
        """
        self._require_title_and_content(payload)
        try:
            note = await store.insert(
                identity.id,
                {"title": payload.title, "content": payload.content},
            )
        except RecordStoreError as e:
            raise self._internal(e)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        store: RecordStore,
        identity: Identity,
        note_id: str,
        payload: NoteWrite,
    ) -> NoteResponse:
        """
        Replace title and content of one of the caller's notes.

        Only title/content are written; ownership is immutable. Last writer wins.
        """
        self._require_title_and_content(payload)
        try:
            note = await store.update(
                identity.id,
                note_id,
                {"title": payload.title, "content": payload.content},
            )
        except RecordNotFoundError:
            raise NotFoundError(resource="Note", resource_id=note_id)
        except RecordStoreError as e:
            raise self._internal(e)
        return NoteResponse.model_validate(note)

    async def delete_note(self, store: RecordStore, identity: Identity, note_id: str) -> None:
        """Delete one of the caller's notes. Succeeds whether or not the note existed."""
        try:
            await store.delete(identity.id, note_id)
        except RecordStoreError as e:
            raise self._internal(e)

    @staticmethod
    def _require_title_and_content(payload: NoteWrite) -> None:
        if payload.is_complete:
            return
        missing = [name for name in ("title", "content") if not getattr(payload, name)]
        raise ValidationError(message=MISSING_FIELDS_MESSAGE, context={"fields": missing})

    @staticmethod
    def _internal(exc: RecordStoreError) -> InternalError:
        return InternalError(message=exc.message, context=dict(exc.context))


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()

"""
Private Notes Backend — Notes Route Handlers
=============================================

What:  The /api/notes resource: list, get, create, update, delete.
How:   Resolves the caller (get_current_identity) and the record store
       (get_note_store), delegates to NoteService, returns JSON.
Who:   Called by the client's NotesApi gateway.

Every route requires a bearer token. Write bodies are read by
`note_write_body`, which depends on the gate, so a request without a valid
token gets 401 even when its body is not JSON.
Responses are per-user and mutable: `Cache-Control: private, no-store`.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from private_notes.auth import get_current_identity
from private_notes.schemas.note import (
    ErrorResponse,
    Identity,
    NoteResponse,
    NoteWrite,
)
from private_notes.services.note_service import note_service
from private_notes.services.note_store import RecordStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

NO_STORE = "private, no-store"

_AUTH_ERRORS = {
    401: {"description": "Missing, invalid or expired bearer token", "model": ErrorResponse},
    500: {"description": "Record store error", "model": ErrorResponse},
}

_NOTE_WRITE_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": NoteWrite.model_json_schema()}},
    }
}


async def note_write_body(
    request: Request,
    identity: Identity = Depends(get_current_identity),
) -> NoteWrite:
    """Parse a create/update body once the caller is authenticated."""
    raw = await request.body()
    try:
        return NoteWrite.model_validate_json(raw)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses=_AUTH_ERRORS,
    summary="List the caller's notes",
    description="Returns every note owned by the caller, newest first.",
)
async def list_notes(
    response: Response,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_note_store),
) -> List[NoteResponse]:
    notes = await note_service.list_notes(store=store, identity=identity)
    response.headers["Cache-Control"] = NO_STORE
    return notes


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        **_AUTH_ERRORS,
        404: {"description": "No such note for this user", "model": ErrorResponse},
    },
    summary="Get one of the caller's notes",
)
async def get_note(
    note_id: str,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_note_store),
) -> NoteResponse:
    """
    Args:
        note_id: Taken as a plain string; an id that is not a UUID simply
                 matches no row and yields 404.
    """
    note = await note_service.get_note(store=store, identity=identity, note_id=note_id)
    response.headers["Cache-Control"] = NO_STORE
    return note


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Title and content are required", "model": ErrorResponse},
    },
    summary="Create a note",
    openapi_extra=_NOTE_WRITE_BODY,
)
async def create_note(
    payload: NoteWrite = Depends(note_write_body),
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_note_store),
) -> NoteResponse:
    return await note_service.create_note(store=store, identity=identity, payload=payload)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Title and content are required", "model": ErrorResponse},
        404: {"description": "No such note for this user", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
    openapi_extra=_NOTE_WRITE_BODY,
)
async def update_note(
    note_id: str,
    payload: NoteWrite = Depends(note_write_body),
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_note_store),
) -> NoteResponse:
    return await note_service.update_note(
        store=store, identity=identity, note_id=note_id, payload=payload
    )


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_AUTH_ERRORS,
    summary="Delete a note",
    description="Idempotent: answers 204 whether or not the note existed.",
)
async def delete_note(
    note_id: str,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_note_store),
) -> Response:
    await note_service.delete_note(store=store, identity=identity, note_id=note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

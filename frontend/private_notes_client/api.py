"""
Private Notes Client — API Gateway
===================================

What:  Typed async access to the backend's /api/notes resource.
How:   Wraps an httpx.AsyncClient whose auth flow asks the SessionProvider
       for the current access token before every request and, if there is
       one, sends it as `Authorization: Bearer <token>`.
Who:   Used by NotesState (list/delete) and NoteEditor (create/update).

Errors are not handled here: httpx.HTTPStatusError (non-2xx),
httpx.TransportError and ValueError (an undecodable or invalid response body)
propagate to the caller. REQUEST_ERRORS names them for callers.
"""

import logging
from abc import ABC, abstractmethod
from typing import AsyncGenerator, List, Optional

import httpx

from private_notes_client.config import client_settings
from private_notes_client.models import Note, NotePayload

logger = logging.getLogger(__name__)

# json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
REQUEST_ERRORS = (httpx.HTTPError, ValueError)


class SessionProvider(ABC):
    """Source of the signed-in user's current access token."""

    @abstractmethod
    async def get_access_token(self) -> Optional[str]:
        """The token to send, or None when nobody is signed in."""
        ...


class StaticSession(SessionProvider):
    """A session holding one token, replaceable after sign-in / sign-out."""

    def __init__(self, access_token: Optional[str] = None):
        self.access_token = access_token

    async def get_access_token(self) -> Optional[str]:
        return self.access_token


class SessionBearerAuth(httpx.Auth):
    """httpx auth flow resolving the bearer token per request."""

    def __init__(self, session: SessionProvider):
        self.session = session

    async def async_auth_flow(self, request: httpx.Request) -> AsyncGenerator[httpx.Request, httpx.Response]:
        token = await self.session.get_access_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


class NotesApi:
    """
    Gateway to the notes endpoints.

    Usage:
        async with NotesApi(session=StaticSession(token)) as api:
            notes = await api.get_all()
    """

    def __init__(
        self,
        session: SessionProvider,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or client_settings.api_url,
            headers={"Content-Type": "application/json"},
            auth=SessionBearerAuth(session),
            timeout=timeout or client_settings.request_timeout,
            transport=transport,
        )

    async def get_all(self) -> List[Note]:
        response = await self._client.get("/api/notes")
        response.raise_for_status()
        return [Note.model_validate(item) for item in response.json()]

    async def get_by_id(self, note_id: str) -> Note:
        response = await self._client.get(f"/api/notes/{note_id}")
        response.raise_for_status()
        return Note.model_validate(response.json())

    async def create(self, payload: NotePayload) -> Note:
        response = await self._client.post("/api/notes", json=payload.model_dump())
        response.raise_for_status()
        return Note.model_validate(response.json())

    async def update(self, note_id: str, payload: NotePayload) -> Note:
        response = await self._client.put(f"/api/notes/{note_id}", json=payload.model_dump())
        response.raise_for_status()
        return Note.model_validate(response.json())

    async def delete(self, note_id: str) -> None:
        response = await self._client.delete(f"/api/notes/{note_id}")
        response.raise_for_status()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "NotesApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

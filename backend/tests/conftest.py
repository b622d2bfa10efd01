"""
Private Notes Backend — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the backend test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── note_store: SqlNoteStore over a fresh in-memory SQLite database
    ├── mock_store: AsyncMock honouring the RecordStore interface
    ├── identity_verifier: FakeIdentityVerifier with two known tokens
    ├── alice / bob: the identities behind those tokens
    ├── alice_headers / bob_headers: Authorization headers for them
    └── test_client: HTTPX AsyncClient bound to the app, store and verifier
"""

import os
from typing import Dict, Optional
from unittest.mock import AsyncMock

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["IDENTITY_URL"] = "http://identity.test"
os.environ["IDENTITY_API_KEY"] = "test-anon-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from private_notes.database import Base
from private_notes.schemas.note import Identity
from private_notes.services.identity import IdentityVerifier
from private_notes.services.note_store import RecordStore, SqlNoteStore


class FakeIdentityVerifier(IdentityVerifier):
    """Resolves tokens from a fixed table; records every token it was asked about."""

    def __init__(self, identities: Dict[str, Identity]):
        self.identities = identities
        self.seen_tokens = []

    async def verify(self, token: str) -> Optional[Identity]:
        self.seen_tokens.append(token)
        return self.identities.get(token)


@pytest.fixture
def alice() -> Identity:
    return Identity(id="user-alice", email="alice@example.com")


@pytest.fixture
def bob() -> Identity:
    return Identity(id="user-bob", email="bob@example.com")


@pytest.fixture
def identity_verifier(alice, bob) -> FakeIdentityVerifier:
    return FakeIdentityVerifier({"token-alice": alice, "token-bob": bob})


@pytest.fixture
def alice_headers() -> Dict[str, str]:
    return {"Authorization": "Bearer token-alice"}


@pytest.fixture
def bob_headers() -> Dict[str, str]:
    return {"Authorization": "Bearer token-bob"}


@pytest_asyncio.fixture
async def session_factory():
    """
    A private in-memory SQLite database per test.

    StaticPool keeps the single connection alive so every session sees the
    same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def note_store(session_factory) -> SqlNoteStore:
    return SqlNoteStore(session_factory)


@pytest.fixture
def mock_store():
    """A RecordStore stand-in for asserting which store calls were (not) made."""
    return AsyncMock(spec=RecordStore)


async def _client_for(store: RecordStore, verifier: IdentityVerifier):
    from private_notes.main import app
    from private_notes.services.identity import get_identity_verifier
    from private_notes.services.note_store import get_note_store

    app.dependency_overrides[get_note_store] = lambda: store
    app.dependency_overrides[get_identity_verifier] = lambda: verifier
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(note_store, identity_verifier):
    """
    HTTPX AsyncClient talking to the app with a real SQLite-backed store.

    Usage:
        async def test_list(test_client, alice_headers):
            response = await test_client.get("/api/notes", headers=alice_headers)
    """
    async for client in _client_for(note_store, identity_verifier):
        yield client


@pytest_asyncio.fixture
async def mock_store_client(mock_store, identity_verifier):
    """Same as test_client, but backed by `mock_store`."""
    async for client in _client_for(mock_store, identity_verifier):
        yield client

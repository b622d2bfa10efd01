"""
Private Notes Client — Test Configuration (conftest.py)
========================================================

Fixture Hierarchy (all function-scoped):
    ├── make_note: factory for Note models with sensible defaults
    ├── saved_note: one persisted note owned by "user-alice"
    └── mock_api: AsyncMock honouring the NotesApi interface
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from private_notes_client.api import NotesApi
from private_notes_client.models import Note

CREATED = datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_note():
    def _make(
        id: str = "11111111-1111-4111-8111-111111111111",
        title: str = "Groceries",
        content: str = "milk, eggs",
        user_id: str = "user-alice",
        created_at: datetime = CREATED,
        updated_at: datetime = CREATED,
    ) -> Note:
        return Note(
            id=id,
            user_id=user_id,
            title=title,
            content=content,
            created_at=created_at,
            updated_at=updated_at,
        )

    return _make


@pytest.fixture
def saved_note(make_note) -> Note:
    return make_note()


@pytest.fixture
def mock_api() -> AsyncMock:
    return AsyncMock(spec=NotesApi)

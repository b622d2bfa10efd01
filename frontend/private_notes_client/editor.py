"""
Private Notes Client — Note Editor
===================================

What:  Editing state for one note (or a note not yet created): title,
       content, save status and a debounced autosave.

How:   Every edit on an existing note restarts a single-shot timer
       (`loop.call_later`, `autosave_delay` seconds). When it fires and the
       values differ from the last persisted note, the editor sends one
       update. Saves are serialized by an asyncio.Lock; a timer that fires
       while a save is in flight is re-armed rather than issuing a second
       concurrent request.

    IDLE ──edit──▶ EDITING ──timer──▶ AUTO_SAVING ──▶ EDITING
                      │
                      └──save()──▶ MANUAL_SAVING ──▶ EDITING

Manual save failures are reported through the `alert` callback; autosave
failures are only logged.
"""

import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from private_notes_client.api import REQUEST_ERRORS, NotesApi
from private_notes_client.config import client_settings
from private_notes_client.formatting import format_last_saved
from private_notes_client.models import Note, NotePayload

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please fill in both title and content"
SAVE_FAILED_MESSAGE = "Failed to save note. Please try again."


class EditorState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    AUTO_SAVING = "auto_saving"
    MANUAL_SAVING = "manual_saving"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NoteEditor:
    """
    Args:
        api:            Gateway used for create/update.
        note:           Note being edited, or None when composing a new one.
        on_save:        Called with the persisted note after every successful save.
        alert:          Called with a user-facing message on manual save problems.
        autosave_delay: Debounce window in seconds (default from client settings).
        clock:          Returns the current time; used for `last_saved_at`.
    """

    def __init__(
        self,
        api: NotesApi,
        note: Optional[Note] = None,
        on_save: Optional[Callable[[Note], None]] = None,
        alert: Optional[Callable[[str], None]] = None,
        autosave_delay: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.api = api
        self.note = note
        self.title = note.title if note else ""
        self.content = note.content if note else ""
        self.last_saved_at: Optional[datetime] = note.updated_at if note else None
        self.state = EditorState.IDLE

        self.autosave_delay = autosave_delay or client_settings.autosave_delay
        self._on_save = on_save
        self._alert = alert
        self._clock = clock or _utcnow

        self._save_lock = asyncio.Lock()
        self._timer: Optional[asyncio.TimerHandle] = None
        self._autosave_task: Optional[asyncio.Task] = None

    # ── Input ──

    def set_title(self, title: str) -> None:
        self.title = title
        self._changed()

    def set_content(self, content: str) -> None:
        self.content = content
        self._changed()

    def _changed(self) -> None:
        if self.state == EditorState.IDLE:
            self.state = EditorState.EDITING
        if self.note is not None:
            self._schedule_autosave()

    # ── Derived state ──

    @property
    def is_complete(self) -> bool:
        return bool(self.title.strip()) and bool(self.content.strip())

    @property
    def is_dirty(self) -> bool:
        """True when the input differs from the last persisted values."""
        if self.note is None:
            return bool(self.title or self.content)
        return self.title != self.note.title or self.content != self.note.content

    @property
    def is_saving(self) -> bool:
        return self.state in (EditorState.AUTO_SAVING, EditorState.MANUAL_SAVING)

    @property
    def autosave_pending(self) -> bool:
        return self._timer is not None

    def status_text(self, now: Optional[datetime] = None) -> str:
        """Header status for an existing note: "Saving..." or "Saved <when>"."""
        if self.note is None:
            return ""
        if self.state == EditorState.AUTO_SAVING:
            return "Saving..."
        if self.last_saved_at is None:
            return ""
        return f"Saved {format_last_saved(self.last_saved_at, now or self._clock())}"

    # ── Autosave ──

    def _schedule_autosave(self) -> None:
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.autosave_delay, self._on_timer)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = None
        if self._save_lock.locked():
            self._schedule_autosave()
            return
        self._autosave_task = asyncio.ensure_future(self.autosave())

    async def autosave(self) -> bool:
        """
        Send the current values as an update if they changed and are complete.

        Returns True when an update was persisted. Never runs for a note that
        has not been created yet.
        """
        async with self._save_lock:
            note = self.note
            if note is None or not self.is_complete or not self.is_dirty:
                return False

            self.state = EditorState.AUTO_SAVING
            payload = NotePayload(title=self.title, content=self.content)
            try:
                saved = await self.api.update(note.id, payload)
            except REQUEST_ERRORS as e:
                logger.error("Auto-save failed for note %s: %s", note.id, e)
                return False
            finally:
                if self.state == EditorState.AUTO_SAVING:
                    self.state = EditorState.EDITING

            self._adopt(saved)
            return True

    async def wait_for_autosave(self) -> None:
        """Wait for an autosave request already in flight, if any."""
        task = self._autosave_task
        if task is not None and not task.done():
            await task

    # ── Manual save ──

    async def save(self) -> Optional[Note]:
        """
        Create or update the note now, bypassing the debounce.

        Returns the persisted note, or None when the input is incomplete or
        the request failed (the input is kept in both cases).
        """
        if not self.is_complete:
            self._notify_user(MISSING_FIELDS_MESSAGE)
            return None

        self._cancel_timer()
        async with self._save_lock:
            self.state = EditorState.MANUAL_SAVING
            payload = NotePayload(title=self.title, content=self.content)
            try:
                if self.note is None:
                    saved = await self.api.create(payload)
                else:
                    saved = await self.api.update(self.note.id, payload)
            except REQUEST_ERRORS as e:
                logger.error("Failed to save note: %s", e)
                self._notify_user(SAVE_FAILED_MESSAGE)
                return None
            finally:
                if self.state == EditorState.MANUAL_SAVING:
                    self.state = EditorState.EDITING

            self._adopt(saved)
            return saved

    def _adopt(self, saved: Note) -> None:
        self.note = saved
        self.last_saved_at = self._clock()
        if self._on_save is not None:
            self._on_save(saved)

    def _notify_user(self, message: str) -> None:
        if self._alert is not None:
            self._alert(message)
        else:
            logger.warning(message)

    # ── Lifecycle ──

    def close(self) -> None:
        """Stop any pending autosave. A request already in flight completes."""
        self._cancel_timer()
        self.state = EditorState.IDLE

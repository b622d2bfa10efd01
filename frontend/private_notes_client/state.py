"""
Private Notes Client — Note List State
=======================================

What:  Headless state behind the note list: loaded notes, the selected note,
       "creating a new note" mode and the search query.
How:   Views subscribe a callback and re-render on every notification.
       Network failures while loading or deleting are logged and leave the
       list unchanged.
"""

import logging
from typing import Callable, List, Optional

from private_notes_client.api import REQUEST_ERRORS, NotesApi
from private_notes_client.models import Note

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this note?"
NO_MATCHES_MESSAGE = "No notes found"
NO_NOTES_MESSAGE = "No notes yet. Create your first note!"

Listener = Callable[[], None]


class NotesState:

    def __init__(self, api: NotesApi):
        self.api = api
        self.notes: List[Note] = []
        self.selected: Optional[Note] = None
        self.is_creating = False
        self.loading = True
        self.search_query = ""
        self._listeners: List[Listener] = []

    # ── Subscriptions ──

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ── Loading ──

    async def load(self) -> None:
        """Fetch the caller's notes, newest first."""
        self.loading = True
        try:
            self.notes = await self.api.get_all()
        except REQUEST_ERRORS as e:
            logger.error("Failed to load notes: %s", e)
        finally:
            self.loading = False
            self._notify()

    # ── Selection ──

    def select(self, note: Note) -> None:
        self.selected = note
        self.is_creating = False
        self._notify()

    def start_creating(self) -> None:
        self.is_creating = True
        self.selected = None
        self._notify()

    def cancel_editing(self) -> None:
        self.is_creating = False
        self.selected = None
        self._notify()

    def set_search(self, query: str) -> None:
        self.search_query = query
        self._notify()

    # ── Editor callbacks ──

    def note_created(self, note: Note) -> None:
        """A new note was saved: put it on top and select it."""
        self.notes = [note] + self.notes
        self.selected = note
        self.is_creating = False
        self._notify()

    def note_updated(self, note: Note) -> None:
        self.notes = [note if n.id == note.id else n for n in self.notes]
        self.selected = note
        self._notify()

    # ── Deletion ──

    async def delete(
        self,
        note_id: str,
        confirm: Optional[Callable[[str], bool]] = None,
    ) -> bool:
        """
        Delete a note after optional confirmation.

        Returns True when the note was deleted. A declined confirmation
        makes no request; a failed request keeps the note in the list.
        """
        if confirm is not None and not confirm(DELETE_PROMPT):
            return False

        try:
            await self.api.delete(note_id)
        except REQUEST_ERRORS as e:
            logger.error("Failed to delete note %s: %s", note_id, e)
            return False

        self.notes = [n for n in self.notes if n.id != note_id]
        if self.selected is not None and self.selected.id == note_id:
            self.selected = None
        self._notify()
        return True

    # ── Derived views ──

    @property
    def visible_notes(self) -> List[Note]:
        """Notes matching the search query (all notes when it is empty)."""
        if not self.search_query:
            return list(self.notes)
        return [n for n in self.notes if n.matches(self.search_query)]

    @property
    def empty_message(self) -> str:
        return NO_MATCHES_MESSAGE if self.search_query else NO_NOTES_MESSAGE

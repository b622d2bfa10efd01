"""
Private Notes Client
=====================

What: Client side of Private Notes: the HTTP gateway to the backend and the
      headless state behind the note list and the note editor.

    NotesApi     (api.py)     authenticated CRUD calls to /api/notes
    NotesState   (state.py)   note list, selection, search
    NoteEditor   (editor.py)  title/content editing with debounced autosave
"""

from private_notes_client.api import NotesApi, SessionProvider, StaticSession
from private_notes_client.editor import EditorState, NoteEditor
from private_notes_client.models import Note, NotePayload
from private_notes_client.state import NotesState

__version__ = "1.0.0"

__all__ = [
    "EditorState",
    "Note",
    "NoteEditor",
    "NotePayload",
    "NotesApi",
    "NotesState",
    "SessionProvider",
    "StaticSession",
]

"""
Private Notes Client — NoteEditor Tests
========================================

What:  Autosave debounce and manual save behaviour against a mocked NotesApi.
How:   A short autosave delay keeps the timer tests fast; the editor's own
       event loop timer is real.

What we test:
    ✅ Rapid edits → a single update carrying only the final values
    ✅ No autosave for new notes, blank fields or unchanged values
    ✅ close() cancels a pending autosave and wins over an in-flight one
    ✅ Manual save: validation alert, create vs update, failure alert
    ✅ Unreadable response bodies: alert on manual save, logged on autosave
    ✅ A timer firing during an in-flight save waits its turn
"""

import asyncio
import json
from datetime import datetime, timezone

import httpx
import pytest
from pydantic import ValidationError

from private_notes_client.editor import (
    MISSING_FIELDS_MESSAGE,
    SAVE_FAILED_MESSAGE,
    EditorState,
    NoteEditor,
)
from private_notes_client.models import Note, NotePayload


def undecodable_body() -> json.JSONDecodeError:
    """What response.json() raises on a non-JSON 2xx body."""
    return json.JSONDecodeError("Expecting value", "<html>bad gateway</html>", 0)


def invalid_note() -> ValidationError:
    """What Note.model_validate raises on a body missing most fields."""
    try:
        Note.model_validate({"id": "x"})
    except ValidationError as e:
        return e
    raise AssertionError("expected a ValidationError")


DELAY = 0.05
SETTLE = 0.15
SAVED_AT = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def echo_update(make_note):
    """side_effect returning the note the backend would send back."""

    async def _update(note_id, payload):
        return make_note(id=note_id, title=payload.title, content=payload.content)

    return _update


async def settle(editor: NoteEditor) -> None:
    await asyncio.sleep(SETTLE)
    await editor.wait_for_autosave()


class TestAutosave:

    @pytest.mark.asyncio
    async def test_rapid_edits_send_one_update_with_final_values(self, mock_api, saved_note, make_note):
        mock_api.update.side_effect = echo_update(make_note)
        saved = []
        editor = NoteEditor(mock_api, note=saved_note, on_save=saved.append, autosave_delay=DELAY)

        editor.set_title("G")
        editor.set_title("Gr")
        editor.set_title("Groceries list")
        editor.set_content("milk, eggs, bread")
        assert editor.autosave_pending
        await settle(editor)

        mock_api.update.assert_awaited_once_with(
            saved_note.id, NotePayload(title="Groceries list", content="milk, eggs, bread")
        )
        assert saved[0].title == "Groceries list"
        assert editor.note.content == "milk, eggs, bread"
        assert editor.state == EditorState.EDITING

    @pytest.mark.asyncio
    async def test_no_request_before_quiet_period(self, mock_api, saved_note, make_note):
        mock_api.update.side_effect = echo_update(make_note)
        editor = NoteEditor(mock_api, note=saved_note, autosave_delay=0.5)

        editor.set_content("changed")
        await asyncio.sleep(DELAY)

        mock_api.update.assert_not_awaited()
        editor.close()

    @pytest.mark.asyncio
    async def test_new_note_never_autosaves(self, mock_api):
        editor = NoteEditor(mock_api, autosave_delay=DELAY)

        editor.set_title("Draft")
        editor.set_content("body")
        assert not editor.autosave_pending
        await settle(editor)

        mock_api.update.assert_not_awaited()
        mock_api.create.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title,content", [("", "body"), ("Title", "   "), (" ", "\n")])
    async def test_blank_fields_never_autosave(self, mock_api, saved_note, title, content):
        editor = NoteEditor(mock_api, note=saved_note, autosave_delay=DELAY)

        editor.set_title(title)
        editor.set_content(content)
        await settle(editor)

        mock_api.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reverted_edit_sends_nothing(self, mock_api, saved_note):
        editor = NoteEditor(mock_api, note=saved_note, autosave_delay=DELAY)

        editor.set_title("Something else")
        editor.set_title(saved_note.title)
        await settle(editor)

        mock_api.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_cancels_pending_autosave(self, mock_api, saved_note):
        editor = NoteEditor(mock_api, note=saved_note, autosave_delay=DELAY)

        editor.set_content("unsaved")
        editor.close()
        await settle(editor)

        mock_api.update.assert_not_awaited()
        assert editor.state == EditorState.IDLE
        assert not editor.autosave_pending

    @pytest.mark.asyncio
    async def test_autosave_failure_is_silent(self, mock_api, saved_note):
        mock_api.update.side_effect = httpx.ConnectError("offline")
        alerts = []
        editor = NoteEditor(mock_api, note=saved_note, alert=alerts.append, autosave_delay=DELAY)

        editor.set_content("kept locally")
        await settle(editor)

        assert mock_api.update.await_count == 1
        assert alerts == []
        assert editor.content == "kept locally"
        assert editor.is_dirty
        assert editor.last_saved_at == saved_note.updated_at

    @pytest.mark.asyncio
    @pytest.mark.parametrize("make_error", [undecodable_body, invalid_note])
    async def test_unreadable_response_during_autosave_is_swallowed(self, mock_api, saved_note, make_error):
        mock_api.update.side_effect = make_error()
        alerts = []
        editor = NoteEditor(mock_api, note=saved_note, alert=alerts.append, autosave_delay=DELAY)

        editor.set_content("kept locally")
        await settle(editor)

        assert mock_api.update.await_count == 1
        assert alerts == []
        assert editor.state == EditorState.EDITING
        assert editor.is_dirty
        assert editor.note is saved_note

    @pytest.mark.asyncio
    async def test_close_during_autosave_stays_idle(self, mock_api, saved_note, make_note):
        gate = asyncio.Event()

        async def slow_update(note_id, payload):
            await gate.wait()
            return make_note(id=note_id, title=payload.title, content=payload.content)

        mock_api.update.side_effect = slow_update
        saved = []
        editor = NoteEditor(mock_api, note=saved_note, on_save=saved.append, autosave_delay=DELAY)
        editor.set_content("edited")
        await asyncio.sleep(SETTLE)
        assert editor.state == EditorState.AUTO_SAVING

        editor.close()
        gate.set()
        await editor.wait_for_autosave()

        assert editor.state == EditorState.IDLE
        assert [n.content for n in saved] == ["edited"]

    @pytest.mark.asyncio
    async def test_timer_during_save_waits_for_it(self, mock_api, saved_note, make_note):
        gate = asyncio.Event()

        async def slow_update(note_id, payload):
            await gate.wait()
            return make_note(id=note_id, title=payload.title, content=payload.content)

        mock_api.update.side_effect = slow_update
        editor = NoteEditor(mock_api, note=saved_note, autosave_delay=DELAY)

        editor.set_content("first draft")
        save_task = asyncio.ensure_future(editor.save())
        await asyncio.sleep(0)
        assert editor.state == EditorState.MANUAL_SAVING

        editor.set_content("second draft")
        await asyncio.sleep(SETTLE)
        assert mock_api.update.await_count == 1
        assert editor.autosave_pending

        gate.set()
        await save_task
        await settle(editor)

        assert mock_api.update.await_count == 2
        first, second = mock_api.update.await_args_list
        assert first.args[1].content == "first draft"
        assert second.args[1].content == "second draft"
        assert editor.note.content == "second draft"


class TestManualSave:

    @pytest.mark.asyncio
    async def test_incomplete_input_alerts_without_request(self, mock_api):
        alerts = []
        editor = NoteEditor(mock_api, alert=alerts.append)
        editor.set_title("Only a title")

        result = await editor.save()

        assert result is None
        assert alerts == [MISSING_FIELDS_MESSAGE]
        mock_api.create.assert_not_awaited()
        mock_api.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_note_is_created(self, mock_api, make_note):
        created = make_note(id="new-id", title="T", content="C", updated_at=SAVED_AT)
        mock_api.create.return_value = created
        saved = []
        editor = NoteEditor(mock_api, on_save=saved.append, clock=lambda: SAVED_AT)
        editor.set_title("T")
        editor.set_content("C")

        result = await editor.save()

        mock_api.create.assert_awaited_once_with(NotePayload(title="T", content="C"))
        assert result is created
        assert saved == [created]
        assert editor.note is created
        assert editor.last_saved_at == SAVED_AT
        assert editor.state == EditorState.EDITING

    @pytest.mark.asyncio
    async def test_existing_note_is_updated(self, mock_api, saved_note, make_note):
        mock_api.update.side_effect = echo_update(make_note)
        editor = NoteEditor(mock_api, note=saved_note, autosave_delay=DELAY)
        editor.set_content("edited")

        await editor.save()
        await settle(editor)

        mock_api.update.assert_awaited_once_with(
            saved_note.id, NotePayload(title=saved_note.title, content="edited")
        )
        mock_api.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_alerts_and_keeps_input(self, mock_api):
        mock_api.create.side_effect = httpx.ConnectError("offline")
        alerts = []
        saved = []
        editor = NoteEditor(mock_api, on_save=saved.append, alert=alerts.append)
        editor.set_title("T")
        editor.set_content("C")

        result = await editor.save()

        assert result is None
        assert alerts == [SAVE_FAILED_MESSAGE]
        assert saved == []
        assert (editor.title, editor.content) == ("T", "C")
        assert editor.note is None


    @pytest.mark.asyncio
    @pytest.mark.parametrize("make_error", [undecodable_body, invalid_note])
    async def test_unreadable_response_alerts_and_keeps_input(self, mock_api, make_error):
        mock_api.create.side_effect = make_error()
        alerts = []
        editor = NoteEditor(mock_api, alert=alerts.append)
        editor.set_title("T")
        editor.set_content("C")

        result = await editor.save()

        assert result is None
        assert alerts == [SAVE_FAILED_MESSAGE]
        assert (editor.title, editor.content) == ("T", "C")
        assert editor.state == EditorState.EDITING


class TestStatus:

    def test_initial_state(self, mock_api, saved_note):
        editor = NoteEditor(mock_api, note=saved_note)

        assert editor.state == EditorState.IDLE
        assert editor.last_saved_at == saved_note.updated_at
        assert (editor.title, editor.content) == (saved_note.title, saved_note.content)

    def test_new_note_has_no_status(self, mock_api):
        assert NoteEditor(mock_api).status_text() == ""

    @pytest.mark.asyncio
    async def test_saved_status_after_save(self, mock_api, saved_note, make_note):
        mock_api.update.side_effect = echo_update(make_note)
        editor = NoteEditor(mock_api, note=saved_note, clock=lambda: SAVED_AT)
        editor.set_content("edited")

        await editor.save()

        assert editor.status_text() == "Saved just now"

    @pytest.mark.asyncio
    async def test_saving_status_while_autosaving(self, mock_api, saved_note, make_note):
        gate = asyncio.Event()
        statuses = []

        async def slow_update(note_id, payload):
            statuses.append(editor.status_text())
            await gate.wait()
            return make_note(id=note_id, title=payload.title, content=payload.content)

        mock_api.update.side_effect = slow_update
        editor = NoteEditor(mock_api, note=saved_note, autosave_delay=DELAY)
        editor.set_content("edited")
        await asyncio.sleep(SETTLE)

        assert statuses == ["Saving..."]
        assert editor.is_saving

        gate.set()
        await editor.wait_for_autosave()
        assert not editor.is_saving

"""Tests for the debounced autosaver."""

import asyncio

import pytest

from marknote.client import AutosaveMode, Autosaver, MarkNoteAPIError

DELAY = 0.02


class FakeClient:
    def __init__(self):
        self.calls = []
        self.fail_with = None

    def _record(self, *call):
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append(call)

    async def create_note(self, title, content):
        self._record("create", title, content)
        return {"id": "note-1", "title": title, "content": content}

    async def update_note(self, note_id, title=None, content=None):
        self._record("update", note_id, title, content)
        return {"id": note_id}

    async def update_shared_note(self, share_token, title, content):
        self._record("shared", share_token, title, content)
        return {"title": title}


async def settle():
    await asyncio.sleep(DELAY * 3)


@pytest.fixture
def api():
    return FakeClient()


def test_default_delays_follow_mode(api):
    assert Autosaver.for_new_note(api).delay == 1.0
    assert Autosaver.for_note(api, {"id": "n", "title": "t", "content": "c"}).delay == 0.5


def test_mode_requires_identifiers(api):
    with pytest.raises(ValueError):
        Autosaver(api, AutosaveMode.EXISTING)
    with pytest.raises(ValueError):
        Autosaver(api, AutosaveMode.SHARED)


async def test_new_note_waits_for_title_and_content(api):
    saver = Autosaver.for_new_note(api, delay=DELAY)

    saver.update(title="Title", content="ab")
    assert not saver.is_pending
    saver.update(title="   ", content="abc")
    assert not saver.is_pending
    await settle()
    assert api.calls == []


async def test_new_note_debounces_then_inserts_trimmed(api):
    saver = Autosaver.for_new_note(api, delay=DELAY)

    saver.update(title="  Title ")
    saver.update(content=" abc")
    saver.update(content=" abcd ")
    assert saver.is_pending
    await settle()

    assert api.calls == [("create", "Title", "abcd")]
    assert saver.note_id == "note-1"
    assert not saver.has_unsaved_changes


async def test_new_note_later_saves_update(api):
    saver = Autosaver.for_new_note(api, delay=DELAY)
    saver.update(title="Title", content="abcd")
    await settle()
    saver.update(content="abcde")
    await settle()

    assert api.calls[-1] == ("update", "note-1", "Title", "abcde")


async def test_new_note_whitespace_only_change_is_not_saved(api):
    saver = Autosaver.for_new_note(api, delay=DELAY)
    saver.update(title="Title", content="abcd")
    await settle()
    saver.update(content="abcd  ")
    await settle()

    assert len(api.calls) == 1


async def test_existing_note_saves_changes_as_typed(api):
    saver = Autosaver.for_note(api, {"id": "n1", "title": "T", "content": "old"}, delay=DELAY)

    saver.update(content="old")
    assert not saver.is_pending

    saver.update(content=" new ")
    await settle()
    assert api.calls == [("update", "n1", "T", " new ")]


async def test_existing_note_skips_blank_values(api):
    saver = Autosaver.for_note(api, {"id": "n1", "title": "T", "content": "old"}, delay=DELAY)
    saver.update(content="   ")
    await settle()
    assert api.calls == []
    assert saver.has_unsaved_changes


async def test_shared_note_requires_public_edit(api):
    note = {"title": "T", "content": "c", "allow_public_edit": False}
    saver = Autosaver.for_shared_note(api, "tok", note, delay=DELAY)

    saver.update(content="changed")
    await settle()
    assert api.calls == []

    saver.set_public_edit(True)
    saver.update(content="changed again")
    await settle()
    assert api.calls == [("shared", "tok", "T", "changed again")]


async def test_revoking_public_edit_cancels_pending_save(api):
    note = {"title": "T", "content": "c", "allow_public_edit": True}
    saver = Autosaver.for_shared_note(api, "tok", note, delay=DELAY)

    saver.update(content="changed")
    saver.set_public_edit(False)
    await settle()
    assert api.calls == []


async def test_flush_saves_immediately(api):
    saver = Autosaver.for_new_note(api, delay=10)
    # below the autosave threshold, but "done" still saves
    saver.update(title="T", content="ab")

    assert await saver.flush() is True
    assert api.calls == [("create", "T", "ab")]


async def test_flush_with_nothing_to_save(api):
    saver = Autosaver.for_note(api, {"id": "n1", "title": "T", "content": "c"}, delay=DELAY)
    assert await saver.flush() is False


async def test_close_cancels_without_saving(api):
    saver = Autosaver.for_note(api, {"id": "n1", "title": "T", "content": "c"}, delay=DELAY)
    saver.update(content="changed")
    await saver.close()
    await settle()
    assert api.calls == []
    assert not saver.is_pending


async def test_failed_save_keeps_changes_and_error(api):
    saver = Autosaver.for_note(api, {"id": "n1", "title": "T", "content": "c"}, delay=DELAY)
    api.fail_with = MarkNoteAPIError(500, "boom")

    saver.update(content="changed")
    await settle()

    assert isinstance(saver.last_error, MarkNoteAPIError)
    assert saver.has_unsaved_changes

    api.fail_with = None
    assert await saver.flush() is True
    assert saver.last_error is None
    assert saver.save_count == 1

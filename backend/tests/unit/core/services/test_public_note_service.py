import uuid
from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

import marknote.core.services.public_note_service as ps
from marknote.core.schemas.sharing import SharedNoteUpdate
from marknote.core.services.public_note_service import PublicNoteService


class Dummy:
    def __init__(self, **kw):
        self.__dict__.update(kw)


class FakeNoteRepo:
    def __init__(self, note):
        self.note = note
        self.updates = []

    async def get_public_by_share_token(self, token):
        if self.note.is_public and self.note.share_token == token:
            return self.note
        return None

    async def update_shared_note(self, token, data):
        note = await self.get_public_by_share_token(token)
        if note:
            self.updates.append(data)
            note.__dict__.update(data)
        return note


@pytest.fixture
def setup(monkeypatch, fake_redis):
    note = Dummy(
        id=uuid.uuid4(),
        title="Shared",
        content="hello public world",
        is_public=True,
        share_token="tok",
        allow_public_edit=True,
        updated_at=datetime.now(timezone.utc),
    )
    repo = FakeNoteRepo(note)
    monkeypatch.setattr(ps, "NoteRepository", lambda s: repo, raising=True)
    return PublicNoteService(session=None), repo, note


async def test_get_shared_note(setup):
    svc, repo, note = setup
    resp = await svc.get_shared_note("tok")
    assert resp.title == "Shared"
    assert resp.word_count == 3
    assert resp.allow_public_edit is True


async def test_unknown_or_private_token_is_404(setup):
    svc, repo, note = setup
    with pytest.raises(HTTPException) as exc:
        await svc.get_shared_note("nope")
    assert exc.value.status_code == 404
    assert exc.value.detail == "Note not found or not shared"

    note.is_public = False
    with pytest.raises(HTTPException):
        await svc.get_shared_note("tok")


async def test_update_shared_note(setup):
    svc, repo, note = setup
    resp = await svc.update_shared_note(
        "tok", SharedNoteUpdate(title="New", content=" kept as typed "), "1.2.3.4"
    )
    assert resp.title == "New"
    assert repo.updates == [{"title": "New", "content": " kept as typed "}]


async def test_update_forbidden_without_public_edit(setup):
    svc, repo, note = setup
    note.allow_public_edit = False
    with pytest.raises(HTTPException) as exc:
        await svc.update_shared_note("tok", SharedNoteUpdate(title="a", content="b"), "1.2.3.4")
    assert exc.value.status_code == 403
    assert repo.updates == []


async def test_update_is_rate_limited_per_client(setup, fake_redis, monkeypatch):
    svc, repo, note = setup
    monkeypatch.setattr(svc.settings, "public_edit_rate_limit", 2)
    edit = SharedNoteUpdate(title="a", content="b")

    await svc.update_shared_note("tok", edit, "1.1.1.1")
    await svc.update_shared_note("tok", edit, "1.1.1.1")
    with pytest.raises(HTTPException) as exc:
        await svc.update_shared_note("tok", edit, "1.1.1.1")
    assert exc.value.status_code == 429

    # a different client has its own budget
    await svc.update_shared_note("tok", edit, "2.2.2.2")
    assert len(repo.updates) == 3
    assert "ratelimit:share:tok:1.1.1.1" in fake_redis.counters


async def test_redis_outage_does_not_block_edits(setup, monkeypatch):
    svc, repo, note = setup

    class DownRedis:
        async def increment_rate_limit(self, key, expire=60):
            return 0

    monkeypatch.setattr(ps, "get_redis_client", lambda: DownRedis())
    monkeypatch.setattr(svc.settings, "public_edit_rate_limit", 0)

    await svc.update_shared_note("tok", SharedNoteUpdate(title="a", content="b"), "1.1.1.1")
    assert len(repo.updates) == 1

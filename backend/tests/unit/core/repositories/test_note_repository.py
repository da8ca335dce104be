"""Tests for NoteRepository against SQLite."""

import uuid

import pytest

from marknote.core.repositories.note_repository import (
    NoteRepository,
    ShareTokenExhaustedError,
)


async def _create(repo, owner_id, title="t", content="c"):
    return await repo.create_note({"title": title, "content": content, "owner_id": owner_id})


async def test_create_and_get(test_session, test_user):
    repo = NoteRepository(test_session)
    note = await _create(repo, test_user.id, "Hello", "World")

    assert (await repo.get_by_id(note.id)).title == "Hello"
    assert (await repo.get_by_id_and_user(note.id, test_user.id)).content == "World"


async def test_other_users_cannot_address_note(test_session, test_note):
    repo = NoteRepository(test_session)
    stranger = uuid.uuid4()

    assert await repo.get_by_id_and_user(test_note.id, stranger) is None
    assert await repo.update_note(test_note.id, stranger, {"title": "x"}) is None
    assert await repo.delete_note(test_note.id, stranger) is False
    assert await repo.publish_note(test_note.id, stranger, "tok") is None
    assert await repo.unpublish_note(test_note.id, stranger) is None


async def test_update_refreshes_updated_at(test_session, test_user, test_note):
    repo = NoteRepository(test_session)
    before = test_note.updated_at

    updated = await repo.update_note(test_note.id, test_user.id, {"title": "New"})

    assert updated.title == "New"
    assert updated.updated_at >= before


async def test_delete(test_session, test_user, test_note):
    repo = NoteRepository(test_session)
    assert await repo.delete_note(test_note.id, test_user.id) is True
    assert await repo.get_by_id(test_note.id) is None
    assert await repo.delete_note(test_note.id, test_user.id) is False


async def test_list_is_paginated_and_most_recent_first(test_session, test_user):
    repo = NoteRepository(test_session)
    first = await _create(repo, test_user.id, "first")
    await _create(repo, test_user.id, "second")
    await _create(repo, test_user.id, "third")
    # touching the oldest note moves it to the top
    await repo.update_note(first.id, test_user.id, {"content": "edited"})

    page1, total = await repo.list_user_notes(test_user.id, page=1, per_page=2)
    page2, _ = await repo.list_user_notes(test_user.id, page=2, per_page=2)

    assert total == 3
    assert [n.title for n in page1] == ["first", "third"]
    assert [n.title for n in page2] == ["second"]


async def test_list_only_returns_own_notes(test_session, test_user, test_note):
    repo = NoteRepository(test_session)
    notes, total = await repo.list_user_notes(uuid.uuid4())
    assert notes == []
    assert total == 0


async def test_publish_lookup_and_unpublish(test_session, test_user, test_note):
    repo = NoteRepository(test_session)
    token = await repo.generate_share_token()

    published = await repo.publish_note(test_note.id, test_user.id, token)
    assert published.is_public and published.share_token == token
    assert (await repo.get_public_by_share_token(token)).id == test_note.id
    assert await repo.is_share_token_taken(token)

    await repo.unpublish_note(test_note.id, test_user.id)
    assert await repo.get_public_by_share_token(token) is None
    assert not await repo.is_share_token_taken(token)


async def test_token_lookup_requires_public_flag(test_session, test_user, test_note):
    repo = NoteRepository(test_session)
    # token present but the note is private
    await repo.update_note(test_note.id, test_user.id, {"share_token": "leftover"})
    assert await repo.get_public_by_share_token("leftover") is None


async def test_update_shared_note(test_session, test_user, test_note):
    repo = NoteRepository(test_session)
    await repo.publish_note(test_note.id, test_user.id, "tok")

    updated = await repo.update_shared_note("tok", {"title": "Edited", "content": "by a visitor"})
    assert updated.title == "Edited"
    assert await repo.update_shared_note("missing", {"title": "x"}) is None


async def test_generate_share_token_retries_on_collision(test_session, monkeypatch):
    repo = NoteRepository(test_session)
    taken = iter([True, True, False])

    async def fake_taken(token):
        return next(taken)

    monkeypatch.setattr(repo, "is_share_token_taken", fake_taken)
    token = await repo.generate_share_token()
    assert len(token) >= 16


async def test_generate_share_token_gives_up(test_session, monkeypatch):
    repo = NoteRepository(test_session)

    async def always_taken(token):
        return True

    monkeypatch.setattr(repo, "is_share_token_taken", always_taken)
    with pytest.raises(ShareTokenExhaustedError):
        await repo.generate_share_token()

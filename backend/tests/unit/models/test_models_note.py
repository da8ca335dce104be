"""Tests for the Note model."""

import uuid

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from marknote.core.models import Note, User


def test_publish_and_unpublish():
    note = Note(title="t", content="c", owner_id=uuid.uuid4(), allow_public_edit=False)
    note.publish("tok")
    assert note.is_public is True
    assert note.share_token == "tok"

    note.allow_public_edit = True
    note.unpublish()
    assert note.is_public is False
    assert note.share_token is None
    assert note.allow_public_edit is False


def test_repr_truncates_long_titles():
    note = Note(title="x" * 40, content="c", owner_id=uuid.uuid4())
    assert "x" * 30 + "..." in repr(note)


async def test_defaults_after_insert(test_session, test_user):
    note = Note(title="t", content="c", owner_id=test_user.id)
    test_session.add(note)
    await test_session.commit()
    await test_session.refresh(note)

    assert isinstance(note.id, uuid.UUID)
    assert note.is_public is False
    assert note.allow_public_edit is False
    assert note.share_token is None
    assert note.created_at is not None
    assert note.updated_at is not None


async def test_share_token_is_unique(test_session, test_user):
    test_session.add(Note(title="a", content="c", owner_id=test_user.id, is_public=True, share_token="same"))
    test_session.add(Note(title="b", content="c", owner_id=test_user.id, is_public=True, share_token="same"))
    with pytest.raises(IntegrityError):
        await test_session.commit()


async def test_notes_are_deleted_with_owner(test_session, test_user, test_note):
    await test_session.delete(test_user)
    await test_session.commit()

    result = await test_session.execute(select(Note).where(Note.id == test_note.id))
    assert result.scalar_one_or_none() is None



def test_user_can_login_follows_active_flag():
    assert User(email="a@example.com", password_hash="h", is_active=True).can_login()
    assert not User(email="a@example.com", password_hash="h", is_active=False).can_login()

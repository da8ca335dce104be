"""Tests for UserRepository and RefreshTokenRepository against SQLite."""

import uuid
from datetime import datetime, timedelta, timezone

from marknote.core.repositories import RefreshTokenRepository, UserRepository


async def test_create_and_lookup_user(test_session):
    repo = UserRepository(test_session)
    user = await repo.create_user({"email": "jane@example.com", "password_hash": "h"})

    assert (await repo.get_by_id(user.id)).email == "jane@example.com"
    assert (await repo.get_by_email("JANE@example.com")).id == user.id
    assert await repo.is_email_taken("jane@example.com")
    assert not await repo.is_email_taken("other@example.com")
    assert await repo.get_by_id(uuid.uuid4()) is None


async def test_refresh_token_lifecycle(test_session, test_user):
    repo = RefreshTokenRepository(test_session)
    expires = datetime.now(timezone.utc) + timedelta(days=1)
    await repo.create_token({"token": "tok-1", "user_id": test_user.id, "expires_at": expires})
    await repo.create_token({"token": "tok-2", "user_id": test_user.id, "expires_at": expires})

    assert await repo.is_token_valid("tok-1")
    assert await repo.delete_token("tok-1") is True
    assert await repo.delete_token("tok-1") is False
    assert not await repo.is_token_valid("tok-1")

    assert await repo.delete_user_tokens(test_user.id) == 1
    assert await repo.get_by_token("tok-2") is None


async def test_expired_refresh_token_is_invalid(test_session, test_user):
    repo = RefreshTokenRepository(test_session)
    await repo.create_token(
        {
            "token": "old",
            "user_id": test_user.id,
            "expires_at": datetime.now(timezone.utc) - timedelta(minutes=1),
        }
    )
    assert not await repo.is_token_valid("old")

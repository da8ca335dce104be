"""JWT token utilities.

Access tokens carry a ``jti`` claim so a single token can be revoked on
logout. Refresh tokens are opaque random strings stored in the database.
"""

import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import JWTError, jwt

from ..config import get_settings
from ..core.redis_client import get_redis_client

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


def _decode(token: str) -> Optional[Dict[str, Any]]:
    """Signature and expiry checked payload, or None."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        return None


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    claims = dict(data)
    claims.update(
        exp=datetime.now(timezone.utc) + expires_delta,
        type=ACCESS_TOKEN_TYPE,
        jti=str(uuid.uuid4()),
    )
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def create_refresh_token() -> str:
    return secrets.token_urlsafe(32)


async def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Payload of a valid, unrevoked access token."""
    payload = _decode(token)
    if not payload or payload.get("type") != ACCESS_TOKEN_TYPE:
        return None

    jti = payload.get("jti")
    if jti and await get_redis_client().is_token_blacklisted(jti):
        return None
    return payload


async def get_user_id_from_token(token: str) -> Optional[UUID]:
    payload = await decode_access_token(token)
    subject = payload.get("sub") if payload else None
    if not subject:
        return None
    try:
        return UUID(subject)
    except ValueError:
        return None


async def blacklist_token(token: str) -> bool:
    """Revoke ``token`` for what is left of its lifetime."""
    payload = _decode(token)
    if not payload or not payload.get("jti") or not payload.get("exp"):
        return False

    expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    remaining = int((expires_at - datetime.now(timezone.utc)).total_seconds())
    if remaining <= 0:
        return False
    return await get_redis_client().add_to_blacklist(payload["jti"], remaining)

"""Authentication service implementation."""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import (
    blacklist_token,
    create_access_token,
    create_refresh_token,
    hash_password,
    verify_password,
)
from ..repositories.refresh_token_repository import RefreshTokenRepository
from ..repositories.user_repository import UserRepository
from ..schemas.auth import (
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from .interfaces import IAuthService

logger = logging.getLogger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class AuthService(IAuthService):
    """Accounts and the access/refresh token pair."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.token_repo = RefreshTokenRepository(session)
        self.settings = get_settings()

    async def register_user(self, request: RegisterRequest) -> UserResponse:
        if await self.user_repo.is_email_taken(request.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered"
            )

        user = await self.user_repo.create_user({
            "email": request.email,
            "password_hash": hash_password(request.password),
            "is_active": True,
        })
        logger.info(f"Registered user {user.id}")
        return UserResponse.model_validate(user)

    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Check credentials and issue a token pair.

        Unknown email, wrong password and disabled account all answer the
        same 401 so the response does not reveal which accounts exist.
        """
        user = await self.user_repo.get_by_email(request.email)
        if (
            user is None
            or not user.can_login()
            or not verify_password(request.password, user.password_hash)
        ):
            logger.info("Failed login attempt")
            raise _unauthorized("Invalid credentials")

        return await self._issue_tokens(user)

    async def refresh_token(self, request: RefreshTokenRequest) -> TokenResponse:
        """Trade a refresh token for a new pair. The old refresh token is consumed."""
        stored = await self.token_repo.get_by_token(request.refresh_token)
        if stored is None or not stored.is_valid:
            raise _unauthorized("Invalid refresh token")

        user = await self.user_repo.get_by_id(stored.user_id)
        if user is None or not user.can_login():
            raise _unauthorized("User account inactive")

        await self.token_repo.delete_token(request.refresh_token)
        return await self._issue_tokens(user)

    async def get_current_user(self, user_id: UUID) -> UserResponse:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return UserResponse.model_validate(user)

    async def logout_user(self, user_id: UUID, access_token: str) -> bool:
        """Revoke the access token and every refresh token of the user.

        Returns whether any refresh token was dropped.
        """
        if access_token and not await blacklist_token(access_token):
            logger.warning(f"Access token of user {user_id} not revoked, it stays valid until expiry")

        dropped = await self.token_repo.delete_user_tokens(user_id)
        logger.info(f"User {user_id} logged out, {dropped} refresh token(s) dropped")
        return dropped > 0

    async def _issue_tokens(self, user) -> TokenResponse:
        refresh_token = create_refresh_token()
        await self.token_repo.create_token({
            "token": refresh_token,
            "user_id": user.id,
            "expires_at": datetime.now(timezone.utc)
            + timedelta(days=self.settings.refresh_token_expire_days),
        })

        return TokenResponse(
            access_token=create_access_token({"sub": str(user.id)}),
            refresh_token=refresh_token,
            token_type="bearer",
            expires_in=self.settings.access_token_expire_minutes * 60,
            user=UserResponse.model_validate(user),
        )

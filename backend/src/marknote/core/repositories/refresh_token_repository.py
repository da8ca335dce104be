"""Refresh token storage."""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.refresh_token import RefreshToken


class RefreshTokenRepository:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_token(self, token_data: dict) -> RefreshToken:
        token = RefreshToken(**token_data)
        self.session.add(token)
        await self.session.commit()
        await self.session.refresh(token)
        return token

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        return await self.session.scalar(select(RefreshToken).where(RefreshToken.token == token))

    async def _delete_where(self, *criteria) -> int:
        result = await self.session.execute(delete(RefreshToken).where(*criteria))
        await self.session.commit()
        return result.rowcount

    async def delete_token(self, token: str) -> bool:
        """Consume one token. False when it did not exist."""
        return await self._delete_where(RefreshToken.token == token) > 0

    async def delete_user_tokens(self, user_id: UUID) -> int:
        """Drop every token of a user, returning how many there were."""
        return await self._delete_where(RefreshToken.user_id == user_id)

    async def is_token_valid(self, token: str) -> bool:
        stored = await self.get_by_token(token)
        return stored is not None and stored.is_valid

"""Anonymous access to published notes."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..editor import word_count
from ..redis_client import get_redis_client, rate_limit_key
from ..repositories.note_repository import NoteRepository
from ..schemas.sharing import SharedNoteResponse, SharedNoteUpdate
from .interfaces import IPublicNoteService

logger = logging.getLogger(__name__)

NOT_SHARED = "Note not found or not shared"


class PublicNoteService(IPublicNoteService):
    """Reads and edits notes through their share token."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.settings = get_settings()

    async def get_shared_note(self, share_token: str) -> SharedNoteResponse:
        note = await self.note_repo.get_public_by_share_token(share_token)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_SHARED)
        return self._to_response(note)

    async def update_shared_note(
        self, share_token: str, request: SharedNoteUpdate, client_id: str
    ) -> SharedNoteResponse:
        """Save an anonymous edit.

        Only allowed while the owner keeps public editing on. Writes are
        rate limited per link and client.
        """
        note = await self.note_repo.get_public_by_share_token(share_token)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_SHARED)
        if not note.allow_public_edit:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Public editing is disabled"
            )

        await self._check_rate_limit(share_token, client_id)

        note = await self.note_repo.update_shared_note(
            share_token, {"title": request.title, "content": request.content}
        )
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_SHARED)

        logger.info(f"Public edit on note {note.id}", extra={"client_id": client_id})
        return self._to_response(note)

    async def _check_rate_limit(self, share_token: str, client_id: str) -> None:
        # counter is 0 when Redis is unavailable, which lets the edit through
        count = await get_redis_client().increment_rate_limit(
            rate_limit_key(share_token, client_id),
            expire=self.settings.rate_limit_window_seconds,
        )
        if count > self.settings.public_edit_rate_limit:
            logger.warning(f"Public edit rate limit hit for client {client_id}")
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail="Too many edits, slow down"
            )

    def _to_response(self, note) -> SharedNoteResponse:
        return SharedNoteResponse(
            id=note.id,
            title=note.title,
            content=note.content,
            allow_public_edit=note.allow_public_edit,
            word_count=word_count(note.content),
            updated_at=note.updated_at,
        )

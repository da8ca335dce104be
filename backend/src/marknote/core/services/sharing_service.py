"""Sharing service implementation."""

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..repositories.note_repository import NoteRepository, ShareTokenExhaustedError
from ..schemas.sharing import ShareStatusResponse
from .interfaces import ISharingService

logger = logging.getLogger(__name__)


def build_share_url(share_token: str) -> str:
    """Public link for a share token."""
    base = get_settings().public_base_url.rstrip("/")
    return f"{base}/share/{share_token}"


class SharingService(ISharingService):
    """Publishes owned notes through share links."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def get_share_status(self, note_id: UUID, user_id: UUID) -> ShareStatusResponse:
        note = await self._get_owned_note(note_id, user_id)
        return self._to_status(note)

    async def publish_note(self, note_id: UUID, user_id: UUID) -> ShareStatusResponse:
        """Create a share link. Publishing an already public note keeps its link."""
        note = await self._get_owned_note(note_id, user_id)
        if note.is_public and note.share_token:
            return self._to_status(note)

        try:
            share_token = await self.note_repo.generate_share_token()
        except ShareTokenExhaustedError as e:
            logger.error(f"Share token generation failed for note {note_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Could not create a share link, try again",
            )

        note = await self.note_repo.publish_note(note_id, user_id, share_token)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")

        logger.info(f"Published note {note_id}")
        return self._to_status(note)

    async def set_public_edit(
        self, note_id: UUID, user_id: UUID, allow_public_edit: bool
    ) -> ShareStatusResponse:
        note = await self._get_owned_note(note_id, user_id)
        if not note.is_public:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Note is not shared")

        note = await self.note_repo.update_note(
            note_id, user_id, {"allow_public_edit": allow_public_edit}
        )
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
        return self._to_status(note)

    async def toggle_public_edit(self, note_id: UUID, user_id: UUID) -> ShareStatusResponse:
        note = await self._get_owned_note(note_id, user_id)
        return await self.set_public_edit(note_id, user_id, not note.allow_public_edit)

    async def stop_sharing(self, note_id: UUID, user_id: UUID) -> ShareStatusResponse:
        """Revoke the share link. The old token stops resolving immediately."""
        note = await self.note_repo.unpublish_note(note_id, user_id)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")

        logger.info(f"Stopped sharing note {note_id}")
        return self._to_status(note)

    async def _get_owned_note(self, note_id: UUID, user_id: UUID):
        note = await self.note_repo.get_by_id_and_user(note_id, user_id)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
        return note

    def _to_status(self, note) -> ShareStatusResponse:
        return ShareStatusResponse(
            note_id=note.id,
            is_public=note.is_public,
            share_token=note.share_token,
            share_url=build_share_url(note.share_token) if note.share_token else None,
            allow_public_edit=note.allow_public_edit,
        )

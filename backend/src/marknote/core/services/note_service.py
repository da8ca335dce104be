"""Note service implementation."""

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..editor import word_count
from ..repositories.note_repository import NoteRepository
from ..schemas.notes import NoteCreate, NoteListItem, NoteListResponse, NoteResponse, NoteUpdate
from .interfaces import INoteService
from .sharing_service import build_share_url

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 200


class NoteService(INoteService):
    """Note service implementation.

    Every operation is scoped to the owner. Notes belonging to someone
    else answer 404, same as missing ones, so ids can't be probed.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.settings = get_settings()

    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        note = await self.note_repo.create_note(
            {
                "title": request.title,
                "content": request.content,
                "owner_id": user_id,
            }
        )
        logger.info(f"Created note {note.id} for user {user_id}")
        return self._note_to_response(note)

    async def get_note(self, note_id: UUID, user_id: UUID) -> NoteResponse:
        """Get note by ID."""
        note = await self.note_repo.get_by_id_and_user(note_id, user_id)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
        return self._note_to_response(note)

    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update existing note."""
        update_data = request.model_dump(exclude_none=True)
        if not update_data:
            return await self.get_note(note_id, user_id)

        note = await self.note_repo.update_note(note_id, user_id, update_data)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
        return self._note_to_response(note)

    async def delete_note(self, note_id: UUID, user_id: UUID) -> bool:
        """Delete note."""
        deleted = await self.note_repo.delete_note(note_id, user_id)
        if not deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
        return True

    async def list_user_notes(
        self,
        user_id: UUID,
        page: int = 1,
        per_page: int = 20,
    ) -> NoteListResponse:
        """List user notes with pagination, most recently updated first."""
        if page < 1:
            page = 1
        if per_page < 1 or per_page > self.settings.max_page_size:
            per_page = self.settings.default_page_size

        notes, total_count = await self.note_repo.list_user_notes(user_id, page, per_page)

        return NoteListResponse.create(
            items=[self._note_to_list_item(note) for note in notes],
            total=total_count,
            page=page,
            per_page=per_page,
        )

    def _note_to_response(self, note) -> NoteResponse:
        """Convert note model to response."""
        return NoteResponse(
            id=note.id,
            title=note.title,
            content=note.content,
            owner_id=note.owner_id,
            is_public=note.is_public,
            share_token=note.share_token,
            share_url=build_share_url(note.share_token) if note.share_token else None,
            allow_public_edit=note.allow_public_edit,
            word_count=word_count(note.content),
            created_at=note.created_at,
            updated_at=note.updated_at,
        )

    def _note_to_list_item(self, note) -> NoteListItem:
        content = note.content or ""
        content_preview = content[:PREVIEW_LENGTH]
        if len(content) > PREVIEW_LENGTH:
            content_preview += "..."

        return NoteListItem(
            id=note.id,
            title=note.title,
            content_preview=content_preview,
            word_count=word_count(content),
            is_public=note.is_public,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )

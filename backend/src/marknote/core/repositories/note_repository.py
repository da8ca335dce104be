"""Note repository for database operations.

Notes are reachable two ways: by id, only for the owner, and by share
token, for anyone, while the note is public.
"""

import logging
import secrets
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..models.note import Note

logger = logging.getLogger(__name__)

# attempts before giving up on finding an unused share token
MAX_TOKEN_ATTEMPTS = 5


class ShareTokenExhaustedError(RuntimeError):
    """Raised when no unused share token could be generated."""


def _owned(note_id: UUID, user_id: UUID) -> Select:
    return select(Note).where(Note.id == note_id, Note.owner_id == user_id)


def _shared(share_token: str) -> Select:
    return select(Note).where(Note.share_token == share_token, Note.is_public.is_(True))


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _save(self, note: Note) -> Note:
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def create_note(self, note_data: dict) -> Note:
        note = Note(**note_data)
        self.session.add(note)
        return await self._save(note)

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Unscoped lookup. Not for request handlers, which must go through the owner."""
        return await self.session.get(Note, note_id)

    async def get_by_id_and_user(self, note_id: UUID, user_id: UUID) -> Optional[Note]:
        return await self.session.scalar(_owned(note_id, user_id))

    async def get_public_by_share_token(self, share_token: str) -> Optional[Note]:
        return await self.session.scalar(_shared(share_token))

    async def update_note(self, note_id: UUID, user_id: UUID, update_data: dict) -> Optional[Note]:
        note = await self.get_by_id_and_user(note_id, user_id)
        if note is None:
            return None
        return await self._apply(note, update_data)

    async def update_shared_note(self, share_token: str, update_data: dict) -> Optional[Note]:
        """Write through a share link. Returns None once the link is revoked."""
        note = await self.get_public_by_share_token(share_token)
        if note is None:
            return None
        return await self._apply(note, update_data)

    async def delete_note(self, note_id: UUID, user_id: UUID) -> bool:
        note = await self.get_by_id_and_user(note_id, user_id)
        if note is None:
            logger.warning(f"Delete of note {note_id} refused for user {user_id}")
            return False

        await self.session.delete(note)
        await self.session.commit()
        logger.info(f"Deleted note {note_id}")
        return True

    async def list_user_notes(
        self, user_id: UUID, page: int = 1, per_page: int = 20
    ) -> Tuple[List[Note], int]:
        """One page of the user's notes, most recently updated first, plus the total."""
        total = await self.session.scalar(
            select(func.count()).select_from(Note).where(Note.owner_id == user_id)
        )
        rows = await self.session.scalars(
            select(Note)
            .where(Note.owner_id == user_id)
            .order_by(Note.updated_at.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        return list(rows), total or 0

    async def is_share_token_taken(self, share_token: str) -> bool:
        found = await self.session.scalar(
            select(Note.id).where(Note.share_token == share_token)
        )
        return found is not None

    async def generate_share_token(self) -> str:
        """Generate a URL safe token that no note uses, public or not."""
        nbytes = get_settings().share_token_bytes
        for attempt in range(1, MAX_TOKEN_ATTEMPTS + 1):
            token = secrets.token_urlsafe(nbytes)
            if not await self.is_share_token_taken(token):
                return token
            logger.warning(f"Share token collision on attempt {attempt}")
        raise ShareTokenExhaustedError(
            f"No unused share token after {MAX_TOKEN_ATTEMPTS} attempts"
        )

    async def publish_note(self, note_id: UUID, user_id: UUID, share_token: str) -> Optional[Note]:
        note = await self.get_by_id_and_user(note_id, user_id)
        if note is None:
            return None
        note.publish(share_token)
        return await self._save(note)

    async def unpublish_note(self, note_id: UUID, user_id: UUID) -> Optional[Note]:
        note = await self.get_by_id_and_user(note_id, user_id)
        if note is None:
            return None
        note.unpublish()
        return await self._save(note)

    async def _apply(self, note: Note, update_data: dict) -> Note:
        for field, value in update_data.items():
            setattr(note, field, value)
        return await self._save(note)

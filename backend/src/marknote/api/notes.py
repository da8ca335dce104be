"""Notes API endpoints. Every route is scoped to the signed-in owner."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.notes import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/notes", tags=["notes"])


def get_note_service(session: AsyncSession = Depends(get_db_session)) -> NoteService:
    return NoteService(session)


@router.post("/", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    user_id: UUID = Depends(get_current_user_id),
    service: NoteService = Depends(get_note_service),
):
    """Create a note. Title and content are trimmed."""
    return await service.create_note(user_id, request)


@router.get("/", response_model=NoteListResponse)
async def list_notes(
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    user_id: UUID = Depends(get_current_user_id),
    service: NoteService = Depends(get_note_service),
):
    """Page through the user's notes, most recently updated first."""
    return await service.list_user_notes(user_id=user_id, page=page, per_page=per_page)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: NoteService = Depends(get_note_service),
):
    return await service.get_note(note_id, user_id)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: UUID,
    request: NoteUpdate,
    user_id: UUID = Depends(get_current_user_id),
    service: NoteService = Depends(get_note_service),
):
    """Change title and/or content. Values are stored as sent."""
    return await service.update_note(note_id, user_id, request)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: NoteService = Depends(get_note_service),
):
    await service.delete_note(note_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

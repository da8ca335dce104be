"""Sharing API endpoints (owner side)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.sharing import PublicEditUpdate, ShareStatusResponse
from ..core.services import SharingService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/notes/{note_id}/share", tags=["sharing"])


def get_sharing_service(session: AsyncSession = Depends(get_db_session)) -> SharingService:
    return SharingService(session)


@router.get("", response_model=ShareStatusResponse)
async def get_share_status(
    note_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
):
    return await service.get_share_status(note_id, user_id)


@router.post("", response_model=ShareStatusResponse)
async def publish_note(
    note_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
):
    """Publish a note through a share link. A public note keeps its link."""
    return await service.publish_note(note_id, user_id)


@router.patch("", response_model=ShareStatusResponse)
async def set_public_edit(
    note_id: UUID,
    request: PublicEditUpdate,
    user_id: UUID = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
):
    """Allow or forbid edits through the share link."""
    return await service.set_public_edit(note_id, user_id, request.allow_public_edit)


@router.post("/toggle-edit", response_model=ShareStatusResponse)
async def toggle_public_edit(
    note_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
):
    return await service.toggle_public_edit(note_id, user_id)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def stop_sharing(
    note_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
):
    """Revoke the share link. Publishing again creates a new one."""
    await service.stop_sharing(note_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

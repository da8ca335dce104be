"""Public (anonymous) access to shared notes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.sharing import SharedNoteResponse, SharedNoteUpdate
from ..core.services import PublicNoteService
from ..database import get_db_session

router = APIRouter(prefix="/share", tags=["public"])


def _client_id(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.get("/{share_token}", response_model=SharedNoteResponse)
async def get_shared_note(share_token: str, session: AsyncSession = Depends(get_db_session)):
    """Read a published note."""
    public_service = PublicNoteService(session)
    return await public_service.get_shared_note(share_token)


@router.put("/{share_token}", response_model=SharedNoteResponse)
async def update_shared_note(
    share_token: str,
    request: SharedNoteUpdate,
    http_request: Request,
    session: AsyncSession = Depends(get_db_session),
):
    """Edit a published note, when its owner allows public edits."""
    public_service = PublicNoteService(session)
    return await public_service.update_shared_note(
        share_token, request, _client_id(http_request)
    )

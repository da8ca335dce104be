"""
Service interfaces for MarkNote application.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict
from uuid import UUID

from ..schemas.auth import (
    LoginRequest, TokenResponse, RegisterRequest, UserResponse, RefreshTokenRequest
)
from ..schemas.notes import NoteCreate, NoteUpdate, NoteResponse, NoteListResponse
from ..schemas.sharing import (
    ShareStatusResponse, SharedNoteResponse, SharedNoteUpdate
)
from ..schemas.common import HealthCheckResponse


class IAuthService(ABC):
    """Auth service for user management."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user."""
        pass

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return JWT tokens."""
        pass

    @abstractmethod
    async def refresh_token(self, request: RefreshTokenRequest) -> TokenResponse:
        """Refresh JWT token."""
        pass

    @abstractmethod
    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        pass

    @abstractmethod
    async def logout_user(self, user_id: UUID, access_token: str) -> bool:
        """Logout user."""
        pass


class INoteService(ABC):
    """Note CRUD, scoped to the note owner."""

    @abstractmethod
    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        pass

    @abstractmethod
    async def get_note(self, note_id: UUID, user_id: UUID) -> NoteResponse:
        """Get owned note by ID."""
        pass

    @abstractmethod
    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update owned note."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: UUID, user_id: UUID) -> bool:
        """Delete owned note."""
        pass

    @abstractmethod
    async def list_user_notes(
        self, user_id: UUID, page: int = 1, per_page: int = 20
    ) -> NoteListResponse:
        """List user notes with pagination."""
        pass


class ISharingService(ABC):
    """Publishing notes through share links."""

    @abstractmethod
    async def get_share_status(self, note_id: UUID, user_id: UUID) -> ShareStatusResponse:
        """Current share state of an owned note."""
        pass

    @abstractmethod
    async def publish_note(self, note_id: UUID, user_id: UUID) -> ShareStatusResponse:
        """Create a share link for an owned note."""
        pass

    @abstractmethod
    async def set_public_edit(
        self, note_id: UUID, user_id: UUID, allow_public_edit: bool
    ) -> ShareStatusResponse:
        """Allow or forbid edits through the share link."""
        pass

    @abstractmethod
    async def toggle_public_edit(self, note_id: UUID, user_id: UUID) -> ShareStatusResponse:
        """Flip the public edit permission."""
        pass

    @abstractmethod
    async def stop_sharing(self, note_id: UUID, user_id: UUID) -> ShareStatusResponse:
        """Revoke the share link."""
        pass


class IPublicNoteService(ABC):
    """Anonymous access through share links."""

    @abstractmethod
    async def get_shared_note(self, share_token: str) -> SharedNoteResponse:
        """Read a published note."""
        pass

    @abstractmethod
    async def update_shared_note(
        self, share_token: str, request: SharedNoteUpdate, client_id: str
    ) -> SharedNoteResponse:
        """Edit a published note when public edits are allowed."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass

    @abstractmethod
    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connection."""
        pass

"""
Service layer interfaces and implementations.
"""

from .interfaces import (
    IAuthService,
    IHealthService,
    INoteService,
    IPublicNoteService,
    ISharingService,
)

from .auth_service import AuthService
from .health_service import HealthService
from .note_service import NoteService
from .public_note_service import PublicNoteService
from .sharing_service import SharingService, build_share_url

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "ISharingService",
    "IPublicNoteService",
    "IHealthService",

    # Implementations
    "AuthService",
    "NoteService",
    "SharingService",
    "PublicNoteService",
    "HealthService",
    "build_share_url",
]

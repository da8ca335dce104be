"""Repository layer for data access."""

from .user_repository import UserRepository
from .note_repository import NoteRepository
from .refresh_token_repository import RefreshTokenRepository

__all__ = [
    "UserRepository",
    "NoteRepository",
    "RefreshTokenRepository"
]

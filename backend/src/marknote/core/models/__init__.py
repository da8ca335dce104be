"""
Database models for MarkNote.

The note is the only domain entity. Users and refresh tokens back the
authentication layer.
"""

from .base import BaseModel
from .note import Note
from .refresh_token import RefreshToken
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
    "RefreshToken",
]

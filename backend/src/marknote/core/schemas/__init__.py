"""
Pydantic schemas for validating and documenting API requests and responses.

This package exposes the Pydantic models used across the application to
define input/output contracts for authentication, notes, public sharing,
the editor helpers and common responses (pagination and error formats).
"""

from .auth import LoginRequest, RefreshTokenRequest, RegisterRequest, TokenResponse, UserResponse
from .common import HealthCheckResponse, MessageResponse, PaginationResponse
from .editor import (
    EditResult,
    HtmlConvertRequest,
    HtmlConvertResponse,
    PasteRequest,
    PreviewRequest,
    PreviewResponse,
    ShortcutRequest,
    ShortcutResponse,
    WordCountResponse,
)
from .notes import NoteCreate, NoteListItem, NoteListResponse, NoteResponse, NoteUpdate
from .sharing import PublicEditUpdate, SharedNoteResponse, SharedNoteUpdate, ShareStatusResponse

__all__ = [
    # Auth schemas
    "LoginRequest",
    "RegisterRequest",
    "RefreshTokenRequest",
    "TokenResponse",
    "UserResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "NoteListItem",
    "NoteListResponse",
    # Sharing schemas
    "ShareStatusResponse",
    "PublicEditUpdate",
    "SharedNoteResponse",
    "SharedNoteUpdate",
    # Editor schemas
    "EditResult",
    "HtmlConvertRequest",
    "HtmlConvertResponse",
    "PasteRequest",
    "PreviewRequest",
    "PreviewResponse",
    "ShortcutRequest",
    "ShortcutResponse",
    "WordCountResponse",
    # Common schemas
    "PaginationResponse",
    "MessageResponse",
    "HealthCheckResponse",
]

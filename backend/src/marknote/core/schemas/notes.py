"""
Note management schemas.

These schemas define the API contracts for note CRUD operations.
Titles and contents must contain something other than whitespace.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PaginationResponse


def _require_text(v: Optional[str], field: str) -> Optional[str]:
    if v is not None and len(v.strip()) == 0:
        raise ValueError(f"{field} cannot be empty")
    return v


class NoteCreate(BaseModel):
    """Note creation request schema. Both fields are stored trimmed."""

    title: str = Field(min_length=1, max_length=200, description="Note title")
    content: str = Field(min_length=1, description="Note content (Markdown)")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _require_text(v, "Title").strip()

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        return _require_text(v, "Content").strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "groceries",
                "content": "- milk\n- eggs\n- **coffee**",
            }
        }
    )


class NoteUpdate(BaseModel):
    """Note update request schema. Values are stored as sent."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200, description="Note title")
    content: Optional[str] = Field(default=None, min_length=1, description="Note content")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _require_text(v, "Title")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        return _require_text(v, "Content")


class NoteResponse(BaseModel):
    """Full note as seen by its owner."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    owner_id: uuid.UUID = Field(description="Note owner ID")

    # Sharing state
    is_public: bool = Field(description="Whether the note is published")
    share_token: Optional[str] = Field(default=None, description="Share token when published")
    share_url: Optional[str] = Field(default=None, description="Public link when published")
    allow_public_edit: bool = Field(description="Whether link holders may edit")

    word_count: int = Field(description="Number of words in the content")

    # Timestamps
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class NoteListItem(BaseModel):
    """Simplified note schema for list views."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content_preview: str = Field(description="Content preview (first 200 chars)")
    word_count: int = Field(description="Number of words in the content")
    is_public: bool = Field(description="Whether the note is published")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class NoteListResponse(PaginationResponse[NoteListItem]):
    """Paginated note list response."""

"""
Public sharing schemas.

A note is shared by publishing it under a share token. Anyone holding
the link can read it, and edit it when the owner allows public edits.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShareStatusResponse(BaseModel):
    """Share state of an owned note."""

    note_id: uuid.UUID = Field(description="Note ID")
    is_public: bool = Field(description="Whether the note is published")
    share_token: Optional[str] = Field(default=None, description="Share token when published")
    share_url: Optional[str] = Field(default=None, description="Public link when published")
    allow_public_edit: bool = Field(description="Whether link holders may edit")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "note_id": "123e4567-e89b-12d3-a456-426614174000",
                "is_public": True,
                "share_token": "3q2-7wEjK0mZcN1fR8aT1w",
                "share_url": "http://localhost:3000/share/3q2-7wEjK0mZcN1fR8aT1w",
                "allow_public_edit": False,
            }
        }
    )


class PublicEditUpdate(BaseModel):
    """Switch public editing on or off."""

    allow_public_edit: bool = Field(description="Whether link holders may edit")


class SharedNoteResponse(BaseModel):
    """Note as seen through its share link."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    allow_public_edit: bool = Field(description="Whether link holders may edit")
    word_count: int = Field(description="Number of words in the content")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class SharedNoteUpdate(BaseModel):
    """Edit made through a share link. Both fields are required."""

    title: str = Field(min_length=1, max_length=200, description="Note title")
    content: str = Field(min_length=1, description="Note content")

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v, info):
        if len(v.strip()) == 0:
            raise ValueError(f"{info.field_name.capitalize()} cannot be empty")
        return v

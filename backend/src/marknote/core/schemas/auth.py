"""
Authentication and authorization schemas.

These schemas define the API contracts for sign up, sign in and JWT
token management.
"""

import re
import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_email(v: str) -> str:
    v = v.strip().lower()
    if not EMAIL_PATTERN.match(v):
        raise ValueError("Invalid email address")
    return v


class LoginRequest(BaseModel):
    """Sign-in request schema."""

    email: str = Field(max_length=255, description="Account email")
    password: str = Field(min_length=1, max_length=128, description="User password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _normalize_email(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane@example.com",
                "password": "securepassword123",
            }
        }
    )


class RegisterRequest(BaseModel):
    """Sign-up request schema."""

    email: str = Field(max_length=255, description="Account email")
    password: str = Field(min_length=6, max_length=128, description="User password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        """Validate and lowercase the email."""
        return _normalize_email(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "new.user@example.com",
                "password": "securepassword123",
            }
        }
    )


class UserResponse(BaseModel):
    """User information response schema."""

    id: uuid.UUID = Field(description="User unique identifier")
    email: str = Field(description="Account email")
    is_active: bool = Field(description="Whether user account is active")
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """JWT token response schema."""

    access_token: str = Field(description="JWT access token")
    refresh_token: str = Field(description="Opaque refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Token expiration time in seconds")
    user: UserResponse = Field(description="User information")


class RefreshTokenRequest(BaseModel):
    """Refresh token request schema."""

    refresh_token: str = Field(min_length=1, description="Refresh token issued at login")

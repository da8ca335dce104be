"""
User model for authentication.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .note import Note
    from .refresh_token import RefreshToken


class User(BaseModel):
    """User account model with email/password auth."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relations
    notes: Mapped[List["Note"]] = relationship(
        "Note",
        back_populates="owner",
        cascade="all, delete-orphan",
        lazy="noload",
    )

    refresh_tokens: Mapped[List["RefreshToken"]] = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="noload",
    )

    __table_args__ = (
        CheckConstraint("length(email) <= 255", name="ck_users_email_len"),
        Index("idx_users_email", "email"),
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}')>"

    def can_login(self) -> bool:
        """Check if user can login."""
        return self.is_active

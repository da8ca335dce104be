# Note model for user content
import uuid
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .user import User


class Note(BaseModel):
    """Markdown note, optionally published through a share token."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # public sharing
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    share_token: Mapped[Optional[str]] = mapped_column(String(64), unique=True, nullable=True)
    allow_public_edit: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # owner reference
    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="notes")

    __table_args__ = (
        Index("idx_notes_owner_id", "owner_id"),
        Index("idx_notes_owner_updated", "owner_id", "updated_at"),
        Index("idx_notes_share_token_public", "share_token", "is_public"),
        # SQLite doesn't enforce String lengths
        CheckConstraint("length(title) <= 200", name="ck_notes_title_len"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

    def publish(self, token: str) -> None:
        """Make the note reachable through ``token``."""
        self.is_public = True
        self.share_token = token

    def unpublish(self) -> None:
        """Revoke the share link. Public editing is switched off with it."""
        self.is_public = False
        self.share_token = None
        self.allow_public_edit = False

"""
Editor schemas.

Request/response contracts for the stateless text helpers behind the
note editor: paste conversion, formatting shortcuts and preview.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

ShortcutKey = Literal["b", "i", "k", "`", "1", "2", "3", "4", "5", "6", "Tab", "Enter"]


class TextSelection(BaseModel):
    """Editor buffer plus the current selection."""

    content: str = Field(default="", description="Current editor content")
    selection_start: int = Field(default=0, ge=0, description="Selection start offset")
    selection_end: int = Field(default=0, ge=0, description="Selection end offset")

    @model_validator(mode="after")
    def clamp_selection(self):
        length = len(self.content)
        start = min(self.selection_start, length)
        end = min(max(self.selection_end, start), length)
        self.selection_start = start
        self.selection_end = end
        return self


class EditResult(BaseModel):
    """Editor buffer after an edit, with the new selection."""

    content: str
    selection_start: int
    selection_end: int
    word_count: int


class HtmlConvertRequest(BaseModel):
    html: str = Field(description="HTML fragment, e.g. clipboard text/html")


class HtmlConvertResponse(BaseModel):
    markdown: str


class PasteRequest(TextSelection):
    """Clipboard paste. HTML wins over plain text when present."""

    text: str = Field(default="", description="Clipboard text/plain")
    html: Optional[str] = Field(default=None, description="Clipboard text/html")


class ShortcutRequest(TextSelection):
    key: ShortcutKey = Field(description="Key pressed (with Ctrl/Cmd unless Tab or Enter)")
    modifier: bool = Field(default=True, description="Whether Ctrl/Cmd was held")


class ShortcutResponse(EditResult):
    handled: bool = Field(description="False when the key has no editor binding")


class PreviewRequest(BaseModel):
    content: str = Field(default="", description="Markdown to render")


class PreviewResponse(BaseModel):
    html: str
    word_count: int


class WordCountResponse(BaseModel):
    word_count: int

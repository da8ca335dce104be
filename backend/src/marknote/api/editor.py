"""Editor helper endpoints. Stateless, no authentication."""

from fastapi import APIRouter

from ..core.editor import apply_shortcut, html_to_markdown, paste, render_preview, word_count
from ..core.schemas.editor import (
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

router = APIRouter(prefix="/editor", tags=["editor"])


@router.post("/convert-html", response_model=HtmlConvertResponse)
async def convert_html(request: HtmlConvertRequest):
    """Convert an HTML fragment to Markdown."""
    return HtmlConvertResponse(markdown=html_to_markdown(request.html))


@router.post("/paste", response_model=EditResult)
async def paste_clipboard(request: PasteRequest):
    """Insert clipboard content over the current selection."""
    edit = paste(
        request.content,
        request.selection_start,
        request.selection_end,
        request.text,
        request.html,
    )
    return EditResult(
        content=edit.content,
        selection_start=edit.selection_start,
        selection_end=edit.selection_end,
        word_count=word_count(edit.content),
    )


@router.post("/shortcut", response_model=ShortcutResponse)
async def keyboard_shortcut(request: ShortcutRequest):
    """Apply a keyboard shortcut. Unbound keys leave the buffer untouched."""
    edit = apply_shortcut(
        request.key,
        request.content,
        request.selection_start,
        request.selection_end,
        modifier=request.modifier,
    )
    if edit is None:
        return ShortcutResponse(
            content=request.content,
            selection_start=request.selection_start,
            selection_end=request.selection_end,
            word_count=word_count(request.content),
            handled=False,
        )

    return ShortcutResponse(
        content=edit.content,
        selection_start=edit.selection_start,
        selection_end=edit.selection_end,
        word_count=word_count(edit.content),
        handled=True,
    )


@router.post("/preview", response_model=PreviewResponse)
async def preview(request: PreviewRequest):
    """Render Markdown to sanitized HTML."""
    return PreviewResponse(
        html=render_preview(request.content), word_count=word_count(request.content)
    )


@router.post("/word-count", response_model=WordCountResponse)
async def count_words(request: PreviewRequest):
    """Word count of a Markdown buffer."""
    return WordCountResponse(word_count=word_count(request.content))

"""Pure text helpers for the Markdown editor."""

from .formatting import (
    TextEdit,
    apply_shortcut,
    continue_list,
    insert_at_line_start,
    insert_text,
    paste,
    word_count,
)
from .html_convert import html_to_markdown
from .preview import render_preview, sanitize_rendered_html

__all__ = [
    "TextEdit",
    "apply_shortcut",
    "continue_list",
    "html_to_markdown",
    "insert_at_line_start",
    "insert_text",
    "paste",
    "render_preview",
    "sanitize_rendered_html",
    "word_count",
]

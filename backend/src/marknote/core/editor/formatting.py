"""Text edits behind the editor toolbar and keyboard shortcuts."""

import re
from dataclasses import dataclass
from typing import Optional

from .html_convert import html_to_markdown

_UNORDERED_ITEM = re.compile(r"^(\s*)([-*+])\s")
_ORDERED_ITEM = re.compile(r"^(\s*)(\d+)\.\s")

INDENT = "  "

# key -> (before, after, placeholder), used with Ctrl/Cmd held
WRAP_SHORTCUTS = {
    "b": ("**", "**", "bold text"),
    "i": ("*", "*", "italic text"),
    "k": ("[", "](url)", "link text"),
    "`": ("`", "`", "code"),
}
HEADING_KEYS = {"1", "2", "3", "4", "5", "6"}


@dataclass
class TextEdit:
    """Editor buffer after an edit. The selection may be collapsed."""

    content: str
    selection_start: int
    selection_end: int


def word_count(value: str) -> int:
    """Whitespace separated words, 0 for blank text."""
    stripped = value.strip()
    return len(stripped.split()) if stripped else 0


def insert_text(
    value: str, start: int, end: int, before: str, after: str = "", placeholder: str = ""
) -> TextEdit:
    """Wrap the selection (or ``placeholder`` when nothing is selected).

    The wrapped text stays selected so typing replaces the placeholder.
    """
    selected = value[start:end]
    inner = selected or placeholder
    content = value[:start] + before + inner + after + value[end:]
    sel_start = start + len(before)
    return TextEdit(content, sel_start, sel_start + len(inner))


def insert_at_line_start(value: str, caret: int, prefix: str) -> TextEdit:
    """Prefix the line holding the caret, e.g. with ``"## "``."""
    line_start = value.rfind("\n", 0, caret) + 1
    content = value[:line_start] + prefix + value[line_start:]
    new_caret = caret + len(prefix)
    return TextEdit(content, new_caret, new_caret)


def continue_list(value: str, start: int, end: Optional[int] = None) -> Optional[TextEdit]:
    """Start the next list item when Enter is pressed inside a list.

    Returns None when the current line is not a list item, in which case
    Enter behaves normally.
    """
    end = start if end is None else end
    current_line = value[:start].split("\n")[-1]

    match = _UNORDERED_ITEM.match(current_line)
    if match:
        indent, bullet = match.groups()
        return insert_text(value, start, end, f"\n{indent}{bullet} ")

    match = _ORDERED_ITEM.match(current_line)
    if match:
        indent, number = match.groups()
        return insert_text(value, start, end, f"\n{indent}{int(number) + 1}. ")

    return None


def apply_shortcut(
    key: str, value: str, start: int, end: int, modifier: bool = True
) -> Optional[TextEdit]:
    """Apply the edit bound to ``key``. None means the key is not bound.

    Ctrl/Cmd+Enter (preview toggle) is left to the caller.
    """
    if not modifier:
        if key == "Tab":
            return insert_text(value, start, end, INDENT)
        if key == "Enter":
            return continue_list(value, start, end)
        return None

    if key in WRAP_SHORTCUTS:
        before, after, placeholder = WRAP_SHORTCUTS[key]
        return insert_text(value, start, end, before, after, placeholder)
    if key in HEADING_KEYS:
        return insert_at_line_start(value, start, "#" * int(key) + " ")
    return None


def paste(value: str, start: int, end: int, text: str, html: Optional[str] = None) -> TextEdit:
    """Replace the selection with clipboard content, converting HTML to Markdown."""
    inserted = html_to_markdown(html) if html and html.strip() else text
    content = value[:start] + inserted + value[end:]
    caret = start + len(inserted)
    return TextEdit(content, caret, caret)

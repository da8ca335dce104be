"""Markdown preview rendering."""

import bleach
import markdown as md

MD_EXTENSIONS = ["fenced_code", "tables"]

EMPTY_PREVIEW = "*Preview will appear here...*"

ALLOWED_TAGS = [
    "a", "p", "br", "hr",
    "strong", "em", "code", "pre", "blockquote",
    "ul", "ol", "li",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "table", "thead", "tbody", "tr", "th", "td",
]

ALLOWED_ATTRS = {
    "a": ["href", "title"],
    "th": ["align"],
    "td": ["align"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto"]


def sanitize_rendered_html(rendered_html: str) -> str:
    """Strip anything that could run script from rendered note HTML."""
    return bleach.clean(
        rendered_html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRS,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )


def render_preview(content: str) -> str:
    """Markdown -> sanitized HTML. Blank content shows a placeholder."""
    source = content if content.strip() else EMPTY_PREVIEW
    rendered = md.markdown(source, extensions=MD_EXTENSIONS)
    return sanitize_rendered_html(rendered)

"""
HTML to Markdown conversion for pasted content.

Rich text copied from a browser arrives as a text/html fragment. This
turns the common tags into their Markdown equivalent and drops the
rest. It is a regex pass, not a parser: nested structures beyond one
level (lists in lists, quotes in quotes) come out flattened.
"""

import re


def _open(tag: str) -> str:
    # matches <tag> and <tag attr=...> but not <tagfoo>
    return rf"<{tag}(?:\s[^>]*)?>"


_HEADING = re.compile(r"<h([1-6])(?:\s[^>]*)?>(.*?)</h[1-6]>", re.I)
_PARAGRAPH = re.compile(_open("p") + r"(.*?)</p>", re.I)
_BREAK = re.compile(r"<br(?:\s[^>]*)?/?>", re.I)
_BOLD = re.compile(r"<(strong|b)(?:\s[^>]*)?>(.*?)</(?:strong|b)>", re.I)
_ITALIC = re.compile(r"<(em|i)(?:\s[^>]*)?>(.*?)</(?:em|i)>", re.I)
_LINK = re.compile(r'<a\s[^>]*href="([^"]*)"[^>]*>(.*?)</a>', re.I)
_UNORDERED = re.compile(_open("ul") + r"(.*?)</ul>", re.I | re.S)
_ORDERED = re.compile(_open("ol") + r"(.*?)</ol>", re.I | re.S)
_ITEM = re.compile(_open("li") + r"(.*?)</li>", re.I)
_PRE_CODE = re.compile(_open("pre") + r"\s*" + _open("code") + r"(.*?)</code>\s*</pre>", re.I | re.S)
_CODE = re.compile(_open("code") + r"(.*?)</code>", re.I)
_QUOTE = re.compile(_open("blockquote") + r"(.*?)</blockquote>", re.I | re.S)
_ANY_TAG = re.compile(r"<[^>]*>")
_EXTRA_BLANK_LINES = re.compile(r"\n\s*\n\s*\n")

# decoded after tags are stripped so escaped markup survives as text
_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
)


def _heading(match: re.Match) -> str:
    hashes = "#" * int(match.group(1))
    return f"{hashes} {match.group(2).strip()}\n\n"


def _unordered(match: re.Match) -> str:
    return _ITEM.sub(r"- \1\n", match.group(1)) + "\n"


def _ordered(match: re.Match) -> str:
    counter = 0

    def item(m: re.Match) -> str:
        nonlocal counter
        counter += 1
        return f"{counter}. {m.group(1)}\n"

    return _ITEM.sub(item, match.group(1)) + "\n"


def _quote(match: re.Match) -> str:
    lines = match.group(1).strip().split("\n")
    return "\n".join(f"> {line.strip()}" for line in lines) + "\n\n"


def _decode_entities(text: str) -> str:
    for entity, char in _ENTITIES:
        text = re.sub(re.escape(entity), char, text, flags=re.I)
    return text


def html_to_markdown(html: str) -> str:
    """Convert an HTML fragment to Markdown."""
    markdown = _HEADING.sub(_heading, html)
    markdown = _PARAGRAPH.sub(r"\1\n\n", markdown)
    markdown = _BREAK.sub("\n", markdown)
    markdown = _BOLD.sub(r"**\2**", markdown)
    markdown = _ITALIC.sub(r"*\2*", markdown)
    markdown = _LINK.sub(r"[\2](\1)", markdown)
    markdown = _UNORDERED.sub(_unordered, markdown)
    markdown = _ORDERED.sub(_ordered, markdown)
    markdown = _PRE_CODE.sub(lambda m: f"```\n{m.group(1)}\n```\n", markdown)
    markdown = _CODE.sub(r"`\1`", markdown)
    markdown = _QUOTE.sub(_quote, markdown)
    markdown = _ANY_TAG.sub("", markdown)
    markdown = _decode_entities(markdown)
    markdown = _EXTRA_BLANK_LINES.sub("\n\n", markdown)
    return markdown.strip()

"""
MarkNote Backend - Minimal Markdown Notes

Authenticated markdown notes with public share links and optional
public editing.

Version: 1.0.0
"""

__version__ = "1.0.0"

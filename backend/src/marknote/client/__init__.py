"""Async client for the MarkNote API, with editor autosave."""

from .autosave import AutosaveMode, Autosaver
from .client import MarkNoteAPIError, MarkNoteClient

__all__ = ["AutosaveMode", "Autosaver", "MarkNoteAPIError", "MarkNoteClient"]

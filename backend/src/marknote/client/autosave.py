"""Debounced autosave for the note editor."""

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, Optional, Set

import httpx

from ..config import get_settings
from .client import MarkNoteAPIError, MarkNoteClient

logger = logging.getLogger(__name__)


class AutosaveMode(str, Enum):
    NEW = "new"
    EXISTING = "existing"
    SHARED = "shared"


class Autosaver:
    """Debounce-then-write of the editor's title and content.

    Every change restarts the timer. When it fires the note is written
    through the client, depending on the mode:

    * ``NEW``: nothing is saved until the title is set and the content
      has a few characters. The first save creates the note, later ones
      update it. Values are trimmed.
    * ``EXISTING``: an owned note, saved as typed once it differs from
      the last saved version.
    * ``SHARED``: same as ``EXISTING`` but through the share link, and
      only while the owner allows public edits.

    A failed save keeps the changes pending and leaves the error on
    ``last_error``.
    """

    def __init__(
        self,
        client: MarkNoteClient,
        mode: AutosaveMode = AutosaveMode.NEW,
        note_id: Optional[str] = None,
        share_token: Optional[str] = None,
        title: str = "",
        content: str = "",
        allow_public_edit: bool = False,
        delay: Optional[float] = None,
    ):
        settings = get_settings()
        if mode is AutosaveMode.EXISTING and not note_id:
            raise ValueError("note_id is required for an existing note")
        if mode is AutosaveMode.SHARED and not share_token:
            raise ValueError("share_token is required for a shared note")

        self.client = client
        self.mode = mode
        self.note_id = note_id
        self.share_token = share_token
        self.allow_public_edit = allow_public_edit
        self.min_content_length = settings.autosave_min_content_length
        if delay is None:
            delay = (
                settings.autosave_new_note_delay
                if mode is AutosaveMode.NEW
                else settings.autosave_existing_note_delay
            )
        self.delay = delay

        self.title = title
        self.content = content
        # last values the server acknowledged
        self.saved_title = title
        self.saved_content = content

        self.last_error: Optional[Exception] = None
        self.save_count = 0
        self._timer: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._lock = asyncio.Lock()

    @classmethod
    def for_new_note(cls, client: MarkNoteClient, **kwargs) -> "Autosaver":
        return cls(client, AutosaveMode.NEW, **kwargs)

    @classmethod
    def for_note(cls, client: MarkNoteClient, note: Dict[str, Any], **kwargs) -> "Autosaver":
        """Autosaver for a note as returned by the notes API."""
        return cls(
            client,
            AutosaveMode.EXISTING,
            note_id=str(note["id"]),
            title=note["title"],
            content=note["content"],
            **kwargs,
        )

    @classmethod
    def for_shared_note(
        cls, client: MarkNoteClient, share_token: str, note: Dict[str, Any], **kwargs
    ) -> "Autosaver":
        """Autosaver for a note as returned by the public share endpoint."""
        return cls(
            client,
            AutosaveMode.SHARED,
            share_token=share_token,
            title=note["title"],
            content=note["content"],
            allow_public_edit=note.get("allow_public_edit", False),
            **kwargs,
        )

    @property
    def has_unsaved_changes(self) -> bool:
        if self.mode is AutosaveMode.NEW:
            if not (self.title.strip() or self.content.strip()):
                return False
            if self.note_id is None:
                return True
            return (self.title.strip(), self.content.strip()) != (
                self.saved_title,
                self.saved_content,
            )
        return (self.title, self.content) != (self.saved_title, self.saved_content)

    @property
    def is_pending(self) -> bool:
        """A debounce timer is running."""
        return self._timer is not None and not self._timer.done()

    def _can_save(self) -> bool:
        if not (self.title.strip() and self.content.strip()):
            return False
        if self.mode is AutosaveMode.SHARED and not self.allow_public_edit:
            return False
        return self.has_unsaved_changes

    def _can_autosave(self) -> bool:
        if self.mode is AutosaveMode.NEW and len(self.content.strip()) < self.min_content_length:
            return False
        return self._can_save()

    def update(self, title: Optional[str] = None, content: Optional[str] = None) -> None:
        """Record an edit and restart the debounce timer.

        Must be called from a running event loop.
        """
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content

        self._cancel_timer()
        if self._can_autosave():
            self._timer = self._spawn(self._debounced_save())

    def set_public_edit(self, allowed: bool) -> None:
        """Follow the owner switching public edits on or off."""
        self.allow_public_edit = allowed
        if not allowed:
            self._cancel_timer()

    async def flush(self) -> bool:
        """Save right away, skipping the debounce. Used when leaving the editor."""
        self._cancel_timer()
        return await self.save()

    async def close(self) -> None:
        """Drop pending work without saving."""
        self._cancel_timer()
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def save(self) -> bool:
        """Write the current values. Returns True when something was saved."""
        async with self._lock:
            if not self._can_save():
                return False

            title, content = self.title, self.content
            if self.mode is AutosaveMode.NEW:
                title, content = title.strip(), content.strip()

            try:
                await self._write(title, content)
            except (MarkNoteAPIError, httpx.HTTPError) as e:
                logger.error(f"Autosave failed: {e}")
                self.last_error = e
                return False

            self.saved_title, self.saved_content = title, content
            self.last_error = None
            self.save_count += 1
            return True

    async def _write(self, title: str, content: str) -> None:
        if self.mode is AutosaveMode.SHARED:
            await self.client.update_shared_note(self.share_token, title, content)
        elif self.note_id is None:
            note = await self.client.create_note(title, content)
            self.note_id = str(note["id"])
            logger.info(f"Created note {self.note_id}")
        else:
            await self.client.update_note(self.note_id, title=title, content=content)

    async def _debounced_save(self) -> None:
        await asyncio.sleep(self.delay)
        # past the debounce, later edits schedule their own save
        self._timer = None
        await self.save()

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

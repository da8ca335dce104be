"""HTTP client for the MarkNote API."""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class MarkNoteAPIError(Exception):
    """Non-2xx answer from the API."""

    def __init__(self, status_code: int, detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class MarkNoteClient:
    """Async wrapper around the MarkNote HTTP API.

    Signing in stores the token pair on the client; every later call on
    an owner route sends the access token as a Bearer header.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        access_token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.access_token = access_token
        self.refresh_token: Optional[str] = None
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api", timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "MarkNoteClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    async def _request(self, method: str, path: str, auth: bool = True, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if auth and self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        response = await self._http.request(method, path, headers=headers, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.debug(f"{method} {path} failed with {response.status_code}: {detail}")
            raise MarkNoteAPIError(response.status_code, detail)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # auth

    async def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/auth/register", auth=False, json={"email": email, "password": password}
        )

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        tokens = await self._request(
            "POST", "/auth/login", auth=False, json={"email": email, "password": password}
        )
        self.access_token = tokens["access_token"]
        self.refresh_token = tokens["refresh_token"]
        return tokens

    async def refresh(self) -> Dict[str, Any]:
        if not self.refresh_token:
            raise MarkNoteAPIError(401, "Not signed in")
        tokens = await self._request(
            "POST", "/auth/refresh", auth=False, json={"refresh_token": self.refresh_token}
        )
        self.access_token = tokens["access_token"]
        self.refresh_token = tokens["refresh_token"]
        return tokens

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/auth/me")

    async def sign_out(self) -> None:
        """Revoke the session server side. Local tokens are dropped either way."""
        try:
            if self.access_token:
                await self._request("POST", "/auth/logout")
        finally:
            self.access_token = None
            self.refresh_token = None

    # notes

    async def list_notes(self, page: int = 1, per_page: int = 20) -> Dict[str, Any]:
        return await self._request(
            "GET", "/notes/", params={"page": page, "per_page": per_page}
        )

    async def get_note(self, note_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/notes/{note_id}")

    async def create_note(self, title: str, content: str) -> Dict[str, Any]:
        return await self._request("POST", "/notes/", json={"title": title, "content": content})

    async def update_note(
        self, note_id: str, title: Optional[str] = None, content: Optional[str] = None
    ) -> Dict[str, Any]:
        payload = {}
        if title is not None:
            payload["title"] = title
        if content is not None:
            payload["content"] = content
        return await self._request("PUT", f"/notes/{note_id}", json=payload)

    async def delete_note(self, note_id: str) -> None:
        await self._request("DELETE", f"/notes/{note_id}")

    # sharing

    async def get_share_status(self, note_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/notes/{note_id}/share")

    async def publish_note(self, note_id: str) -> Dict[str, Any]:
        return await self._request("POST", f"/notes/{note_id}/share")

    async def set_public_edit(self, note_id: str, allow_public_edit: bool) -> Dict[str, Any]:
        return await self._request(
            "PATCH", f"/notes/{note_id}/share", json={"allow_public_edit": allow_public_edit}
        )

    async def toggle_public_edit(self, note_id: str) -> Dict[str, Any]:
        return await self._request("POST", f"/notes/{note_id}/share/toggle-edit")

    async def stop_sharing(self, note_id: str) -> None:
        await self._request("DELETE", f"/notes/{note_id}/share")

    # public links

    async def get_shared_note(self, share_token: str) -> Dict[str, Any]:
        return await self._request("GET", f"/share/{share_token}", auth=False)

    async def update_shared_note(self, share_token: str, title: str, content: str) -> Dict[str, Any]:
        return await self._request(
            "PUT",
            f"/share/{share_token}",
            auth=False,
            json={"title": title, "content": content},
        )

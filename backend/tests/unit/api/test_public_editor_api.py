"""Unit tests for the public share, editor and root endpoints."""

import uuid

import pytest
from fastapi.testclient import TestClient

from marknote.core.services.public_note_service import PublicNoteService
from marknote.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _shared(**kw):
    data = {
        "id": str(uuid.uuid4()),
        "title": "Shared",
        "content": "hello",
        "allow_public_edit": True,
        "word_count": 1,
        "updated_at": "2026-01-01T00:00:00Z",
    }
    data.update(kw)
    return data


def test_get_shared_note_is_anonymous(monkeypatch, client):
    async def fake_get(self, token):
        assert token == "tok"
        return _shared()

    monkeypatch.setattr(PublicNoteService, "get_shared_note", fake_get)
    resp = client.get("/api/share/tok")
    assert resp.status_code == 200
    assert resp.json()["title"] == "Shared"


def test_update_shared_note_passes_client_ip(monkeypatch, client):
    seen = {}

    async def fake_update(self, token, request, client_id):
        seen["client_id"] = client_id
        return _shared(title=request.title)

    monkeypatch.setattr(PublicNoteService, "update_shared_note", fake_update)
    resp = client.put("/api/share/tok", json={"title": "New", "content": "body"})
    assert resp.status_code == 200
    assert resp.json()["title"] == "New"
    assert seen["client_id"] == "testclient"


def test_update_shared_note_requires_both_fields(client):
    assert client.put("/api/share/tok", json={"title": "New"}).status_code == 422


def test_convert_html(client):
    resp = client.post("/api/editor/convert-html", json={"html": "<h1>Hi</h1><p><b>x</b></p>"})
    assert resp.json() == {"markdown": "# Hi\n\n**x**"}


def test_paste(client):
    resp = client.post(
        "/api/editor/paste",
        json={
            "content": "ab",
            "selection_start": 1,
            "selection_end": 1,
            "text": "ignored",
            "html": "<em>y</em>",
        },
    )
    assert resp.json() == {"content": "a*y*b", "selection_start": 4, "selection_end": 4, "word_count": 1}


def test_shortcut_handled(client):
    resp = client.post(
        "/api/editor/shortcut",
        json={"content": "", "selection_start": 0, "selection_end": 0, "key": "b"},
    )
    body = resp.json()
    assert body["handled"] is True
    assert body["content"] == "**bold text**"
    assert (body["selection_start"], body["selection_end"]) == (2, 11)


def test_shortcut_unhandled_leaves_buffer(client):
    resp = client.post(
        "/api/editor/shortcut",
        json={"content": "text", "selection_start": 4, "selection_end": 4, "key": "Enter", "modifier": False},
    )
    body = resp.json()
    assert body["handled"] is False
    assert body["content"] == "text"


def test_shortcut_rejects_unknown_key(client):
    resp = client.post("/api/editor/shortcut", json={"content": "", "key": "q"})
    assert resp.status_code == 422


def test_preview_and_word_count(client):
    resp = client.post("/api/editor/preview", json={"content": "# Title here"})
    assert "<h1>Title here</h1>" in resp.json()["html"]
    assert resp.json()["word_count"] == 3

    resp = client.post("/api/editor/word-count", json={"content": "a b"})
    assert resp.json() == {"word_count": 2}


def test_word_count_has_typed_response_schema(client):
    schema = client.get("/openapi.json").json()
    ok = schema["paths"]["/api/editor/word-count"]["post"]["responses"]["200"]
    assert ok["content"]["application/json"]["schema"]["$ref"].endswith("/WordCountResponse")


def test_root_endpoints(client):
    assert client.get("/").json() == {"message": "MarkNote API"}
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/api/").json()["endpoints"]["public"] == "/api/share/{share_token}"

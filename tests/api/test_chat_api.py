"""
Test suite for the HTTP API.

Runs the full application against an InMemoryChatStore with a mocked
completion client injected through dependency_overrides.

System role: Verification of routers, error mapping and streaming responses
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from mathchat.api.deps import get_chat_store, get_completion_client
from mathchat.api.main import create_app
from mathchat.boundary.openrouter.client import OpenRouterClient
from mathchat.boundary.store.memory_store import InMemoryChatStore
from mathchat.core.exceptions import UpstreamUnavailableError
from mathchat.core.rendering.diagram_sanitizer import LIBRARY_DIRECTIVE
from mathchat.core.streaming.sse import DONE_FRAME, encode_delta
from tests.streaming_fakes import FakeUpstream, upstream_chunk

HEADERS = {"X-User-ID": "user-1"}


@pytest.fixture
def store() -> InMemoryChatStore:
    return InMemoryChatStore()


@pytest.fixture
def completions() -> AsyncMock:
    return AsyncMock(spec=OpenRouterClient)


@pytest.fixture
def client(store, completions) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_chat_store] = lambda: store
    app.dependency_overrides[get_completion_client] = lambda: completions
    return TestClient(app)


def create_conversation(client: TestClient, title: str | None = None) -> str:
    body = {"title": title} if title else None
    response = client.post("/api/v1/conversations", json=body, headers=HEADERS)
    assert response.status_code == 200
    return response.json()["id"]


def configure_key(client: TestClient) -> None:
    response = client.put("/api/v1/settings", json={"openrouter_api_key": "sk-or-1"}, headers=HEADERS)
    assert response.status_code == 200


def test_health_check(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_missing_identity_is_unauthorized(client):
    assert client.get("/api/v1/conversations").status_code == 401
    assert client.get("/api/v1/settings", headers={"X-User-ID": "  "}).status_code == 401


class TestConversationRoutes:
    """Conversation endpoints."""

    def test_create_list_and_delete(self, client):
        conversation_id = create_conversation(client, "Limits")

        listed = client.get("/api/v1/conversations", headers=HEADERS).json()
        assert [c["id"] for c in listed] == [conversation_id]
        assert listed[0]["title"] == "Limits"

        assert client.delete(f"/api/v1/conversations/{conversation_id}", headers=HEADERS).status_code == 204
        assert client.delete(f"/api/v1/conversations/{conversation_id}", headers=HEADERS).status_code == 404

    def test_conversations_are_private(self, client):
        conversation_id = create_conversation(client)

        other = {"X-User-ID": "user-2"}
        assert client.get("/api/v1/conversations", headers=other).json() == []
        response = client.get(f"/api/v1/conversations/{conversation_id}/messages", headers=other)
        assert response.status_code == 404

    def test_search(self, client):
        create_conversation(client, "Group theory")
        wanted = create_conversation(client, "Topology")

        response = client.get("/api/v1/conversations/search", params={"query": "topo"}, headers=HEADERS)

        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [wanted]
        empty = client.get("/api/v1/conversations/search", params={"query": ""}, headers=HEADERS)
        assert empty.json() == []

    def test_generate_title(self, client, completions):
        configure_key(client)
        completions.open_stream.return_value = FakeUpstream([upstream_chunk("Sure.")])
        conversation_id = create_conversation(client)
        client.post(
            f"/api/v1/conversations/{conversation_id}/messages",
            json={"content": "What is a functor?"},
            headers=HEADERS,
        )
        completions.complete.return_value = "Functors"

        response = client.post(f"/api/v1/conversations/{conversation_id}/generate-title", headers=HEADERS)

        assert response.status_code == 200
        assert response.json()["title"] == "Functors"

    def test_generate_title_without_messages(self, client):
        configure_key(client)
        conversation_id = create_conversation(client)

        response = client.post(f"/api/v1/conversations/{conversation_id}/generate-title", headers=HEADERS)

        assert response.status_code == 400


class TestMessageRoutes:
    """Message history and streamed replies."""

    def test_stream_reply_and_persist(self, client, completions):
        configure_key(client)
        upstream = FakeUpstream([upstream_chunk("Hello"), upstream_chunk(", world"), b"data: [DONE]\n\n"])
        completions.open_stream.return_value = upstream
        conversation_id = create_conversation(client)

        response = client.post(
            f"/api/v1/conversations/{conversation_id}/messages",
            json={"content": "Say hello"},
            headers=HEADERS,
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        assert response.content == encode_delta("Hello") + encode_delta(", world") + DONE_FRAME
        assert upstream.closed

        history = client.get(f"/api/v1/conversations/{conversation_id}/messages", headers=HEADERS).json()
        assert [(m["role"], m["content"]) for m in history] == [
            ("user", "Say hello"),
            ("assistant", "Hello, world"),
        ]

    def test_missing_api_key(self, client, completions):
        conversation_id = create_conversation(client)

        response = client.post(
            f"/api/v1/conversations/{conversation_id}/messages",
            json={"content": "hi"},
            headers=HEADERS,
        )

        assert response.status_code == 400
        completions.open_stream.assert_not_awaited()

    def test_upstream_error_status_is_forwarded(self, client, completions):
        configure_key(client)
        completions.open_stream.side_effect = UpstreamUnavailableError("Invalid API key", 401)
        conversation_id = create_conversation(client)

        response = client.post(
            f"/api/v1/conversations/{conversation_id}/messages",
            json={"content": "hi"},
            headers=HEADERS,
        )

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid API key"}

    def test_unknown_conversation(self, client):
        configure_key(client)

        response = client.post(
            f"/api/v1/conversations/{uuid4()}/messages",
            json={"content": "hi"},
            headers=HEADERS,
        )

        assert response.status_code == 404

    @pytest.mark.parametrize(("content", "status"), [("", 422), ("   ", 400)])
    def test_empty_content(self, client, content, status):
        configure_key(client)
        conversation_id = create_conversation(client)

        response = client.post(
            f"/api/v1/conversations/{conversation_id}/messages",
            json={"content": content},
            headers=HEADERS,
        )

        assert response.status_code == status


class TestSettingsRoutes:
    """Settings endpoints."""

    def test_get_returns_defaults(self, client):
        response = client.get("/api/v1/settings", headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["selected_model"] == "google/gemini-3-flash-preview"
        assert data["model_options"]["max_tokens"] == 4096
        assert data["openrouter_api_key"] is None

    def test_put_partial_update(self, client):
        client.put("/api/v1/settings", json={"theme": "dark"}, headers=HEADERS)

        response = client.put("/api/v1/settings", json={"math_renderer": "mathjax"}, headers=HEADERS)

        assert response.json()["theme"] == "dark"
        assert response.json()["math_renderer"] == "mathjax"

    def test_put_rejects_unknown_theme(self, client):
        response = client.put("/api/v1/settings", json={"theme": "sepia"}, headers=HEADERS)

        assert response.status_code == 422


class TestRenderRoutes:
    """Rendering helpers."""

    def test_segments(self, client):
        document = "before\n$$\n\\begin{tikzcd} A \\arrow[r] & B \\end{tikzcd}\n$$\nafter"

        response = client.post("/api/v1/render/segments", json={"content": document})

        segments = response.json()["segments"]
        assert [(s["key"], s["kind"]) for s in segments] == [
            ("prose-0", "prose"),
            ("diagram-0", "diagram"),
            ("prose-1", "prose"),
        ]
        assert segments[1]["text"].startswith(LIBRARY_DIRECTIVE)
        assert segments[2]["text"] == "after"

    def test_diagram_document(self, client):
        response = client.post(
            "/api/v1/render/diagram",
            json={"source": "\\begin{tikzcd} A \\end{tikzcd}", "origin": "https://app.test"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert LIBRARY_DIRECTIVE in response.text
        assert '"https://app.test"' in response.text

"""
Test suite for ChatStreamClient.

Drives the real application through httpx.ASGITransport.

System role: Verification of the client-side stream consumer
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from mathchat.api.deps import get_chat_store, get_completion_client
from mathchat.api.main import create_app
from mathchat.boundary.openrouter.client import OpenRouterClient
from mathchat.boundary.store.memory_store import InMemoryChatStore
from mathchat.client.chat_client import ChatStreamClient
from mathchat.core.rendering.segment_parser import SegmentKind
from tests.streaming_fakes import FakeUpstream, upstream_chunk


@pytest.fixture
def store() -> InMemoryChatStore:
    return InMemoryChatStore()


@pytest.fixture
def completions() -> AsyncMock:
    return AsyncMock(spec=OpenRouterClient)


@pytest.fixture
async def http_client(store, completions):
    app = create_app()
    app.dependency_overrides[get_chat_store] = lambda: store
    app.dependency_overrides[get_completion_client] = lambda: completions
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_frames_follow_the_reply(http_client, store, completions, user_id) -> None:
    await store.save_user_settings(user_id, openrouter_api_key="sk-or-1")
    conversation = await store.create_conversation(user_id)
    completions.open_stream.return_value = FakeUpstream([
        upstream_chunk("Square:\n\\begin{tikzcd} A \\arrow[r] "),
        upstream_chunk("& B \\end{tikzcd}"),
        upstream_chunk("\nDone."),
        b"data: [DONE]\n\n",
    ])
    client = ChatStreamClient(http_client, user_id=user_id)

    frames = [frame async for frame in client.send_message(conversation.id, "Draw a square")]

    final = frames[-1]
    assert final.streaming is False
    assert final.content == "Square:\n\\begin{tikzcd} A \\arrow[r] & B \\end{tikzcd}\nDone."
    assert [s.key for s in final.segments] == ["prose-0", "diagram-0", "prose-1"]
    assert final.segments[1].kind is SegmentKind.DIAGRAM
    assert all(frame.streaming for frame in frames[:-1])


@pytest.mark.asyncio
async def test_error_status_raises(http_client, store, user_id) -> None:
    conversation = await store.create_conversation(user_id)
    client = ChatStreamClient(http_client, user_id=user_id)

    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        async for _ in client.send_message(conversation.id, "hi"):
            pass

    assert exc_info.value.response.status_code == 400

"""
Test suite for ChatService.

Uses a mocked record store and completion client.

System role: Verification of chat turn orchestration
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from mathchat.application.services.chat_service import ChatService, resolve_model_options
from mathchat.boundary.openrouter.client import OpenRouterClient
from mathchat.boundary.store.base import ChatStore
from mathchat.core.exceptions import (
    ConversationNotFoundError,
    MissingApiKeyError,
    UpstreamUnavailableError,
    ValidationError,
)
from mathchat.core.streaming.relay import StreamRelay
from mathchat.models.chat import Message, MessageRole
from mathchat.models.conversation import Conversation
from mathchat.models.settings import DEFAULT_MODEL, DEFAULT_MODEL_OPTIONS, ModelOptions, UserSettings
from tests.streaming_fakes import FakeUpstream

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def conversation_id() -> uuid.UUID:
    """Provide sample conversation UUID."""
    return uuid.uuid4()


@pytest.fixture
def store(user_id, conversation_id) -> AsyncMock:
    """Provide mock store holding one conversation with a configured key."""
    store = AsyncMock(spec=ChatStore)
    store.get_conversation.return_value = Conversation(
        id=conversation_id, user_id=user_id, title="t", created_at=NOW, updated_at=NOW
    )
    store.get_user_settings.return_value = UserSettings(
        id=uuid.uuid4(),
        user_id=user_id,
        openrouter_api_key="sk-or-1",
        model_options=ModelOptions(temperature=0.2),
        created_at=NOW,
        updated_at=NOW,
    )
    store.list_messages.return_value = [
        Message(id=uuid.uuid4(), conversation_id=conversation_id, role=MessageRole.USER,
                content="Define a monad", created_at=NOW),
    ]
    return store


@pytest.fixture
def completions() -> AsyncMock:
    """Provide mock completion client returning an empty stream."""
    client = AsyncMock(spec=OpenRouterClient)
    client.open_stream.return_value = FakeUpstream([])
    return client


@pytest.fixture
def chat_service(store, completions) -> ChatService:
    return ChatService(store=store, completions=completions, system_prompt="be helpful")


class TestSendMessage:
    """ChatService.send_message."""

    @pytest.mark.asyncio
    async def test_stores_user_message_then_opens_stream(
        self, chat_service, store, completions, user_id, conversation_id
    ) -> None:
        relay = await chat_service.send_message(user_id, conversation_id, "Define a monad")

        assert isinstance(relay, StreamRelay)
        assert relay.conversation_id == conversation_id
        store.insert_message.assert_awaited_once_with(conversation_id, MessageRole.USER, "Define a monad")

        api_key, model, messages, options = completions.open_stream.await_args.args
        assert api_key == "sk-or-1"
        assert model == DEFAULT_MODEL
        assert messages == [
            {"role": "system", "content": "be helpful"},
            {"role": "user", "content": "Define a monad"},
        ]
        assert options.temperature == 0.2
        assert options.max_tokens == DEFAULT_MODEL_OPTIONS.max_tokens

    @pytest.mark.asyncio
    async def test_blank_content_is_rejected(self, chat_service, store, user_id, conversation_id) -> None:
        with pytest.raises(ValidationError):
            await chat_service.send_message(user_id, conversation_id, "   ")

        store.insert_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_foreign_conversation_is_not_found(self, chat_service, store, user_id, conversation_id) -> None:
        store.get_conversation.return_value = None

        with pytest.raises(ConversationNotFoundError):
            await chat_service.send_message(user_id, conversation_id, "hi")

        store.insert_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_key_stops_before_insert(self, chat_service, store, user_id, conversation_id) -> None:
        store.get_user_settings.return_value = None

        with pytest.raises(MissingApiKeyError):
            await chat_service.send_message(user_id, conversation_id, "hi")

        store.insert_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upstream_rejection_propagates(
        self, chat_service, completions, user_id, conversation_id
    ) -> None:
        completions.open_stream.side_effect = UpstreamUnavailableError("Invalid API key", 401)

        with pytest.raises(UpstreamUnavailableError):
            await chat_service.send_message(user_id, conversation_id, "hi")


class TestHistory:
    """ChatService.get_history."""

    @pytest.mark.asyncio
    async def test_returns_messages(self, chat_service, store, user_id, conversation_id) -> None:
        messages = await chat_service.get_history(user_id, conversation_id)

        assert [m.content for m in messages] == ["Define a monad"]
        store.list_messages.assert_awaited_once_with(conversation_id)

    @pytest.mark.asyncio
    async def test_foreign_conversation_is_not_found(self, chat_service, store, user_id, conversation_id) -> None:
        store.get_conversation.return_value = None

        with pytest.raises(ConversationNotFoundError):
            await chat_service.get_history(user_id, conversation_id)


def test_resolve_model_options_fills_defaults() -> None:
    options = resolve_model_options(ModelOptions(top_p=0.9))

    assert options.top_p == 0.9
    assert options.temperature == DEFAULT_MODEL_OPTIONS.temperature
    assert resolve_model_options(None) == DEFAULT_MODEL_OPTIONS

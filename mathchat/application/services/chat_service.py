"""
Chat service orchestrator.

Coordinates one chat turn: store the user's message, open the upstream
completion stream over the full history and hand back a StreamRelay that
forwards and persists the reply.

Dependencies: mathchat.boundary.store, mathchat.boundary.openrouter, mathchat.core.streaming
System role: Chat use case orchestration
"""

import logging
from uuid import UUID

from mathchat.boundary.openrouter.client import OpenRouterClient
from mathchat.boundary.store.base import ChatStore
from mathchat.core.exceptions import (
    ConversationNotFoundError,
    MissingApiKeyError,
    ValidationError,
)
from mathchat.core.streaming.relay import StreamRelay
from mathchat.models.chat import Message, MessageRole
from mathchat.models.settings import DEFAULT_MODEL, DEFAULT_MODEL_OPTIONS, ModelOptions

logger = logging.getLogger(__name__)


def resolve_model_options(stored: ModelOptions | None) -> ModelOptions:
    """Fill unset sampling options from the defaults."""
    if stored is None:
        return DEFAULT_MODEL_OPTIONS.model_copy()
    return DEFAULT_MODEL_OPTIONS.model_copy(update=stored.model_dump(exclude_none=True))


class ChatService:
    """Chat service orchestrator."""

    def __init__(
        self,
        store: ChatStore,
        completions: OpenRouterClient,
        system_prompt: str,
    ) -> None:
        """
        Initialize chat service.

        Args:
            store: Record store
            completions: Upstream completion client
            system_prompt: Instructions prepended to every request
        """
        self.store = store
        self.completions = completions
        self.system_prompt = system_prompt

    async def get_history(self, user_id: str, conversation_id: UUID) -> list[Message]:
        """
        Messages of an owned conversation, oldest first.

        Raises:
            ConversationNotFoundError: Missing or owned by another user
        """
        if await self.store.get_conversation(conversation_id, user_id) is None:
            raise ConversationNotFoundError(str(conversation_id))
        return await self.store.list_messages(conversation_id)

    async def send_message(
        self,
        user_id: str,
        conversation_id: UUID,
        content: str,
    ) -> StreamRelay:
        """
        Store the user's message and start the assistant reply.

        The upstream status is known before this returns, so an
        UpstreamUnavailableError can still become a plain JSON error.

        Args:
            user_id: Caller identity
            conversation_id: Target conversation
            content: User message text

        Returns:
            StreamRelay: Relay bound to the open upstream stream

        Raises:
            ValidationError: Empty content
            ConversationNotFoundError: Missing or owned by another user
            MissingApiKeyError: No stored upstream key
            UpstreamUnavailableError: Upstream rejected the request
        """
        if not content or not content.strip():
            raise ValidationError("Message content must not be empty", field="content")

        if await self.store.get_conversation(conversation_id, user_id) is None:
            raise ConversationNotFoundError(str(conversation_id))

        settings = await self.store.get_user_settings(user_id)
        if settings is None or not settings.openrouter_api_key:
            raise MissingApiKeyError(user_id)

        await self.store.insert_message(conversation_id, MessageRole.USER, content)
        history = await self.store.list_messages(conversation_id)

        messages = [{"role": "system", "content": self.system_prompt}]
        messages.extend({"role": m.role.value, "content": m.content} for m in history)

        model = settings.selected_model or DEFAULT_MODEL
        logger.info(
            "Opening reply stream",
            extra={
                "conversation_id": str(conversation_id),
                "model": model,
                "history_length": len(history),
            },
        )
        upstream = await self.completions.open_stream(
            settings.openrouter_api_key,
            model,
            messages,
            resolve_model_options(settings.model_options),
        )
        return StreamRelay(self.store, conversation_id, upstream)

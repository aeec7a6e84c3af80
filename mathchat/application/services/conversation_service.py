"""
Conversation service orchestrator.

Coordinates conversation lifecycle, search and title generation.

Dependencies: mathchat.boundary.store, mathchat.boundary.openrouter
System role: Conversation use case orchestration
"""

import logging
from uuid import UUID

from mathchat.boundary.openrouter.client import OpenRouterClient
from mathchat.boundary.store.base import ChatStore
from mathchat.configs.openrouter import TITLE_PROMPT, OpenRouterSettings
from mathchat.core.exceptions import (
    ConversationNotFoundError,
    MissingApiKeyError,
    ValidationError,
)
from mathchat.models.conversation import DEFAULT_CONVERSATION_TITLE, Conversation

logger = logging.getLogger(__name__)

TITLE_SOURCE_MESSAGES = 4


class ConversationService:
    """Conversation service orchestrator."""

    def __init__(
        self,
        store: ChatStore,
        completions: OpenRouterClient,
        settings: OpenRouterSettings,
    ) -> None:
        """
        Initialize conversation service.

        Args:
            store: Record store
            completions: Upstream completion client, used for titles
            settings: Title model and token cap
        """
        self.store = store
        self.completions = completions
        self.settings = settings

    async def create_conversation(self, user_id: str, title: str | None = None) -> Conversation:
        """Create a conversation, titled with the default when none given."""
        conversation = await self.store.create_conversation(user_id, title)
        logger.info(
            "Conversation created",
            extra={"conversation_id": str(conversation.id), "user_id": user_id},
        )
        return conversation

    async def list_conversations(self, user_id: str) -> list[Conversation]:
        return await self.store.list_conversations(user_id)

    async def delete_conversation(self, user_id: str, conversation_id: UUID) -> None:
        """
        Delete an owned conversation.

        Raises:
            ConversationNotFoundError: Missing or owned by another user
        """
        if not await self.store.delete_conversation(conversation_id, user_id):
            raise ConversationNotFoundError(str(conversation_id))

    async def search_conversations(self, user_id: str, query: str) -> list[Conversation]:
        """Search titles and message contents. A blank query matches nothing."""
        query = query.strip()
        if not query:
            return []
        return await self.store.search_conversations(user_id, query)

    async def generate_title(self, user_id: str, conversation_id: UUID) -> Conversation:
        """
        Name a conversation from its opening messages.

        The first few messages are rendered as "role: content" lines and
        summarized by the title model. An empty answer falls back to the
        default title.

        Args:
            user_id: Caller identity
            conversation_id: Conversation to rename

        Returns:
            Conversation: Updated conversation

        Raises:
            ConversationNotFoundError: Missing or owned by another user
            MissingApiKeyError: No stored upstream key
            ValidationError: Conversation has no messages yet
            UpstreamUnavailableError: Title request failed
        """
        if await self.store.get_conversation(conversation_id, user_id) is None:
            raise ConversationNotFoundError(str(conversation_id))

        user_settings = await self.store.get_user_settings(user_id)
        if user_settings is None or not user_settings.openrouter_api_key:
            raise MissingApiKeyError(user_id)

        messages = await self.store.list_messages(conversation_id, limit=TITLE_SOURCE_MESSAGES)
        if not messages:
            raise ValidationError("No messages found", details={"conversation_id": str(conversation_id)})

        transcript = "\n".join(f"{m.role.value}: {m.content}" for m in messages)
        answer = await self.completions.complete(
            user_settings.openrouter_api_key,
            self.settings.title_model,
            [
                {"role": "system", "content": TITLE_PROMPT},
                {"role": "user", "content": transcript},
            ],
            max_tokens=self.settings.title_max_tokens,
        )
        title = answer.strip() or DEFAULT_CONVERSATION_TITLE

        conversation = await self.store.update_conversation(conversation_id, title=title)
        if conversation is None:
            raise ConversationNotFoundError(str(conversation_id))
        logger.info(
            "Conversation title generated",
            extra={"conversation_id": str(conversation_id), "title": title},
        )
        return conversation

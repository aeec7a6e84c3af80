"""
Record store capability interface.

Every operation returns pydantic domain models so callers never touch
ORM rows or backend-specific objects.

Dependencies: mathchat.models
System role: Persistence port for conversations, messages and settings
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any
from uuid import UUID

from mathchat.models.chat import Message, MessageRole
from mathchat.models.conversation import Conversation
from mathchat.models.settings import UserSettings


class ChatStore(ABC):
    """
    Abstract record store.

    Implementations own their transactions: each call is committed before
    it returns, so a write issued after the HTTP request has ended (relay
    finalization) is not lost.
    """

    @abstractmethod
    async def create_conversation(self, user_id: str, title: str | None = None) -> Conversation:
        """Create a conversation for user, with the default title when none given."""

    @abstractmethod
    async def list_conversations(self, user_id: str) -> list[Conversation]:
        """List user's conversations, most recently updated first."""

    @abstractmethod
    async def get_conversation(self, conversation_id: UUID, user_id: str) -> Conversation | None:
        """Return the conversation if it exists and is owned by user."""

    @abstractmethod
    async def update_conversation(
        self,
        conversation_id: UUID,
        *,
        title: str | None = None,
        updated_at: datetime | None = None,
    ) -> Conversation | None:
        """Set title and/or last-activity timestamp. None if missing."""

    @abstractmethod
    async def delete_conversation(self, conversation_id: UUID, user_id: str) -> bool:
        """Delete an owned conversation and its messages."""

    @abstractmethod
    async def search_conversations(self, user_id: str, query: str) -> list[Conversation]:
        """Case-insensitive match on title or any message content."""

    @abstractmethod
    async def insert_message(
        self,
        conversation_id: UUID,
        role: MessageRole,
        content: str,
    ) -> Message:
        """Append a message to a conversation."""

    @abstractmethod
    async def list_messages(self, conversation_id: UUID, limit: int | None = None) -> list[Message]:
        """Messages of a conversation, oldest first, optionally only the first N."""

    @abstractmethod
    async def get_user_settings(self, user_id: str) -> UserSettings | None:
        """Stored settings for user, None when never saved."""

    @abstractmethod
    async def save_user_settings(self, user_id: str, **values: Any) -> UserSettings:
        """Upsert settings columns for user; missing rows start from defaults."""

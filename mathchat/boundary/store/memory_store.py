"""
In-memory record store.

Holds conversations, messages and settings in plain dicts scoped to the
instance. Used by tests and by the "memory" store backend.

Dependencies: mathchat.models
System role: Non-persistent ChatStore implementation
"""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from mathchat.boundary.store.base import ChatStore
from mathchat.models.chat import Message, MessageRole
from mathchat.models.conversation import DEFAULT_CONVERSATION_TITLE, Conversation
from mathchat.models.settings import DEFAULT_MODEL_OPTIONS, UserSettings


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryChatStore(ChatStore):
    """Dict-backed ChatStore. Not shared between instances."""

    def __init__(self) -> None:
        self._conversations: dict[UUID, Conversation] = {}
        self._messages: dict[UUID, list[Message]] = {}
        self._settings: dict[str, UserSettings] = {}

    async def create_conversation(self, user_id: str, title: str | None = None) -> Conversation:
        now = _now()
        conversation = Conversation(
            id=uuid4(),
            user_id=user_id,
            title=title or DEFAULT_CONVERSATION_TITLE,
            created_at=now,
            updated_at=now,
        )
        self._conversations[conversation.id] = conversation
        self._messages[conversation.id] = []
        return conversation

    async def list_conversations(self, user_id: str) -> list[Conversation]:
        owned = [c for c in self._conversations.values() if c.user_id == user_id]
        return sorted(owned, key=lambda c: c.updated_at, reverse=True)

    async def get_conversation(self, conversation_id: UUID, user_id: str) -> Conversation | None:
        conversation = self._conversations.get(conversation_id)
        if conversation is None or conversation.user_id != user_id:
            return None
        return conversation

    async def update_conversation(
        self,
        conversation_id: UUID,
        *,
        title: str | None = None,
        updated_at: datetime | None = None,
    ) -> Conversation | None:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            return None
        changes: dict[str, Any] = {}
        if title is not None:
            changes["title"] = title
        if updated_at is not None or changes:
            # Any write refreshes the activity timestamp unless one is given
            changes["updated_at"] = updated_at or _now()
        conversation = conversation.model_copy(update=changes)
        self._conversations[conversation_id] = conversation
        return conversation

    async def delete_conversation(self, conversation_id: UUID, user_id: str) -> bool:
        if await self.get_conversation(conversation_id, user_id) is None:
            return False
        del self._conversations[conversation_id]
        self._messages.pop(conversation_id, None)
        return True

    async def search_conversations(self, user_id: str, query: str) -> list[Conversation]:
        needle = query.casefold()
        return [
            c
            for c in await self.list_conversations(user_id)
            if needle in c.title.casefold()
            or any(needle in m.content.casefold() for m in self._messages.get(c.id, []))
        ]

    async def insert_message(
        self,
        conversation_id: UUID,
        role: MessageRole,
        content: str,
    ) -> Message:
        message = Message(
            id=uuid4(),
            conversation_id=conversation_id,
            role=MessageRole(role),
            content=content,
            created_at=_now(),
        )
        self._messages.setdefault(conversation_id, []).append(message)
        return message

    async def list_messages(self, conversation_id: UUID, limit: int | None = None) -> list[Message]:
        messages = list(self._messages.get(conversation_id, []))
        return messages if limit is None else messages[:limit]

    async def get_user_settings(self, user_id: str) -> UserSettings | None:
        return self._settings.get(user_id)

    async def save_user_settings(self, user_id: str, **values: Any) -> UserSettings:
        existing = self._settings.get(user_id)
        now = _now()
        if existing is None:
            data: dict[str, Any] = {
                "id": uuid4(),
                "user_id": user_id,
                "model_options": DEFAULT_MODEL_OPTIONS.model_dump(),
                "created_at": now,
            }
        else:
            data = existing.model_dump()
        data.update(values)
        data["updated_at"] = now
        settings = UserSettings.model_validate(data)
        self._settings[user_id] = settings
        return settings

"""
SQLAlchemy-backed record store.

Dependencies: sqlalchemy, mathchat.boundary.db
System role: Persistent ChatStore implementation
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mathchat.boundary.db.CRUD import conversation_crud, message_crud, user_settings_crud
from mathchat.boundary.store.base import ChatStore
from mathchat.core.exceptions import StoreError
from mathchat.models.chat import Message, MessageRole
from mathchat.models.conversation import DEFAULT_CONVERSATION_TITLE, Conversation
from mathchat.models.settings import UserSettings
from mathchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class SqlChatStore(ChatStore):
    """
    ChatStore on async SQLAlchemy.

    Opens one short-lived session per operation and commits before
    returning. Driver errors surface as StoreError.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize store.

        Args:
            session_factory: Factory producing AsyncSession objects
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                log_exception_with_context(logger, "Store operation failed", e, operation=operation)
                raise StoreError(f"Store operation failed: {operation}", operation=operation) from e

    async def create_conversation(self, user_id: str, title: str | None = None) -> Conversation:
        async with self._transaction("create_conversation") as session:
            row = await conversation_crud.create(
                session,
                user_id=user_id,
                title=title or DEFAULT_CONVERSATION_TITLE,
            )
            return Conversation.model_validate(row)

    async def list_conversations(self, user_id: str) -> list[Conversation]:
        async with self._transaction("list_conversations") as session:
            rows = await conversation_crud.list_for_user(session, user_id)
            return [Conversation.model_validate(row) for row in rows]

    async def get_conversation(self, conversation_id: UUID, user_id: str) -> Conversation | None:
        async with self._transaction("get_conversation") as session:
            row = await conversation_crud.get_for_user(session, conversation_id, user_id)
            return Conversation.model_validate(row) if row else None

    async def update_conversation(
        self,
        conversation_id: UUID,
        *,
        title: str | None = None,
        updated_at: datetime | None = None,
    ) -> Conversation | None:
        values: dict[str, Any] = {}
        if title is not None:
            values["title"] = title
        if updated_at is not None:
            values["updated_at"] = updated_at
        async with self._transaction("update_conversation") as session:
            if values:
                row = await conversation_crud.update_by_id(session, conversation_id, **values)
            else:
                row = await conversation_crud.get_by_id(session, conversation_id)
            return Conversation.model_validate(row) if row else None

    async def delete_conversation(self, conversation_id: UUID, user_id: str) -> bool:
        async with self._transaction("delete_conversation") as session:
            return await conversation_crud.delete_for_user(session, conversation_id, user_id)

    async def search_conversations(self, user_id: str, query: str) -> list[Conversation]:
        async with self._transaction("search_conversations") as session:
            rows = await conversation_crud.search_for_user(session, user_id, query)
            return [Conversation.model_validate(row) for row in rows]

    async def insert_message(
        self,
        conversation_id: UUID,
        role: MessageRole,
        content: str,
    ) -> Message:
        async with self._transaction("insert_message") as session:
            row = await message_crud.create(
                session,
                conversation_id=conversation_id,
                role=MessageRole(role).value,
                content=content,
            )
            return Message.model_validate(row)

    async def list_messages(self, conversation_id: UUID, limit: int | None = None) -> list[Message]:
        async with self._transaction("list_messages") as session:
            rows = await message_crud.list_for_conversation(session, conversation_id, limit=limit)
            return [Message.model_validate(row) for row in rows]

    async def get_user_settings(self, user_id: str) -> UserSettings | None:
        async with self._transaction("get_user_settings") as session:
            row = await user_settings_crud.get_by_user_id(session, user_id)
            return UserSettings.model_validate(row) if row else None

    async def save_user_settings(self, user_id: str, **values: Any) -> UserSettings:
        async with self._transaction("save_user_settings") as session:
            row = await user_settings_crud.upsert(session, user_id, **values)
            return UserSettings.model_validate(row)

"""
Conversation CRUD operations.

Provides owner-scoped queries and search for ConversationModel.

Dependencies: sqlalchemy, mathchat.boundary.db.models
System role: Conversation persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from mathchat.boundary.db.CRUD.base_crud import BaseCRUD
from mathchat.boundary.db.models.conversation_model import ConversationModel
from mathchat.boundary.db.models.message_model import MessageModel


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ConversationCRUD(BaseCRUD[ConversationModel]):
    """
    CRUD operations for ConversationModel.

    Extends BaseCRUD with queries scoped to the owning user.
    """

    def __init__(self) -> None:
        """Initialize ConversationCRUD with ConversationModel."""
        super().__init__(ConversationModel)

    async def get_for_user(
        self,
        session: AsyncSession,
        id: UUID,
        user_id: str,
    ) -> ConversationModel | None:
        """
        Retrieve a conversation only if owned by user.

        Args:
            session: Async database session
            id: Conversation UUID
            user_id: Owner identity

        Returns:
            ConversationModel if found and owned, None otherwise
        """
        stmt = select(ConversationModel).where(
            ConversationModel.id == id,
            ConversationModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: str,
    ) -> Sequence[ConversationModel]:
        """
        List a user's conversations, most recently active first.

        Args:
            session: Async database session
            user_id: Owner identity

        Returns:
            Sequence of ConversationModels ordered by updated_at descending
        """
        stmt = (
            select(ConversationModel)
            .where(ConversationModel.user_id == user_id)
            .order_by(ConversationModel.updated_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def search_for_user(
        self,
        session: AsyncSession,
        user_id: str,
        query: str,
    ) -> Sequence[ConversationModel]:
        """
        Case-insensitive search over titles and message contents.

        Args:
            session: Async database session
            user_id: Owner identity
            query: Search text (LIKE wildcards are matched literally)

        Returns:
            Sequence of matching ConversationModels, most recently active first
        """
        pattern = _like_pattern(query)
        message_match = exists().where(
            MessageModel.conversation_id == ConversationModel.id,
            MessageModel.content.ilike(pattern, escape="\\"),
        )
        stmt = (
            select(ConversationModel)
            .where(
                ConversationModel.user_id == user_id,
                or_(ConversationModel.title.ilike(pattern, escape="\\"), message_match),
            )
            .order_by(ConversationModel.updated_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_for_user(
        self,
        session: AsyncSession,
        id: UUID,
        user_id: str,
    ) -> bool:
        """
        Delete an owned conversation together with its messages.

        Args:
            session: Async database session
            id: Conversation UUID
            user_id: Owner identity

        Returns:
            True if deleted, False if not found or not owned
        """
        if await self.get_for_user(session, id, user_id) is None:
            return False
        await session.execute(delete(MessageModel).where(MessageModel.conversation_id == id))
        return await self.delete_by_id(session, id)


conversation_crud = ConversationCRUD()

"""
Message CRUD operations.

Dependencies: sqlalchemy, mathchat.boundary.db.models
System role: Chat message persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mathchat.boundary.db.CRUD.base_crud import BaseCRUD
from mathchat.boundary.db.models.message_model import MessageModel


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        """Initialize MessageCRUD with MessageModel."""
        super().__init__(MessageModel)

    async def list_for_conversation(
        self,
        session: AsyncSession,
        conversation_id: UUID,
        limit: int | None = None,
    ) -> Sequence[MessageModel]:
        """
        List messages of a conversation in insertion order.

        Args:
            session: Async database session
            conversation_id: Parent conversation UUID
            limit: Return only the first N messages (None for all)

        Returns:
            Sequence of MessageModels ordered by created_at ascending
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.created_at.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


message_crud = MessageCRUD()

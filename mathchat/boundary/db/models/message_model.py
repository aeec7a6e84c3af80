"""
Message ORM model.

Dependencies: sqlalchemy, mathchat.boundary.db.base
System role: Chat message persistence
"""

from uuid import UUID

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mathchat.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class MessageModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Single user or assistant message.

    Attributes:
        id: UUID primary key
        conversation_id: Parent conversation (cascade on delete)
        role: "user" or "assistant"
        content: Full message text
        created_at: Insert timestamp, defines message order
    """

    __tablename__ = "messages"

    conversation_id: Mapped[UUID] = mapped_column(
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    conversation = relationship("ConversationModel", back_populates="messages")

"""
Conversation ORM model.

Represents one chat thread owned by a user.

Dependencies: sqlalchemy, mathchat.boundary.db.base
System role: Conversation persistence
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mathchat.boundary.db.base import Base, TimestampMixin, UUIDMixin
from mathchat.models.conversation import DEFAULT_CONVERSATION_TITLE


class ConversationModel(Base, UUIDMixin, TimestampMixin):
    """
    Conversation ORM model.

    updated_at doubles as the last-activity timestamp; the conversation
    list is ordered by it.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owner identity from the external auth provider
        title: Display title
        messages: MessageModel rows (cascade delete)
        created_at: Creation timestamp (UTC)
        updated_at: Last activity timestamp (UTC)
    """

    __tablename__ = "conversations"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default=DEFAULT_CONVERSATION_TITLE,
    )

    messages = relationship(
        "MessageModel",
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

"""
Conversation domain models and schemas.

Dependencies: pydantic
System role: Conversation API contracts
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONVERSATION_TITLE = "新しい会話"


class Conversation(BaseModel):
    """Conversation record owned by one user."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    title: str
    created_at: datetime
    updated_at: datetime


class CreateConversationRequest(BaseModel):
    """Request schema for creating a conversation."""

    title: str | None = Field(default=None, max_length=255, description="Title; default when omitted")

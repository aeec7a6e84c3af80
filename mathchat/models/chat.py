"""
Chat domain models and schemas.

Message records and request schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Author of a stored message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """Single persisted chat message."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    conversation_id: UUID
    role: MessageRole
    content: str
    created_at: datetime


class SendMessageRequest(BaseModel):
    """Request schema for posting a user message."""

    content: str = Field(min_length=1, description="User message text")

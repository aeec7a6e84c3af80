"""API and domain schemas."""

from mathchat.models.chat import Message, MessageRole, SendMessageRequest
from mathchat.models.conversation import (
    DEFAULT_CONVERSATION_TITLE,
    Conversation,
    CreateConversationRequest,
)
from mathchat.models.settings import (
    DEFAULT_MODEL,
    DEFAULT_MODEL_OPTIONS,
    ModelOptions,
    UpdateSettingsRequest,
    UserSettings,
)
from mathchat.models.streaming import DiagramHeightMessage, RelayState

__all__ = [
    "Conversation",
    "CreateConversationRequest",
    "DEFAULT_CONVERSATION_TITLE",
    "DEFAULT_MODEL",
    "DEFAULT_MODEL_OPTIONS",
    "DiagramHeightMessage",
    "Message",
    "MessageRole",
    "ModelOptions",
    "RelayState",
    "SendMessageRequest",
    "UpdateSettingsRequest",
    "UserSettings",
]

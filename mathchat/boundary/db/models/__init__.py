"""
Database models package.

Exports:
  - ConversationModel: Conversation ORM model
  - MessageModel: Chat message ORM model
  - UserSettingsModel: Per-user settings ORM model

Dependencies: sqlalchemy, mathchat.boundary.db.base
System role: Database model definitions for domain entities
"""

from mathchat.boundary.db.models.conversation_model import ConversationModel
from mathchat.boundary.db.models.message_model import MessageModel
from mathchat.boundary.db.models.user_settings_model import UserSettingsModel

__all__ = [
    "ConversationModel",
    "MessageModel",
    "UserSettingsModel",
]

"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), create_tables(): Connection management
  - ConversationModel, MessageModel, UserSettingsModel: Domain entities
  - conversation_crud, message_crud, user_settings_crud: CRUD operation singletons

Dependencies: sqlalchemy, mathchat.configs
System role: Database adapter providing persistent storage for conversations,
messages and per-user settings.
"""

from mathchat.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from mathchat.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from mathchat.boundary.db.models import ConversationModel, MessageModel, UserSettingsModel
from mathchat.boundary.db.CRUD import (
    BaseCRUD,
    ConversationCRUD,
    MessageCRUD,
    UserSettingsCRUD,
    conversation_crud,
    message_crud,
    user_settings_crud,
)

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "ConversationModel",
    "MessageModel",
    "UserSettingsModel",
    # CRUD classes
    "BaseCRUD",
    "ConversationCRUD",
    "MessageCRUD",
    "UserSettingsCRUD",
    # CRUD singletons
    "conversation_crud",
    "message_crud",
    "user_settings_crud",
]

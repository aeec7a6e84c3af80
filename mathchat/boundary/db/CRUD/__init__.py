"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from mathchat.boundary.db.CRUD import conversation_crud, message_crud

    # Use singleton instances
    conversation = await conversation_crud.get_for_user(db, conversation_id, user_id)

    # Or instantiate classes directly for custom behavior
    from mathchat.boundary.db.CRUD import MessageCRUD
    custom_crud = MessageCRUD()
"""

from mathchat.boundary.db.CRUD.base_crud import BaseCRUD
from mathchat.boundary.db.CRUD.conversation_crud import ConversationCRUD, conversation_crud
from mathchat.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from mathchat.boundary.db.CRUD.user_settings_crud import UserSettingsCRUD, user_settings_crud

__all__ = [
    "BaseCRUD",
    "ConversationCRUD",
    "conversation_crud",
    "MessageCRUD",
    "message_crud",
    "UserSettingsCRUD",
    "user_settings_crud",
]

"""
Application services.

Exports:
  - ChatService: Send a message and relay the streamed reply
  - ConversationService: Conversation lifecycle, search and titles
  - SettingsService: Per-user settings
"""

from mathchat.application.services.chat_service import ChatService
from mathchat.application.services.conversation_service import ConversationService
from mathchat.application.services.settings_service import SettingsService

__all__ = ["ChatService", "ConversationService", "SettingsService"]

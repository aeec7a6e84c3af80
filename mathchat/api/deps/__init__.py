"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_chat_service,
    get_chat_store,
    get_completion_client,
    get_conversation_service,
    get_current_user_id,
    get_service_cache,
    get_settings_dependency,
    get_settings_service,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_chat_store",
    "get_completion_client",
    "get_conversation_service",
    "get_current_user_id",
    "get_service_cache",
    "get_settings_dependency",
    "get_settings_service",
]

"""
Settings service orchestrator.

Dependencies: mathchat.boundary.store
System role: Per-user settings use cases
"""

import logging

from mathchat.boundary.store.base import ChatStore
from mathchat.models.settings import UpdateSettingsRequest, UserSettings
from mathchat.observability.log_utils import safe_log_context

logger = logging.getLogger(__name__)

# Columns where an explicit null means "clear"; for the rest it means "leave as is".
_NULLABLE_FIELDS = frozenset({"openrouter_api_key"})


class SettingsService:
    """Settings service orchestrator."""

    def __init__(self, store: ChatStore) -> None:
        self.store = store

    async def get_settings(self, user_id: str) -> UserSettings:
        """Return the user's settings, creating the default row on first access."""
        existing = await self.store.get_user_settings(user_id)
        if existing is not None:
            return existing
        return await self.store.save_user_settings(user_id)

    async def update_settings(self, user_id: str, request: UpdateSettingsRequest) -> UserSettings:
        """
        Apply a partial update, creating the row if needed.

        Args:
            user_id: Caller identity
            request: Fields present in the request body

        Returns:
            UserSettings: Settings after the write
        """
        values = {
            key: value
            for key, value in request.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_FIELDS
        }
        logger.info(
            "Updating user settings",
            extra={"user_id": user_id, "fields": sorted(values), **safe_log_context(values)},
        )
        return await self.store.save_user_settings(user_id, **values)

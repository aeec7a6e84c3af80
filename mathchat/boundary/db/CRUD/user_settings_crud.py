"""
User settings CRUD operations.

Dependencies: sqlalchemy, mathchat.boundary.db.models
System role: Per-user settings persistence operations
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mathchat.boundary.db.CRUD.base_crud import BaseCRUD
from mathchat.boundary.db.models.user_settings_model import UserSettingsModel


class UserSettingsCRUD(BaseCRUD[UserSettingsModel]):
    """CRUD operations for UserSettingsModel."""

    def __init__(self) -> None:
        """Initialize UserSettingsCRUD with UserSettingsModel."""
        super().__init__(UserSettingsModel)

    async def get_by_user_id(
        self,
        session: AsyncSession,
        user_id: str,
    ) -> UserSettingsModel | None:
        """
        Retrieve the settings row of a user.

        Args:
            session: Async database session
            user_id: Owner identity

        Returns:
            UserSettingsModel if present, None otherwise
        """
        stmt = select(UserSettingsModel).where(UserSettingsModel.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        session: AsyncSession,
        user_id: str,
        **values: Any,
    ) -> UserSettingsModel:
        """
        Update the user's row, creating it with defaults if missing.

        Args:
            session: Async database session
            user_id: Owner identity
            **values: Columns to set

        Returns:
            UserSettingsModel after the write
        """
        existing = await self.get_by_user_id(session, user_id)
        if existing is None:
            return await self.create(session, user_id=user_id, **values)
        if not values:
            return existing
        for key, value in values.items():
            setattr(existing, key, value)
        await session.flush()
        await session.refresh(existing)
        return existing


user_settings_crud = UserSettingsCRUD()

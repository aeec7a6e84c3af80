"""
User settings API endpoints.

Routes:
- GET /settings - Current settings (defaults created on first access)
- PUT /settings - Partial update

Dependencies: mathchat.application.services.settings_service
System role: Settings HTTP API
"""

from fastapi import APIRouter, Depends

from mathchat.api.deps import get_current_user_id, get_settings_service
from mathchat.api.routers.error_handling import handle_chat_errors
from mathchat.application.services.settings_service import SettingsService
from mathchat.models.settings import UpdateSettingsRequest, UserSettings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=UserSettings)
@handle_chat_errors
async def get_settings(
    user_id: str = Depends(get_current_user_id),
    service: SettingsService = Depends(get_settings_service),
) -> UserSettings:
    """Get the caller's settings."""
    return await service.get_settings(user_id)


@router.put("", response_model=UserSettings)
@handle_chat_errors
async def update_settings(
    request: UpdateSettingsRequest,
    user_id: str = Depends(get_current_user_id),
    service: SettingsService = Depends(get_settings_service),
) -> UserSettings:
    """Update the fields present in the body."""
    return await service.update_settings(user_id, request)

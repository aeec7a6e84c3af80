"""API routers."""

from .conversations import router as conversations_router
from .health import router as health_router
from .messages import router as messages_router
from .render import router as render_router
from .settings import router as settings_router

__all__ = [
    "conversations_router",
    "health_router",
    "messages_router",
    "render_router",
    "settings_router",
]

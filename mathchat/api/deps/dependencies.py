"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators (the
record store, the upstream HTTP client, the database engine) live in the
ServiceCache; services are cheap and built per request.

Dependencies: mathchat.configs, mathchat.application, mathchat.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status

from mathchat.application.services import ChatService, ConversationService, SettingsService
from mathchat.boundary.openrouter.client import OpenRouterClient
from mathchat.boundary.store.base import ChatStore
from mathchat.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._engine = None
        self._chat_store = None
        self._completion_client = None

    @property
    def settings(self) -> Settings:
        """Get settings, resolved lazily so tests can swap the environment first."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def engine(self):
        """Get cached database engine (database backend only)."""
        if self._engine is None:
            from mathchat.boundary.db.connection import get_async_engine
            self._engine = get_async_engine()
        return self._engine

    @property
    def chat_store(self) -> ChatStore:
        """Get cached record store for the configured backend."""
        if self._chat_store is None:
            if self.settings.store_backend == "memory":
                from mathchat.boundary.store.memory_store import InMemoryChatStore
                self._chat_store = InMemoryChatStore()
            else:
                from mathchat.boundary.db.connection import get_async_session_factory
                from mathchat.boundary.store.sql_store import SqlChatStore
                self._chat_store = SqlChatStore(get_async_session_factory(self.engine))
        return self._chat_store

    @property
    def completion_client(self) -> OpenRouterClient:
        """Get cached OpenRouter client."""
        if self._completion_client is None:
            self._completion_client = OpenRouterClient(self.settings.openrouter)
        return self._completion_client

    async def aclose(self) -> None:
        """Release network and database resources, then clear."""
        if self._completion_client is not None:
            await self._completion_client.aclose()
        if self._engine is not None:
            await self._engine.dispose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._engine = None
        self._chat_store = None
        self._completion_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-ID"),
) -> str:
    """
    Resolve the caller's identity.

    Authentication happens upstream of this service; the gateway forwards
    the authenticated user id in the X-User-ID header.

    Raises:
        HTTPException(401): Header missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return x_user_id.strip()


def get_chat_store() -> ChatStore:
    """Get the configured record store."""
    return get_service_cache().chat_store


def get_completion_client() -> OpenRouterClient:
    """Get the shared OpenRouter client."""
    return get_service_cache().completion_client


def get_chat_service(
    store: ChatStore = Depends(get_chat_store),
    completions: OpenRouterClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings_dependency),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        store: Record store (injected)
        completions: Upstream client (injected)
        settings: Application settings (injected)

    Returns:
        ChatService: Chat service bound to the configured system prompt
    """
    return ChatService(
        store=store,
        completions=completions,
        system_prompt=settings.openrouter.system_prompt,
    )


def get_conversation_service(
    store: ChatStore = Depends(get_chat_store),
    completions: OpenRouterClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings_dependency),
) -> ConversationService:
    """Get conversation service instance."""
    return ConversationService(store=store, completions=completions, settings=settings.openrouter)


def get_settings_service(store: ChatStore = Depends(get_chat_store)) -> SettingsService:
    """Get settings service instance."""
    return SettingsService(store=store)

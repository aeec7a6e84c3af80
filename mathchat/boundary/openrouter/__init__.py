"""Upstream chat-completion API client."""

from mathchat.boundary.openrouter.client import OpenRouterClient

__all__ = ["OpenRouterClient"]

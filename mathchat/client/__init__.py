"""Streaming consumer for the chat API."""

from mathchat.client.chat_client import ChatStreamClient

__all__ = ["ChatStreamClient"]

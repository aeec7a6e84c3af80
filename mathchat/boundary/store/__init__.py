"""
Record store capability interface and its implementations.

Exports:
  - ChatStore: Abstract interface consumed by services and the stream relay
  - SqlChatStore: Persistent backend on async SQLAlchemy
  - InMemoryChatStore: Dict-backed backend for tests and local development
"""

from mathchat.boundary.store.base import ChatStore
from mathchat.boundary.store.memory_store import InMemoryChatStore
from mathchat.boundary.store.sql_store import SqlChatStore

__all__ = ["ChatStore", "InMemoryChatStore", "SqlChatStore"]

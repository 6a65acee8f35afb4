"""Repository layer for data access."""

from .base import BaseRepository
from .account_repository import AccountRepository
from .chat_message_repository import ChatMessageRepository

__all__ = [
    "BaseRepository",
    "AccountRepository",
    "ChatMessageRepository",
]

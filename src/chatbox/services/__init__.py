"""Service layer for business logic."""

from .auth_service import AuthService
from .account_service import AccountService
from .chat_service import ChatService

__all__ = [
    "AuthService",
    "AccountService",
    "ChatService",
]

"""Dependency injection for FastAPI endpoints.

Everything stateful (settings, session factory, completion client) lives on
``app.state`` and is created by ``server.create_app``.
"""

from typing import AsyncGenerator, Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from .completion_client import CompletionClient
from .config import Settings
from .core.security import Role, TokenPayload, authorize
from .database import Account, ChatMessage
from .repositories import AccountRepository, ChatMessageRepository
from .services import AccountService, AuthService, ChatService


# Security scheme; missing credentials are reported by the access guard itself
security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Application settings."""
    return request.app.state.settings


def get_completion_client(request: Request) -> CompletionClient:
    """Shared completion API client."""
    return request.app.state.completion_client


# Database session dependency
async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with request.app.state.session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Repository dependencies
async def get_account_repository(
    session: AsyncSession = Depends(get_session)
) -> AccountRepository:
    """Get AccountRepository instance."""
    return AccountRepository(Account, session)


async def get_chat_message_repository(
    session: AsyncSession = Depends(get_session)
) -> ChatMessageRepository:
    """Get ChatMessageRepository instance."""
    return ChatMessageRepository(ChatMessage, session)


# Service dependencies
async def get_auth_service(
    account_repo: AccountRepository = Depends(get_account_repository),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """Get AuthService instance."""
    return AuthService(account_repo, settings)


async def get_account_service(
    account_repo: AccountRepository = Depends(get_account_repository),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    """Get AccountService instance."""
    return AccountService(account_repo, bcrypt_rounds=settings.BCRYPT_ROUNDS)


async def get_chat_service(
    message_repo: ChatMessageRepository = Depends(get_chat_message_repository),
    completion_client: CompletionClient = Depends(get_completion_client),
) -> ChatService:
    """Get ChatService instance."""
    return ChatService(message_repo, completion_client)


# Authentication dependencies
def require_role(role: Role) -> Callable[..., TokenPayload]:
    """
    Build the access guard for operations that need ``role``.

    Raises (from the returned dependency):
        UnauthenticatedError: Token missing, malformed, expired or forged
        ForbiddenError: Token role below ``role``
    """

    async def guard(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        settings: Settings = Depends(get_settings),
    ) -> TokenPayload:
        token = credentials.credentials if credentials else None
        return authorize(
            token,
            secret=settings.JWT_SECRET,
            required_role=role,
            algorithm=settings.JWT_ALGORITHM,
        )

    return guard


require_user = require_role(Role.USER)
require_admin = require_role(Role.ADMIN)

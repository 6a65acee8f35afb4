"""Account repository with authentication queries."""

from typing import List, Optional

from sqlalchemy import select

from .base import BaseRepository
from ..database import Account


class AccountRepository(BaseRepository[Account]):
    """Repository for Account operations."""

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address."""
        result = await self.session.execute(
            select(Account).where(Account.email == email)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if email is already registered."""
        result = await self.session.execute(
            select(Account.id).where(Account.email == email)
        )
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> List[Account]:
        """All accounts, oldest first."""
        result = await self.session.execute(
            select(Account).order_by(Account.created_at, Account.email)
        )
        return list(result.scalars().all())

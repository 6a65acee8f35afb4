"""Account management: signup and admin CRUD over the credential store."""

from typing import Any, List, Optional
from uuid import UUID

from loguru import logger
from sqlalchemy.exc import IntegrityError

from ..core.exceptions import AccountNotFoundError, EmailAlreadyExistsError
from ..core.security import Role, hash_password
from ..database import Account
from ..repositories import AccountRepository


def _parse_id(account_id: Any) -> Optional[UUID]:
    if isinstance(account_id, UUID):
        return account_id
    try:
        return UUID(str(account_id))
    except ValueError:
        return None


class AccountService:
    """Account operations. Role checks happen at the HTTP boundary."""

    def __init__(self, account_repo: AccountRepository, bcrypt_rounds: int = 10):
        self.account_repo = account_repo
        self.bcrypt_rounds = bcrypt_rounds

    async def signup(self, username: str, email: str, password: str) -> Account:
        """Register a new ``user`` account."""
        return await self.create(username, email, password, role=Role.USER)

    async def create(
        self,
        username: str,
        email: str,
        password: str,
        role: Role = Role.USER,
    ) -> Account:
        """
        Create an account with a hashed password.

        The pre-check is best effort; the unique index on ``email`` settles
        concurrent signups.

        Raises:
            EmailAlreadyExistsError: Email already registered
        """
        if await self.account_repo.email_exists(email):
            raise EmailAlreadyExistsError()

        try:
            account = await self.account_repo.create(
                username=username,
                email=email,
                password_hash=hash_password(password, rounds=self.bcrypt_rounds),
                role=Role(role).value,
            )
            await self.account_repo.commit()
        except IntegrityError:
            await self.account_repo.rollback()
            raise EmailAlreadyExistsError()

        logger.info(f"Added {account.role} account {account.id} <{account.email}>")
        return account

    async def list_accounts(self) -> List[Account]:
        """All accounts, oldest first."""
        return await self.account_repo.list_all()

    async def get(self, account_id: Any) -> Account:
        """
        Fetch one account.

        Raises:
            AccountNotFoundError: No account with that id
        """
        parsed = _parse_id(account_id)
        account = await self.account_repo.get(parsed) if parsed else None
        if not account:
            raise AccountNotFoundError()
        return account

    async def edit(self, account_id: Any, **fields) -> Account:
        """
        Overwrite the given fields of an account.

        ``password`` is re-hashed; ``id`` cannot be changed.

        Raises:
            AccountNotFoundError: No account with that id
            EmailAlreadyExistsError: New email belongs to another account
        """
        account = await self.get(account_id)

        updates = {k: v for k, v in fields.items() if k != "id"}

        if "password" in updates:
            updates["password_hash"] = hash_password(
                updates.pop("password"), rounds=self.bcrypt_rounds
            )
        if "role" in updates:
            updates["role"] = Role(updates["role"]).value
        if "email" in updates and updates["email"] != account.email:
            if await self.account_repo.email_exists(updates["email"]):
                raise EmailAlreadyExistsError()

        if not updates:
            return account

        try:
            updated = await self.account_repo.update(account.id, **updates)
            await self.account_repo.commit()
        except IntegrityError:
            await self.account_repo.rollback()
            raise EmailAlreadyExistsError()

        logger.info(f"Edited account {account.id}: {sorted(updates)}")
        return updated

    async def delete(self, account_id: Any) -> None:
        """
        Remove an account.

        Raises:
            AccountNotFoundError: No account with that id
        """
        account = await self.get(account_id)
        await self.account_repo.delete(account.id)
        await self.account_repo.commit()
        logger.info(f"Deleted account {account.id} <{account.email}>")

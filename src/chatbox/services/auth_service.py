"""Authentication service: credential check and session token issuance."""

from datetime import timedelta
from typing import Tuple

from loguru import logger

from ..config import Settings
from ..core.exceptions import InvalidCredentialsError
from ..core.security import create_session_token, verify_password
from ..database import Account
from ..repositories import AccountRepository


class AuthService:
    """Issues stateless session tokens for valid credentials."""

    def __init__(self, account_repo: AccountRepository, settings: Settings):
        self.account_repo = account_repo
        self.settings = settings

    async def login(self, email: str, password: str) -> Tuple[str, Account]:
        """
        Check credentials and issue a session token.

        Unknown email and wrong password fail identically.

        Returns: (token, account)
        """
        account = await self.account_repo.get_by_email(email)

        if not account or not verify_password(password, account.password_hash):
            logger.info(f"Failed login for {email}")
            raise InvalidCredentialsError()

        token = create_session_token(
            account_id=account.id,
            role=account.role,
            secret=self.settings.JWT_SECRET,
            algorithm=self.settings.JWT_ALGORITHM,
            lifetime=timedelta(hours=self.settings.ACCESS_TOKEN_EXPIRE_HOURS),
        )

        logger.info(f"Issued session token for account {account.id} ({account.role})")
        return token, account

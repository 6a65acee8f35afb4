"""Security utilities for authentication."""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional
from uuid import UUID

import bcrypt
import jwt
from pydantic import BaseModel, ValidationError

from .exceptions import ForbiddenError, UnauthenticatedError


DEFAULT_ALGORITHM = "HS256"
DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)

# bcrypt refuses longer input
MAX_PASSWORD_BYTES = 72


class Role(str, Enum):
    """Account roles, lowest privilege first."""
    USER = "user"
    ADMIN = "admin"


# An account satisfies a requirement when its rank is at least the required rank
ROLE_RANK = {
    Role.USER: 0,
    Role.ADMIN: 1,
}


class TokenPayload(BaseModel):
    """JWT token payload."""
    sub: UUID  # Account ID
    role: Role
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp


def password_too_long(password: str) -> bool:
    """True when ``password`` exceeds what bcrypt accepts."""
    return len(password.encode('utf-8')) > MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash password using bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        # Malformed stored hash or over-long password
        return False


def create_session_token(
    account_id: UUID,
    role: str,
    secret: str,
    algorithm: str = DEFAULT_ALGORITHM,
    lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
    issued_at: Optional[datetime] = None,
) -> str:
    """
    Create a signed session token.

    Args:
        account_id: Account UUID
        role: Account role (user, admin)
        secret: Signing key
        algorithm: JWT signing algorithm
        lifetime: How long the token stays valid
        issued_at: Issue time, defaults to now

    Returns:
        Encoded JWT token
    """
    now = issued_at or datetime.now(timezone.utc)
    exp = now + lifetime

    payload = {
        "sub": str(account_id),
        "role": Role(role).value,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }

    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_session_token(
    token: str,
    secret: str,
    algorithm: str = DEFAULT_ALGORITHM,
) -> TokenPayload:
    """
    Decode and verify a session token.

    Raises:
        UnauthenticatedError: Token malformed, expired, or signed with another key
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "role", "exp", "iat"]},
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise UnauthenticatedError("Token expired")
    except (jwt.InvalidTokenError, ValidationError):
        raise UnauthenticatedError("Invalid token")


def authorize(
    token: Optional[str],
    secret: str,
    required_role: Role,
    algorithm: str = DEFAULT_ALGORITHM,
) -> TokenPayload:
    """
    Validate a session token against an operation's required role.

    Pure function of the token, key and required role; no store lookup.

    Raises:
        UnauthenticatedError: Token missing or invalid
        ForbiddenError: Token valid but its role is below ``required_role``
    """
    if not token:
        raise UnauthenticatedError()

    payload = decode_session_token(token, secret, algorithm)

    if ROLE_RANK[payload.role] < ROLE_RANK[required_role]:
        raise ForbiddenError()

    return payload

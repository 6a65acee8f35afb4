"""Account schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from ..core.security import MAX_PASSWORD_BYTES, Role, password_too_long


def _check_password_bytes(v: Optional[str]) -> Optional[str]:
    if v is not None and password_too_long(v):
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


class SignupRequest(BaseModel):
    """Self-service signup."""
    username: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        """bcrypt limits passwords in bytes, not characters."""
        return _check_password_bytes(v)


class AccountCreate(SignupRequest):
    """Admin account creation."""
    role: Role = Role.USER


class AccountUpdate(BaseModel):
    """Partial account update. Unset fields are left untouched."""
    username: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=1)
    role: Optional[Role] = None
    messages: Optional[str] = None

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return _check_password_bytes(v)


class AccountResponse(BaseModel):
    """Account as returned to clients; never includes the password hash."""
    id: UUID
    username: str
    email: str
    role: str
    messages: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AccountMessageResponse(BaseModel):
    """Confirmation with the affected account."""
    message: str
    user_data: AccountResponse = Field(alias="userData")

    class Config:
        populate_by_name = True


class AccountListResponse(BaseModel):
    """All accounts."""
    all_users: List[AccountResponse] = Field(alias="allUsers")

    class Config:
        populate_by_name = True


class MessageResponse(BaseModel):
    """Plain confirmation."""
    message: str


class ProfileResponse(BaseModel):
    """Public profile of the calling account."""
    username: str
    email: str

    class Config:
        from_attributes = True

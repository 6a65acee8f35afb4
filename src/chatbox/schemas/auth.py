"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """Login request."""
    email: EmailStr
    password: str


class AdminTokenResponse(BaseModel):
    """Session token issued by the admin login route."""
    admin_token: str = Field(alias="adminToken")

    class Config:
        populate_by_name = True


class TokenResponse(BaseModel):
    """Session token issued by the user login route."""
    token: str

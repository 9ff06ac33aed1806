"""Pydantic schemas for authentication API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request for account registration."""

    email: EmailStr
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Password (6-128 characters)",
    )


class LoginRequest(BaseModel):
    """Request for login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class AccountResponse(BaseModel):
    """Public view of an account. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    subscription_type: str
    created_at: datetime


class AuthResponse(BaseModel):
    """Session token plus the public account view."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")
    user: AccountResponse

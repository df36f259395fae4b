"""Request/response schemas for registration, login and user records."""

from datetime import datetime

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """New account details. Presence and length are checked by the user service."""

    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Email address (unique)")
    password: str | None = Field(default=None, description="Password (6 chars to 72 bytes)")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Email address")
    password: str | None = Field(default=None, description="Password")


class UserPublic(BaseModel):
    """User record as returned to clients (no password hash)."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CurrentUser(UserPublic):
    """Authenticated user resolved from the store by the auth gate."""


class AuthResponse(BaseModel):
    """Returned by register and login: the user plus a bearer token."""

    message: str
    user: UserPublic
    token: str = Field(..., description="JWT; send as Authorization: Bearer <token>")


class UserResponse(BaseModel):
    """Single user wrapper."""

    user: UserPublic


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserPublic]

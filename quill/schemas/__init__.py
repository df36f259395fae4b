"""Pydantic request/response schemas."""

from quill.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserPublic,
    UserResponse,
    UsersListResponse,
)
from quill.schemas.health import HealthResponse
from quill.schemas.posts import (
    AuthorSummary,
    MessageResponse,
    Pagination,
    PostListResponse,
    PostMutationResponse,
    PostOut,
    PostResponse,
    PostWrite,
)
from quill.schemas.users import ProfileUpdateRequest, ProfileUpdateResponse

__all__ = [
    "AuthResponse",
    "AuthorSummary",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "PostListResponse",
    "PostMutationResponse",
    "PostOut",
    "PostResponse",
    "PostWrite",
    "ProfileUpdateRequest",
    "ProfileUpdateResponse",
    "RegisterRequest",
    "UserPublic",
    "UserResponse",
    "UsersListResponse",
]

"""Request/response schemas for the current user's profile."""

from pydantic import BaseModel, Field

from quill.schemas.auth import UserPublic


class ProfileUpdateRequest(BaseModel):
    """Partial profile update. A new password requires the current one."""

    model_config = {"populate_by_name": True}

    name: str | None = None
    email: str | None = None
    current_password: str | None = Field(default=None, alias="currentPassword")
    new_password: str | None = Field(default=None, alias="newPassword")


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserPublic

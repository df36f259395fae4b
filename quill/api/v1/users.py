"""User endpoints: own profile (read/update) and the admin user list."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from quill.api.v1.deps import get_current_user, require_admin, to_http_error
from quill.core.database import get_db
from quill.core.errors import ValidationFailedError
from quill.schemas.auth import CurrentUser, UserPublic, UserResponse, UsersListResponse
from quill.schemas.users import ProfileUpdateRequest, ProfileUpdateResponse
from quill.services.users import get_user_by_id, list_users, update_profile

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def get_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(
        users=[UserPublic.model_validate(u) for u in list_users(db)]
    )


@router.get("/profile", response_model=UserResponse)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    return UserResponse(user=current_user)


@router.put("/profile", response_model=ProfileUpdateResponse)
def put_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileUpdateResponse:
    """
    Update name and/or email, and optionally change the password.

    Changing the password requires currentPassword. Tokens already issued keep
    their embedded email until they expire; authorization never relies on it.
    """
    user = get_user_by_id(db, current_user.id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    try:
        user = update_profile(
            db,
            user,
            name=body.name,
            email=body.email,
            current_password=body.current_password,
            new_password=body.new_password,
        )
    except ValidationFailedError as e:
        raise to_http_error(e) from e
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=UserPublic.model_validate(user),
    )

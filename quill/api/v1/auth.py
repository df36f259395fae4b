"""Registration, login and current-user endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from quill.api.v1.deps import get_current_user, to_http_error
from quill.core.database import get_db
from quill.core.errors import ValidationFailedError
from quill.core.security import TokenService, get_token_service
from quill.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserPublic,
    UserResponse,
)
from quill.services.users import authenticate, create_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Create a user account with role 'user' and return it with a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        user = create_user(db, body.name, body.email, body.password)
    except ValidationFailedError as e:
        raise to_http_error(e) from e
    return AuthResponse(
        message="User registered successfully",
        user=UserPublic.model_validate(user),
        token=tokens.issue(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """Authenticate with email and password; returns the user and a JWT."""
    if not body.email or not body.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )
    user = authenticate(db, body.email, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    logger.info("User id=%s logged in", user.id)
    return AuthResponse(
        message="Login successful",
        user=UserPublic.model_validate(user),
        token=tokens.issue(user),
    )


@router.get("/me", response_model=UserResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    """Return the user the bearer token resolves to."""
    return UserResponse(user=current_user)

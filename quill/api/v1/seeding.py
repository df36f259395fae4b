"""Dev-only endpoints for creating an admin and seeding sample users.

Mounted only when TEST_ENDPOINTS_ENABLED is true and APP_ENV is dev.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from quill.api.v1.deps import to_http_error
from quill.core.database import get_db
from quill.core.errors import ValidationFailedError
from quill.core.security import TokenService, get_token_service
from quill.schemas.auth import AuthResponse, RegisterRequest, UserPublic
from quill.schemas.seed import (
    BulkRegisterResponse,
    SampleUserSummary,
    SampleUsersResponse,
)
from quill.services.seed import load_sample_users, register_sample_users
from quill.services.users import create_user

router = APIRouter()


@router.post("/create-admin", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def create_admin(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    try:
        user = create_user(db, body.name, body.email, body.password, role="admin")
    except ValidationFailedError as e:
        raise to_http_error(e) from e
    return AuthResponse(
        message="Admin user created successfully",
        user=UserPublic.model_validate(user),
        token=tokens.issue(user),
    )


@router.get("/register-users", response_model=SampleUsersResponse)
def get_sample_users() -> SampleUsersResponse:
    """List the bundled sample users (passwords omitted)."""
    samples = load_sample_users()
    return SampleUsersResponse(
        message="Test users data",
        count=len(samples),
        users=[SampleUserSummary(name=s.name, email=s.email) for s in samples],
    )


@router.post("/register-users", response_model=BulkRegisterResponse)
def post_sample_users(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> BulkRegisterResponse:
    """Register every bundled sample user; existing emails are reported as failures."""
    results = register_sample_users(db, tokens, load_sample_users())
    return BulkRegisterResponse(
        message=(
            f"Bulk registration completed. {len(results.successful)} users registered "
            f"successfully, {len(results.failed)} failed."
        ),
        results=results,
    )

"""Auth gate dependencies (get_current_user, require_role) and error mapping."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from quill.core.database import get_db
from quill.core.errors import (
    NotFoundError,
    PermissionDeniedError,
    QuillError,
    ValidationFailedError,
)
from quill.core.security import InvalidToken, TokenService, get_token_service
from quill.models import MAX_ID, ROLES
from quill.schemas.auth import CurrentUser
from quill.services.users import get_public_user

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

AUTHENTICATION_REQUIRED = "Authentication required"
INSUFFICIENT_PERMISSIONS = "Insufficient permissions"


def _unauthenticated() -> HTTPException:
    # One response for every failure cause so clients cannot tell them apart.
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=AUTHENTICATION_REQUIRED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT naming an existing user.

    The user is re-read from the database on every request; role checks use
    that record, not the role embedded in the token. Raises 401 otherwise.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthenticated()
    claims = tokens.verify(credentials.credentials)
    if isinstance(claims, InvalidToken):
        raise _unauthenticated()
    try:
        user_id = int(claims.user_id)
    except (TypeError, ValueError):
        logger.debug("Token userId is not an integer: %r", claims.user_id)
        raise _unauthenticated()
    if not 1 <= user_id <= MAX_ID:
        logger.debug("Token userId out of range: %s", user_id)
        raise _unauthenticated()
    user = get_public_user(db, user_id)
    if user is None:
        logger.info("Token for missing user id=%s rejected", user_id)
        raise _unauthenticated()
    return CurrentUser.model_validate(user)


def require_role(role: str) -> Callable[[CurrentUser], CurrentUser]:
    """Build a dependency that admits users with the given role, and admins always."""
    if role not in ROLES:
        raise ValueError(f"Unknown role {role!r}; expected one of {list(ROLES)}")

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role != role and current_user.role != "admin":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=INSUFFICIENT_PERMISSIONS,
            )
        return current_user

    return dependency


require_admin = require_role("admin")


def to_http_error(exc: QuillError) -> HTTPException:
    """Map a domain error raised by a service to the matching HTTP error."""
    if isinstance(exc, ValidationFailedError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, PermissionDeniedError):
        code = status.HTTP_403_FORBIDDEN
    else:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return HTTPException(status_code=code, detail=exc.message)

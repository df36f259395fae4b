"""User service: registration, credential checks and profile updates."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, defer

from quill.core.errors import EmailAlreadyRegisteredError, ValidationFailedError
from quill.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LEN,
    hash_password,
    verify_password,
)
from quill.models.user import ROLES, User

logger = logging.getLogger(__name__)


def _check_name(name: str) -> None:
    if len(name) > NAME_MAX_LEN:
        raise ValidationFailedError(f"Name cannot exceed {NAME_MAX_LEN} characters")


def _check_email(email: str) -> None:
    if len(email) > EMAIL_MAX_LEN:
        raise ValidationFailedError(f"Email cannot exceed {EMAIL_MAX_LEN} characters")


def _check_password(password: str, label: str = "Password") -> None:
    if len(password) < PASSWORD_MIN_LEN:
        raise ValidationFailedError(
            f"{label} must be at least {PASSWORD_MIN_LEN} characters"
        )
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationFailedError(
            f"{label} cannot exceed {PASSWORD_MAX_BYTES} bytes"
        )


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_public_user(db: Session, user_id: int) -> User | None:
    """Load a user for the auth gate without the password_hash column."""
    return (
        db.query(User)
        .options(defer(User.password_hash))
        .filter(User.id == user_id)
        .first()
    )


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def create_user(
    db: Session,
    name: str | None,
    email: str | None,
    password: str | None,
    role: str = "user",
) -> User:
    """
    Validate and insert a new user with a bcrypt password hash.

    The email pre-check gives a friendly error in the common case; the unique
    index on users.email decides concurrent registrations, and its violation
    is reported as the same EmailAlreadyRegisteredError.
    """
    name = (name or "").strip()
    email = (email or "").strip()
    if not name or not email or not password:
        raise ValidationFailedError("Name, email, and password are required")
    _check_name(name)
    _check_email(email)
    _check_password(password)
    if role not in ROLES:
        raise ValidationFailedError(f"Role must be one of {list(ROLES)}")

    if get_user_by_email(db, email) is not None:
        raise EmailAlreadyRegisteredError("User with this email already exists")

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise EmailAlreadyRegisteredError("User with this email already exists") from e
    db.refresh(user)
    logger.info("Registered user id=%s role=%s", user.id, user.role)
    return user


def authenticate(db: Session, email: str | None, password: str | None) -> User | None:
    """Return the user when email and password match, else None."""
    email = (email or "").strip()
    if not email or not password:
        return None
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for email=%s", email)
        return None
    return user


def update_profile(
    db: Session,
    user: User,
    name: str | None = None,
    email: str | None = None,
    current_password: str | None = None,
    new_password: str | None = None,
) -> User:
    """
    Apply a partial profile update. Empty values are ignored.

    All checks run before any field is changed, so a rejected update leaves
    the record untouched.
    """
    name = (name or "").strip()
    email = (email or "").strip()
    if name:
        _check_name(name)
    if email:
        _check_email(email)
        taken = (
            db.query(User)
            .filter(User.email == email, User.id != user.id)
            .first()
        )
        if taken is not None:
            raise EmailAlreadyRegisteredError("Email is already taken")
    if new_password:
        if not current_password:
            raise ValidationFailedError(
                "Current password is required to change password"
            )
        if not verify_password(current_password, user.password_hash):
            raise ValidationFailedError("Current password is incorrect")
        _check_password(new_password, label="New password")

    if name:
        user.name = name
    if email:
        user.email = email
    if new_password:
        user.password_hash = hash_password(new_password)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise EmailAlreadyRegisteredError("Email is already taken") from e
    db.refresh(user)
    logger.info("Updated profile for user id=%s", user.id)
    return user

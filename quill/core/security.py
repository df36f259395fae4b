"""Password hashing and JWT issuance/verification for authentication."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Literal, Protocol

import bcrypt
import jwt
from fastapi import Request

from quill.core.config import Settings, get_settings
from quill.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Min/max lengths for name, email and password validation.
NAME_MAX_LEN = 100
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
# bcrypt only hashes the first 72 bytes; longer passwords are rejected, not truncated.
PASSWORD_MAX_BYTES = 72

DEFAULT_TOKEN_LIFETIME = timedelta(days=7)

InvalidTokenReason = Literal["malformed", "bad_signature", "expired", "missing_claims"]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password exceeds {PASSWORD_MAX_BYTES} bytes")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenSubject(Protocol):
    """Anything with the fields a token is issued for (ORM User, CurrentUser)."""

    id: Any
    email: str
    role: str


@dataclass(frozen=True)
class TokenClaims:
    """Claims recovered from a valid token."""

    user_id: str
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime

    def as_payload(self) -> dict[str, str]:
        return {"userId": self.user_id, "email": self.email, "role": self.role}


@dataclass(frozen=True)
class InvalidToken:
    """Verification failure. The reason is for logs only, never for clients."""

    reason: InvalidTokenReason


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issue and verify signed bearer tokens carrying userId, email and role."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = DEFAULT_TOKEN_LIFETIME,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret or not secret.strip():
            raise ConfigurationError("JWT signing secret must be configured")
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in
        self._clock = clock

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def issue(self, user: TokenSubject) -> str:
        """Return a signed token for user, valid for expires_in from now."""
        now = self._clock()
        payload: dict[str, Any] = {
            "userId": str(user.id),
            "email": user.email,
            "role": user.role,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims | InvalidToken:
        """
        Check signature and expiry and return the embedded claims.

        Never raises; any failure yields InvalidToken with a tagged reason.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            return self._reject("expired")
        except jwt.InvalidSignatureError:
            return self._reject("bad_signature")
        except jwt.MissingRequiredClaimError:
            return self._reject("missing_claims")
        except jwt.PyJWTError:
            return self._reject("malformed")

        user_id = payload.get("userId")
        email = payload.get("email")
        role = payload.get("role")
        if not user_id or not isinstance(email, str) or not isinstance(role, str):
            return self._reject("missing_claims")
        return TokenClaims(
            user_id=str(user_id),
            email=email,
            role=role,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )

    @staticmethod
    def _reject(reason: InvalidTokenReason) -> InvalidToken:
        logger.debug("Rejected bearer token: reason=%s", reason)
        return InvalidToken(reason=reason)


def build_token_service(settings: Settings) -> TokenService:
    """Build a TokenService from the JWT settings."""
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expires_in=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )


def get_token_service(request: Request) -> TokenService:
    """Dependency: the TokenService the running app was built with."""
    return request.app.state.token_service

"""Domain exceptions raised by the core and service layers.

Handlers translate these into HTTP responses; services never build responses.
"""


class QuillError(Exception):
    """Base class for application errors that carry a client-safe message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(QuillError):
    """Raised when required configuration (e.g. the JWT signing secret) is missing."""


class ValidationFailedError(QuillError):
    """Raised when request data fails a field-level check (HTTP 400)."""


class EmailAlreadyRegisteredError(ValidationFailedError):
    """Raised when an email is already used by another account.

    Covers both the application pre-check and a unique index violation
    from the database, so concurrent registrations surface the same error.
    """


class NotFoundError(QuillError):
    """Raised when a requested record does not exist (HTTP 404)."""


class PermissionDeniedError(QuillError):
    """Raised when an authenticated user may not act on a resource (HTTP 403)."""

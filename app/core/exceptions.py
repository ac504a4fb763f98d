"""
Service-level error hierarchy.

Every error carries an ``ErrorKind`` tag. Services raise these, and the API
layer maps the tag to a status code and a structured error body, so callers
never need to inspect exception types or messages.
"""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    VALIDATION = "VALIDATION"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    INTERNAL = "INTERNAL"


class ServiceError(Exception):
    """Base class for all errors raised by the service layer."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ResourceNotFoundError(ServiceError):
    """A referenced owner, car, policy or claim does not exist."""
    kind = ErrorKind.NOT_FOUND


class ConflictError(ServiceError):
    """A unique field (VIN, owner email) is already taken by another record."""
    kind = ErrorKind.CONFLICT


class AlreadyExistsError(ServiceError):
    """Registration collided with an existing username or email."""
    kind = ErrorKind.ALREADY_EXISTS


class ValidationError(ServiceError):
    """Malformed input or a violated business rule."""
    kind = ErrorKind.VALIDATION


class AuthenticationFailedError(ServiceError):
    """Bad credentials. Unknown user and wrong password are not distinguished."""
    kind = ErrorKind.AUTHENTICATION_FAILED

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)


class NotAuthenticatedError(ServiceError):
    """The request carries no established identity."""
    kind = ErrorKind.NOT_AUTHENTICATED

    def __init__(self, message: str = "Authentication is required to access this resource") -> None:
        super().__init__(message)

"""Domain exceptions."""

from typing import Any

from actiongate.domain.value_objects.error_kind import ErrorKind


class ActionGateError(Exception):
    """Base exception for ActionGate.

    Every subclass maps to one caller-facing error kind and HTTP status. The
    message is what the caller sees; anything sensitive belongs in logs.
    """

    error_code: ErrorKind = ErrorKind.INTERNAL_ERROR
    http_status: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class MethodNotAllowed(ActionGateError):
    """Request used an HTTP method other than POST."""

    error_code = ErrorKind.METHOD_NOT_ALLOWED
    http_status = 405
    default_message = "Method not allowed, only POST is accepted"


class ValidationError(ActionGateError):
    """Validation failed for input data. Details map field -> messages."""

    error_code = ErrorKind.VALIDATION_ERROR
    http_status = 422
    default_message = "Request validation failed"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(details={field: [message]})


class Unauthorized(ActionGateError):
    """Missing, unknown, revoked or expired credential."""

    error_code = ErrorKind.UNAUTHORIZED
    http_status = 401
    default_message = "Invalid or missing bearer token"


class ActionNotFound(ActionGateError):
    """Action is unknown or disabled."""

    error_code = ErrorKind.ACTION_NOT_FOUND
    http_status = 404
    default_message = "Action not found"


class InsufficientPermissions(ActionGateError):
    """Caller lacks permissions required by the action.

    ``missing`` is kept on the exception for audit logging and is never
    copied into the response body.
    """

    error_code = ErrorKind.INSUFFICIENT_PERMISSIONS
    http_status = 403
    default_message = "Insufficient permissions to execute this action"

    def __init__(self, missing: frozenset[str] | None = None, message: str | None = None) -> None:
        super().__init__(message)
        self.missing = missing or frozenset()


class InternalError(ActionGateError):
    """Unexpected failure; message is always generic."""


class InvalidIdentity(ActionGateError):
    """Credential issuance referenced an identity that does not exist."""

    error_code = ErrorKind.VALIDATION_ERROR
    http_status = 422
    default_message = "Identity does not exist"

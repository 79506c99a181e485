"""Caller-facing error codes."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Error codes carried in the error envelope."""

    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    ACTION_NOT_FOUND = "ACTION_NOT_FOUND"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    INTERNAL_ERROR = "INTERNAL_ERROR"

"""Audit sink that writes redacted events to the standard logging system."""

import logging
from collections.abc import Iterable
from typing import Any

from actiongate.domain.entities import AuditEvent

REDACTED = "[REDACTED]"

SENSITIVE_FIELDS = frozenset(
    {
        "password",
        "password_confirmation",
        "current_password",
        "new_password",
        "new_password_confirmation",
        "token",
        "secret",
        "api_key",
        "private_key",
        "access_token",
        "refresh_token",
        "authorization",
        "credit_card",
        "ssn",
    }
)


def redact(value: Any, sensitive: frozenset[str] = SENSITIVE_FIELDS) -> Any:
    """Copy of ``value`` with sensitive keys masked at any depth."""
    if isinstance(value, dict):
        return {
            k: REDACTED if isinstance(k, str) and k.lower() in sensitive else redact(v, sensitive)
            for k, v in value.items()
        }
    if isinstance(value, list | tuple):
        return [redact(v, sensitive) for v in value]
    return value


class LoggingAuditSink:
    """Emits each audit event as one structured log record."""

    def __init__(
        self,
        logger_name: str = "actiongate.audit",
        extra_sensitive_fields: Iterable[str] = (),
    ) -> None:
        self._logger = logging.getLogger(logger_name)
        self._sensitive = SENSITIVE_FIELDS | {f.lower() for f in extra_sensitive_fields}

    def emit(self, event: AuditEvent) -> None:
        record = self.to_record(event)
        level = logging.INFO
        if event.event == "permission_denied" or (event.status_code or 0) >= 400:
            level = logging.WARNING
        if (event.status_code or 0) >= 500:
            level = logging.ERROR
        self._logger.log(level, event.event, extra={"audit": record})

    def to_record(self, event: AuditEvent) -> dict[str, Any]:
        """Serializable, redacted view of an event."""
        return {
            "event": event.event,
            "request_id": event.request_id,
            "timestamp": event.timestamp.isoformat(),
            "action_type": event.action_type,
            "identity_id": str(event.identity_id) if event.identity_id else None,
            "outcome": event.outcome,
            "status_code": event.status_code,
            "latency_ms": event.latency_ms,
            "details": redact(event.details, self._sensitive),
            "request_data": redact(event.request_data, self._sensitive),
        }

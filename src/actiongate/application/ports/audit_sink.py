"""Audit sink port - structured observability events."""

from typing import Protocol

from actiongate.domain.entities import AuditEvent


class AuditSink(Protocol):
    """Accepts audit events. Implementations redact sensitive fields."""

    def emit(self, event: AuditEvent) -> None: ...

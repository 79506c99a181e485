"""Audit adapters."""

from actiongate.infrastructure.audit.logging_sink import LoggingAuditSink, redact

__all__ = ["LoggingAuditSink", "redact"]

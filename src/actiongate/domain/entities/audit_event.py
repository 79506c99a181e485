"""Audit event - structured record handed to the audit sink."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass
class AuditEvent:
    """One observable outcome: a finished request or a permission denial."""

    event: str
    request_id: str
    timestamp: datetime
    action_type: str | None = None
    identity_id: UUID | None = None
    outcome: str | None = None
    status_code: int | None = None
    latency_ms: float | None = None
    details: dict[str, Any] = field(default_factory=dict)
    request_data: dict[str, Any] | None = None

"""Domain entities."""

from actiongate.domain.entities.audit_event import AuditEvent
from actiongate.domain.entities.credential import Credential
from actiongate.domain.entities.identity import Identity
from actiongate.domain.entities.permission_override import PermissionOverride

__all__ = [
    "AuditEvent",
    "Credential",
    "Identity",
    "PermissionOverride",
]

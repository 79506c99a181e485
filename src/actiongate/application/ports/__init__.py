"""Application ports - interfaces for external adapters."""

from actiongate.application.ports.audit_sink import AuditSink
from actiongate.application.ports.permission_checker import PermissionChecker
from actiongate.application.ports.token_service import Authenticator
from actiongate.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AuditSink",
    "Authenticator",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]

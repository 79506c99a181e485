"""Permission checking."""

from actiongate.infrastructure.permission.permission_checker import (
    OverridePermissionChecker,
    PermissionDecision,
)

__all__ = ["OverridePermissionChecker", "PermissionDecision"]

"""Permission override entity - dynamic per-action permission requirement."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PermissionOverride:
    """When active, replaces the action's declared required permissions."""

    action_type: str
    permissions: list[str]
    created_at: datetime
    updated_at: datetime
    is_active: bool = True
    description: str | None = None

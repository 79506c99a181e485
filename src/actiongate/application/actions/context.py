"""Dependencies handed to action handlers at construction time."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from actiongate.config import Settings
    from actiongate.infrastructure.actions.registry import ActionRegistry
    from actiongate.infrastructure.auth.passwords import PasswordHasher
    from actiongate.infrastructure.auth.token_service import TokenService
    from actiongate.infrastructure.permission.permission_checker import (
        OverridePermissionChecker,
    )


@dataclass(frozen=True)
class HandlerContext:
    """Shared collaborators. The registry fills in ``registry`` with itself."""

    unit_of_work_factory: Any
    settings: "Settings"
    tokens: "TokenService | None" = None
    permissions: "OverridePermissionChecker | None" = None
    passwords: "PasswordHasher | None" = None
    registry: "ActionRegistry | None" = None

"""permission.list - show permission overrides."""

from pydantic import BaseModel

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.domain.entities import PermissionOverride
from actiongate.domain.exceptions import InternalError


def override_to_dict(override: PermissionOverride) -> dict:
    return {
        "action_type": override.action_type,
        "permissions": list(override.permissions),
        "description": override.description,
        "is_active": override.is_active,
        "created_at": override.created_at.isoformat(),
        "updated_at": override.updated_at.isoformat(),
    }


class ListOverridesParams(BaseModel):
    include_inactive: bool = False


class ListOverridesAction(ActionHandler):
    action_type = "permission.list"
    name = "List permission overrides"
    description = "Per-action permission overrides currently configured"
    required_permissions = frozenset({"admin.read"})
    params_model = ListOverridesParams
    examples = [{"title": "Active overrides", "request": {"action_type": "permission.list"}}]

    async def execute(self, params: ListOverridesParams, caller: Caller) -> dict:
        checker = self._context.permissions
        if checker is None:
            raise InternalError()
        overrides = await checker.list_overrides(include_inactive=params.include_inactive)
        return {"overrides": [override_to_dict(o) for o in overrides]}

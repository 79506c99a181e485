"""permission.set - create or replace an override."""

from pydantic import BaseModel, Field

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.application.use_cases.permission.list_overrides import override_to_dict
from actiongate.domain.exceptions import InternalError, ValidationError


class SetOverrideParams(BaseModel):
    target_action: str = Field(min_length=1, max_length=100)
    permissions: list[str] = Field(default_factory=list, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    is_active: bool = True


class SetOverrideAction(ActionHandler):
    """Replace the required permissions of a registered action.

    An empty permission list makes the action open to every authenticated
    caller while the override is active.
    """

    action_type = "permission.set"
    name = "Set permission override"
    description = "Create or replace the permission override of a registered action"
    required_permissions = frozenset({"admin.write"})
    params_model = SetOverrideParams
    success_message = "Permission override saved"
    examples = [
        {
            "title": "Require an extra permission",
            "request": {
                "action_type": "permission.set",
                "target_action": "user.list",
                "permissions": ["user.list", "admin.read"],
            },
        }
    ]

    async def execute(self, params: SetOverrideParams, caller: Caller) -> dict:
        checker = self._context.permissions
        registry = self._context.registry
        if checker is None or registry is None:
            raise InternalError()
        if not registry.has(params.target_action):
            raise ValidationError.for_field("target_action", "Unknown action")
        override = await checker.set_override(
            params.target_action,
            params.permissions,
            description=params.description,
            is_active=params.is_active,
        )
        return {"override": override_to_dict(override)}

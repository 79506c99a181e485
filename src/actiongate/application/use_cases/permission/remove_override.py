"""permission.remove - delete an override."""

from pydantic import BaseModel, Field

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.domain.exceptions import InternalError, ValidationError


class RemoveOverrideParams(BaseModel):
    target_action: str = Field(min_length=1, max_length=100)


class RemoveOverrideAction(ActionHandler):
    action_type = "permission.remove"
    name = "Remove permission override"
    description = "Delete an override; the action reverts to its declared permissions"
    required_permissions = frozenset({"admin.write"})
    params_model = RemoveOverrideParams
    success_message = "Permission override removed"
    examples = [
        {
            "title": "Remove override",
            "request": {"action_type": "permission.remove", "target_action": "user.list"},
        }
    ]

    async def execute(self, params: RemoveOverrideParams, caller: Caller) -> dict:
        checker = self._context.permissions
        if checker is None:
            raise InternalError()
        if not await checker.remove_override(params.target_action):
            raise ValidationError.for_field("target_action", "No override for this action")
        return {"target_action": params.target_action, "removed": True}

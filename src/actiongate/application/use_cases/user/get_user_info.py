"""user.info - read an identity's profile."""

from uuid import UUID

from pydantic import BaseModel

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.application.use_cases.user.serializers import identity_to_dict
from actiongate.domain.exceptions import ValidationError


class GetUserInfoParams(BaseModel):
    user_id: UUID | None = None


class GetUserInfoAction(ActionHandler):
    """Profile of the caller, or of ``user_id`` when given."""

    action_type = "user.info"
    name = "Get user info"
    description = "Profile of the current user or of the given user_id"
    required_permissions = frozenset({"user.read"})
    params_model = GetUserInfoParams
    examples = [
        {"title": "Current user", "request": {"action_type": "user.info"}},
        {
            "title": "Another user",
            "request": {
                "action_type": "user.info",
                "user_id": "5f0c6a2e-8f7e-4a4b-9a0e-0d4c2b1e7a11",
            },
        },
    ]

    async def execute(self, params: GetUserInfoParams, caller: Caller) -> dict:
        if params.user_id is None or params.user_id == caller.identity_id:
            return {"user": identity_to_dict(caller.identity)}

        async with self._uow_factory() as uow:
            identity = await uow.identities.get_by_id(params.user_id)
        if not identity:
            raise ValidationError.for_field("user_id", "User not found")
        return {"user": identity_to_dict(identity)}

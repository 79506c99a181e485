"""user.update - change the caller's name or email."""

from dataclasses import replace
from datetime import UTC, datetime

from pydantic import BaseModel, EmailStr, Field

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.application.use_cases.user.serializers import identity_to_dict
from actiongate.domain.exceptions import ValidationError


class UpdateProfileParams(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    email: EmailStr | None = None


class UpdateProfileAction(ActionHandler):
    action_type = "user.update"
    name = "Update profile"
    description = "Update the current user's name and/or email"
    required_permissions = frozenset({"user.update"})
    params_model = UpdateProfileParams
    success_message = "Profile updated"
    examples = [
        {"title": "Rename", "request": {"action_type": "user.update", "name": "Ada Lovelace"}},
    ]

    async def execute(self, params: UpdateProfileParams, caller: Caller) -> dict:
        if params.name is None and params.email is None:
            raise ValidationError(
                "Nothing to update",
                details={"__root__": ["Provide name or email"]},
            )

        async with self._uow_factory() as uow:
            identity = await uow.identities.get_by_id(caller.identity_id)
            if not identity:
                raise ValidationError.for_field("user_id", "User not found")

            changes: dict = {}
            if params.name is not None:
                changes["name"] = params.name
            if params.email is not None and params.email.lower() != identity.email.lower():
                existing = await uow.identities.get_by_email(params.email)
                if existing and existing.id != identity.id:
                    raise ValidationError.for_field("email", "Email is already in use")
                changes["email"] = params.email

            updated = replace(identity, **changes, updated_at=datetime.now(UTC))
            await uow.identities.update(updated)

        return {"user": identity_to_dict(updated)}

"""user.change_password - rotate the caller's password."""

from dataclasses import replace
from datetime import UTC, datetime

from pydantic import BaseModel, Field, model_validator

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.domain.exceptions import InternalError, ValidationError


class ChangePasswordParams(BaseModel):
    # bcrypt only looks at the first 72 bytes
    current_password: str = Field(min_length=1, max_length=72)
    new_password: str = Field(min_length=8, max_length=72)
    new_password_confirmation: str = Field(min_length=8, max_length=72)

    @model_validator(mode="after")
    def _confirmation_matches(self) -> "ChangePasswordParams":
        if self.new_password != self.new_password_confirmation:
            raise ValueError("New password confirmation does not match")
        return self


class ChangePasswordAction(ActionHandler):
    action_type = "user.change_password"
    name = "Change password"
    description = "Change the current user's password; requires the current one"
    required_permissions = frozenset({"user.change_password"})
    params_model = ChangePasswordParams
    success_message = "Password changed"
    examples = [
        {
            "title": "Change password",
            "request": {
                "action_type": "user.change_password",
                "current_password": "oldpassword123",
                "new_password": "newpassword123",
                "new_password_confirmation": "newpassword123",
            },
        }
    ]

    async def execute(self, params: ChangePasswordParams, caller: Caller) -> dict:
        passwords = self._context.passwords
        if passwords is None:
            raise InternalError()

        async with self._uow_factory() as uow:
            identity = await uow.identities.get_by_id(caller.identity_id)
            if not identity or not await passwords.verify(
                params.current_password, identity.password_hash
            ):
                raise ValidationError.for_field("current_password", "Current password is incorrect")
            if await passwords.verify(params.new_password, identity.password_hash):
                raise ValidationError.for_field(
                    "new_password", "New password must differ from the current one"
                )
            new_hash = await passwords.hash(params.new_password)
            now = datetime.now(UTC)
            await uow.identities.update(replace(identity, password_hash=new_hash, updated_at=now))

        return {"updated_at": now.isoformat()}

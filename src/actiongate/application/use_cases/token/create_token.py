"""token.create - issue a new token for the caller."""

from pydantic import BaseModel, Field

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.application.use_cases.token.serializers import credential_to_dict
from actiongate.domain.exceptions import InternalError, ValidationError
from actiongate.domain.value_objects import is_within


class CreateTokenParams(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    scope: list[str] | None = Field(default=None, max_length=100)
    expires_in_days: int | None = Field(default=None, ge=1, le=3650)


class CreateTokenAction(ActionHandler):
    """Issue a token for the calling identity.

    The new token can never hold more than the caller's current token:
    a requested scope must be within the caller's effective permissions,
    and a scoped caller that asks for no scope gets its own scope copied.
    """

    action_type = "token.create"
    name = "Create token"
    description = "Issue a new API token for the current user; the secret is shown once"
    required_permissions = frozenset({"token.manage"})
    params_model = CreateTokenParams
    success_message = "Token created"
    examples = [
        {
            "title": "Read-only token",
            "request": {
                "action_type": "token.create",
                "name": "reporting",
                "scope": ["user.read", "user.list"],
                "expires_in_days": 30,
            },
        }
    ]

    async def execute(self, params: CreateTokenParams, caller: Caller) -> dict:
        tokens = self._context.tokens
        if tokens is None:
            raise InternalError()

        allow_wildcard = self._context.settings.allow_wildcard_permission
        scope = params.scope
        if scope is not None:
            if not is_within(scope, caller.permissions, wildcard=allow_wildcard):
                raise ValidationError.for_field(
                    "scope", "Scope exceeds the permissions of the current token"
                )
        elif caller.scoped:
            scope = sorted(caller.permissions)

        days = params.expires_in_days or self._context.settings.default_token_ttl_days
        if days:
            issued = await tokens.issue_with_expiry(caller.identity_id, params.name, scope, days=days)
        else:
            issued = await tokens.issue(caller.identity_id, params.name, scope)

        return {"token": issued.secret, "credential": credential_to_dict(issued.credential)}

"""token.revoke - revoke one of the caller's tokens."""

from uuid import UUID

from pydantic import BaseModel

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.domain.exceptions import InternalError, ValidationError


class RevokeTokenParams(BaseModel):
    token_id: UUID | None = None


class RevokeTokenAction(ActionHandler):
    action_type = "token.revoke"
    name = "Revoke token"
    description = "Revoke a token of the current user by id, or the current token"
    required_permissions = frozenset({"token.manage"})
    params_model = RevokeTokenParams
    success_message = "Token revoked"
    examples = [
        {"title": "Revoke current token", "request": {"action_type": "token.revoke"}},
    ]

    async def execute(self, params: RevokeTokenParams, caller: Caller) -> dict:
        tokens = self._context.tokens
        if tokens is None:
            raise InternalError()
        token_id = params.token_id or caller.credential_id
        revoked = await tokens.revoke_credential(caller.identity_id, token_id)
        if not revoked:
            raise ValidationError.for_field("token_id", "Token not found")
        return {"token_id": str(token_id), "revoked": True}

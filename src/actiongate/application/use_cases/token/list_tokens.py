"""token.list - the caller's active tokens."""

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.application.use_cases.token.serializers import credential_to_dict
from actiongate.domain.exceptions import InternalError


class ListTokensAction(ActionHandler):
    action_type = "token.list"
    name = "List tokens"
    description = "Active tokens of the current user, without secrets"
    required_permissions = frozenset({"token.manage"})
    examples = [{"title": "List tokens", "request": {"action_type": "token.list"}}]

    async def execute(self, params, caller: Caller) -> dict:
        tokens = self._context.tokens
        if tokens is None:
            raise InternalError()
        credentials = await tokens.list_for_identity(caller.identity_id)
        return {
            "tokens": [
                {**credential_to_dict(c), "current": c.id == caller.credential_id}
                for c in credentials
            ],
            "count": len(credentials),
        }

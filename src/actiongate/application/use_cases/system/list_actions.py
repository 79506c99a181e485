"""system.actions - registry introspection."""

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.domain.exceptions import InternalError


class ListActionsAction(ActionHandler):
    """Registry statistics and a summary of every enabled action."""

    action_type = "system.actions"
    name = "List actions"
    description = "Registry statistics and summaries of enabled actions"
    required_permissions = frozenset({"system.read"})
    examples = [{"title": "List actions", "request": {"action_type": "system.actions"}}]

    async def execute(self, params, caller: Caller) -> dict:
        registry = self._context.registry
        if registry is None:
            raise InternalError()
        return {
            "statistics": registry.statistics(),
            "actions": [d.summary() for d in registry.all().values() if d.enabled],
        }

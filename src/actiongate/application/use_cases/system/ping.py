"""system.ping - liveness check through the full dispatch pipeline."""

from datetime import UTC, datetime

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller


class PingAction(ActionHandler):
    """Returns pong and the caller's identity id."""

    action_type = "system.ping"
    name = "System ping"
    description = "Check that the API is up and the token is accepted"
    examples = [{"title": "Ping", "request": {"action_type": "system.ping"}}]

    async def execute(self, params, caller: Caller) -> dict:
        return {
            "message": "pong",
            "timestamp": datetime.now(UTC).isoformat(),
            "identity_id": str(caller.identity_id),
            "system_status": "healthy",
        }

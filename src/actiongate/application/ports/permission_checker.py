"""Permission checker port - action authorization."""

from typing import Protocol

from actiongate.application.dto.action_descriptor import ActionDescriptor
from actiongate.application.dto.caller import Caller


class PermissionChecker(Protocol):
    """Port for authorizing a caller against an action."""

    async def authorize(
        self, caller: Caller, descriptor: ActionDescriptor, request_id: str | None = None
    ) -> None: ...

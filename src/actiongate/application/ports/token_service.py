"""Token service port - bearer authentication."""

from typing import Protocol

from actiongate.application.dto.caller import Caller


class Authenticator(Protocol):
    """Resolves a presented bearer secret to a caller, or None."""

    async def validate(self, secret: str | None) -> Caller | None: ...

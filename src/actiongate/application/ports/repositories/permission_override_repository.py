"""Permission override repository port."""

from typing import Protocol

from actiongate.domain.entities import PermissionOverride


class PermissionOverrideRepository(Protocol):
    """Port for per-action permission override persistence."""

    async def get(self, action_type: str) -> PermissionOverride | None: ...

    async def get_active(self, action_type: str) -> PermissionOverride | None: ...

    async def list(self, include_inactive: bool = False) -> list[PermissionOverride]: ...

    async def upsert(self, override: PermissionOverride) -> PermissionOverride: ...

    async def delete(self, action_type: str) -> bool: ...

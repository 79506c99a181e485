"""Identity repository port."""

from typing import Protocol
from uuid import UUID

from actiongate.domain.entities import Identity


class IdentityRepository(Protocol):
    """Port for identity persistence."""

    async def get_by_id(self, identity_id: UUID) -> Identity | None: ...

    async def get_by_email(self, email: str) -> Identity | None: ...

    async def list(
        self,
        *,
        search: str | None = None,
        sort_by: str = "created_at",
        descending: bool = True,
        offset: int = 0,
        limit: int = 15,
    ) -> tuple[list[Identity], int]: ...

    async def create(self, identity: Identity) -> Identity: ...

    async def update(self, identity: Identity) -> None: ...

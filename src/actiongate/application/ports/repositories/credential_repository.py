"""Credential repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from actiongate.domain.entities import Credential


class CredentialRepository(Protocol):
    """Port for credential persistence. Lookups go through the hash index."""

    async def get_by_hash(self, token_hash: str) -> Credential | None: ...

    async def get_by_id(self, credential_id: UUID) -> Credential | None: ...

    async def list_active_by_identity(self, identity_id: UUID) -> list[Credential]: ...

    async def create(self, credential: Credential) -> Credential: ...

    async def touch(self, credential_id: UUID, used_at: datetime) -> None: ...

    async def deactivate(self, credential_id: UUID) -> bool: ...

    async def deactivate_by_identity(self, identity_id: UUID, name: str | None = None) -> int: ...

    async def deactivate_expired(self, now: datetime) -> int: ...

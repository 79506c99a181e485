"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from actiongate.application.ports.repositories.credential_repository import (
    CredentialRepository,
)
from actiongate.application.ports.repositories.identity_repository import (
    IdentityRepository,
)
from actiongate.application.ports.repositories.permission_override_repository import (
    PermissionOverrideRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def identities(self) -> IdentityRepository: ...

    @property
    def credentials(self) -> CredentialRepository: ...

    @property
    def permission_overrides(self) -> PermissionOverrideRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...

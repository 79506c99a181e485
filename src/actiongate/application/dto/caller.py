"""Authenticated caller DTO."""

from dataclasses import dataclass
from uuid import UUID

from actiongate.domain.entities import Identity


@dataclass(frozen=True)
class Caller:
    """Identity behind a validated credential, with its effective permissions."""

    identity: Identity
    credential_id: UUID
    permissions: frozenset[str]
    scoped: bool = False

    @property
    def identity_id(self) -> UUID:
        return self.identity.id

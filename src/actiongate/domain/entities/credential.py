"""Credential entity - persisted metadata of a bearer token."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Credential:
    """Bearer token record. Only the hash of the secret is stored.

    ``scope is None`` inherits the owning identity's base permissions.
    """

    id: UUID
    identity_id: UUID
    token_hash: str
    name: str
    created_at: datetime
    scope: frozenset[str] | None = None
    expires_at: datetime | None = None
    last_used_at: datetime | None = None
    is_active: bool = True

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now

    def is_usable(self, now: datetime) -> bool:
        return self.is_active and not self.is_expired(now)

"""Identity entity - account owning credentials."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class Identity:
    """Identity - base permission set is the ceiling for all its credentials."""

    id: UUID
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    permissions: frozenset[str] = field(default_factory=frozenset)
    password_hash: str | None = None
    is_admin: bool = False

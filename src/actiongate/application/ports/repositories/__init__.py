"""Repository ports."""

from actiongate.application.ports.repositories.credential_repository import (
    CredentialRepository,
)
from actiongate.application.ports.repositories.identity_repository import (
    IdentityRepository,
)
from actiongate.application.ports.repositories.permission_override_repository import (
    PermissionOverrideRepository,
)

__all__ = [
    "CredentialRepository",
    "IdentityRepository",
    "PermissionOverrideRepository",
]

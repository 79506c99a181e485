"""Credential -> response dict. Never includes the secret or its hash."""

from actiongate.domain.entities import Credential


def credential_to_dict(credential: Credential) -> dict:
    return {
        "id": str(credential.id),
        "name": credential.name,
        "scope": sorted(credential.scope) if credential.scope is not None else None,
        "created_at": credential.created_at.isoformat(),
        "expires_at": credential.expires_at.isoformat() if credential.expires_at else None,
        "last_used_at": credential.last_used_at.isoformat() if credential.last_used_at else None,
    }

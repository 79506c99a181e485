"""Identity -> response dict."""

from actiongate.domain.entities import Identity


def identity_to_dict(identity: Identity) -> dict:
    return {
        "id": str(identity.id),
        "name": identity.name,
        "email": identity.email,
        "created_at": identity.created_at.isoformat(),
        "updated_at": identity.updated_at.isoformat(),
    }

"""Bearer token issuance, validation and revocation."""

import logging
import secrets
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from actiongate.application.dto.caller import Caller
from actiongate.domain.entities import Credential
from actiongate.domain.exceptions import InvalidIdentity
from actiongate.domain.value_objects import (
    TokenHash,
    effective_permissions,
    normalize_permissions,
)

logger = logging.getLogger(__name__)

# 48 random bytes -> 64 url-safe characters, 384 bits of entropy
SECRET_BYTES = 48


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class IssuedToken:
    """Freshly issued token. ``secret`` is not recoverable after this."""

    secret: str
    credential: Credential


class TokenService:
    """Credential lifecycle over the credential and identity repositories.

    Only ``sha256(secret)`` is persisted. Validation hashes the presented
    secret and looks the record up by that hash.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        *,
        clock: Callable[[], datetime] = _utc_now,
        allow_wildcard: bool = True,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock
        self._allow_wildcard = allow_wildcard

    async def issue(
        self,
        identity_id: UUID,
        name: str,
        scope: Iterable[str] | None = None,
        expires_at: datetime | None = None,
    ) -> IssuedToken:
        """Create a credential for an identity and return its secret once."""
        secret = secrets.token_urlsafe(SECRET_BYTES)
        now = self._clock()
        credential = Credential(
            id=uuid4(),
            identity_id=identity_id,
            token_hash=TokenHash.of(secret).value,
            name=name,
            created_at=now,
            scope=normalize_permissions(scope) if scope is not None else None,
            expires_at=expires_at,
            is_active=True,
        )
        async with self._uow_factory() as uow:
            identity = await uow.identities.get_by_id(identity_id)
            if not identity:
                raise InvalidIdentity()
            await uow.credentials.create(credential)

        logger.info(
            "API token issued",
            extra={
                "identity_id": str(identity_id),
                "credential_id": str(credential.id),
                "token_name": name,
                "expires_at": expires_at.isoformat() if expires_at else None,
            },
        )
        return IssuedToken(secret=secret, credential=credential)

    async def issue_with_expiry(
        self,
        identity_id: UUID,
        name: str,
        scope: Iterable[str] | None = None,
        days: int = 30,
    ) -> IssuedToken:
        return await self.issue(
            identity_id, name, scope, expires_at=self._clock() + timedelta(days=days)
        )

    async def validate(self, secret: str | None) -> Caller | None:
        """Resolve a presented secret to a caller, or None if it is not usable.

        Unknown, inactive, expired and orphaned tokens all return None.
        """
        if not secret:
            return None
        presented = TokenHash.of(secret)
        now = self._clock()

        async with self._uow_factory() as uow:
            credential = await uow.credentials.get_by_hash(presented.value)
            if not credential or not presented.matches(credential.token_hash):
                return None
            if not credential.is_usable(now):
                return None
            identity = await uow.identities.get_by_id(credential.identity_id)
            if not identity:
                return None

        await self._touch(credential.id, now)
        permissions = effective_permissions(
            identity.permissions, credential.scope, wildcard=self._allow_wildcard
        )
        return Caller(
            identity=identity,
            credential_id=credential.id,
            permissions=permissions,
            scoped=credential.scope is not None,
        )

    async def _touch(self, credential_id: UUID, used_at: datetime) -> None:
        """Record last use. Failures are logged and never reach the caller."""
        try:
            async with self._uow_factory() as uow:
                await uow.credentials.touch(credential_id, used_at)
        except Exception:
            logger.warning(
                "Failed to update token last-used time",
                extra={"credential_id": str(credential_id)},
                exc_info=True,
            )

    async def revoke(self, secret: str) -> bool:
        """Deactivate the credential for ``secret``. Revoking twice is not an error."""
        if not secret:
            return False
        async with self._uow_factory() as uow:
            credential = await uow.credentials.get_by_hash(TokenHash.of(secret).value)
            if not credential or not credential.is_active:
                return False
            changed = await uow.credentials.deactivate(credential.id)
        if changed:
            logger.info(
                "API token revoked",
                extra={
                    "credential_id": str(credential.id),
                    "identity_id": str(credential.identity_id),
                },
            )
        return changed

    async def revoke_credential(self, identity_id: UUID, credential_id: UUID) -> bool:
        """Deactivate one credential owned by ``identity_id``."""
        async with self._uow_factory() as uow:
            credential = await uow.credentials.get_by_id(credential_id)
            if not credential or credential.identity_id != identity_id:
                return False
            if not credential.is_active:
                return False
            changed = await uow.credentials.deactivate(credential_id)
        if changed:
            logger.info(
                "API token revoked",
                extra={"credential_id": str(credential_id), "identity_id": str(identity_id)},
            )
        return changed

    async def revoke_all(self, identity_id: UUID) -> int:
        """Deactivate every active credential of an identity."""
        async with self._uow_factory() as uow:
            count = await uow.credentials.deactivate_by_identity(identity_id)
        logger.info(
            "All API tokens revoked",
            extra={"identity_id": str(identity_id), "revoked_count": count},
        )
        return count

    async def revoke_by_name(self, identity_id: UUID, name: str) -> int:
        """Deactivate an identity's active credentials with a given label."""
        async with self._uow_factory() as uow:
            count = await uow.credentials.deactivate_by_identity(identity_id, name=name)
        logger.info(
            "Named API tokens revoked",
            extra={"identity_id": str(identity_id), "token_name": name, "revoked_count": count},
        )
        return count

    async def list_for_identity(self, identity_id: UUID) -> list[Credential]:
        """Active credentials of an identity, newest first."""
        async with self._uow_factory() as uow:
            return await uow.credentials.list_active_by_identity(identity_id)

    async def sweep_expired(self) -> int:
        """Deactivate every active credential whose expiry has passed."""
        async with self._uow_factory() as uow:
            count = await uow.credentials.deactivate_expired(self._clock())
        if count:
            logger.info("Expired API tokens deactivated", extra={"count": count})
        return count

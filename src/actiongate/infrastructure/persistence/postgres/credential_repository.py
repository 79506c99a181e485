"""PostgreSQL credential repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from actiongate.domain.entities import Credential

_COLUMNS = (
    "id, identity_id, token_hash, name, scope, expires_at, last_used_at, is_active, created_at"
)


def _row_to_credential(r: tuple) -> Credential:
    return Credential(
        id=r[0],
        identity_id=r[1],
        token_hash=r[2],
        name=r[3],
        scope=frozenset(r[4]) if r[4] is not None else None,
        expires_at=r[5],
        last_used_at=r[6],
        is_active=r[7],
        created_at=r[8],
    )


class PostgresCredentialRepository:
    """Credential repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_hash(self, token_hash: str) -> Credential | None:
        """Get credential by token hash (unique index)."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM api_token WHERE token_hash = %s",
            (token_hash,),
        )
        r = await cur.fetchone()
        return _row_to_credential(r) if r else None

    async def get_by_id(self, credential_id: UUID) -> Credential | None:
        """Get credential by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM api_token WHERE id = %s",
            (credential_id,),
        )
        r = await cur.fetchone()
        return _row_to_credential(r) if r else None

    async def list_active_by_identity(self, identity_id: UUID) -> list[Credential]:
        """List active credentials for identity, newest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM api_token "
            "WHERE identity_id = %s AND is_active ORDER BY created_at DESC",
            (identity_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_credential(r) for r in rows]

    async def create(self, credential: Credential) -> Credential:
        """Create credential."""
        await self._conn.execute(
            f"INSERT INTO api_token ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                credential.id,
                credential.identity_id,
                credential.token_hash,
                credential.name,
                sorted(credential.scope) if credential.scope is not None else None,
                credential.expires_at,
                credential.last_used_at,
                credential.is_active,
                credential.created_at,
            ),
        )
        return credential

    async def touch(self, credential_id: UUID, used_at: datetime) -> None:
        """Set last_used_at; never moves it backwards."""
        await self._conn.execute(
            "UPDATE api_token SET last_used_at = %s "
            "WHERE id = %s AND (last_used_at IS NULL OR last_used_at < %s)",
            (used_at, credential_id, used_at),
        )

    async def deactivate(self, credential_id: UUID) -> bool:
        """Mark credential inactive. Returns whether a row changed."""
        cur = await self._conn.execute(
            "UPDATE api_token SET is_active = false WHERE id = %s AND is_active",
            (credential_id,),
        )
        return cur.rowcount > 0

    async def deactivate_by_identity(self, identity_id: UUID, name: str | None = None) -> int:
        """Deactivate an identity's active credentials, optionally by name."""
        if name is None:
            cur = await self._conn.execute(
                "UPDATE api_token SET is_active = false WHERE identity_id = %s AND is_active",
                (identity_id,),
            )
        else:
            cur = await self._conn.execute(
                "UPDATE api_token SET is_active = false "
                "WHERE identity_id = %s AND name = %s AND is_active",
                (identity_id, name),
            )
        return cur.rowcount

    async def deactivate_expired(self, now: datetime) -> int:
        """Deactivate active credentials whose expiry has passed."""
        cur = await self._conn.execute(
            "UPDATE api_token SET is_active = false "
            "WHERE is_active AND expires_at IS NOT NULL AND expires_at <= %s",
            (now,),
        )
        return cur.rowcount

"""PostgreSQL permission override repository implementation."""

from psycopg import AsyncConnection

from actiongate.domain.entities import PermissionOverride

_COLUMNS = "action_type, permissions, is_active, description, created_at, updated_at"


def _row_to_override(r: tuple) -> PermissionOverride:
    return PermissionOverride(
        action_type=r[0],
        permissions=list(r[1] or ()),
        is_active=r[2],
        description=r[3],
        created_at=r[4],
        updated_at=r[5],
    )


class PostgresPermissionOverrideRepository:
    """Permission override repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, action_type: str) -> PermissionOverride | None:
        """Get override by action type regardless of state."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM action_permission WHERE action_type = %s",
            (action_type,),
        )
        r = await cur.fetchone()
        return _row_to_override(r) if r else None

    async def get_active(self, action_type: str) -> PermissionOverride | None:
        """Get override by action type if active."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM action_permission WHERE action_type = %s AND is_active",
            (action_type,),
        )
        r = await cur.fetchone()
        return _row_to_override(r) if r else None

    async def list(self, include_inactive: bool = False) -> list[PermissionOverride]:
        """List overrides ordered by action type."""
        where = "" if include_inactive else "WHERE is_active"
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM action_permission {where} ORDER BY action_type"
        )
        rows = await cur.fetchall()
        return [_row_to_override(r) for r in rows]

    async def upsert(self, override: PermissionOverride) -> PermissionOverride:
        """Insert or replace override keyed by action type."""
        await self._conn.execute(
            f"INSERT INTO action_permission ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (action_type) DO UPDATE SET permissions = EXCLUDED.permissions, "
            "is_active = EXCLUDED.is_active, description = EXCLUDED.description, "
            "updated_at = EXCLUDED.updated_at",
            (
                override.action_type,
                override.permissions,
                override.is_active,
                override.description,
                override.created_at,
                override.updated_at,
            ),
        )
        return override

    async def delete(self, action_type: str) -> bool:
        """Delete override. Returns whether a row was removed."""
        cur = await self._conn.execute(
            "DELETE FROM action_permission WHERE action_type = %s",
            (action_type,),
        )
        return cur.rowcount > 0

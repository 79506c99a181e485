"""PostgreSQL identity repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from actiongate.domain.entities import Identity

_COLUMNS = "id, name, email, permissions, password_hash, is_admin, created_at, updated_at"

# sort_by values are whitelisted; never interpolate user input directly
_SORT_COLUMNS = {
    "id": "id",
    "name": "name",
    "email": "email",
    "created_at": "created_at",
    "updated_at": "updated_at",
}


def escape_like(text: str) -> str:
    """Make %, _ and the escape character match literally in a LIKE pattern."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _row_to_identity(r: tuple) -> Identity:
    return Identity(
        id=r[0],
        name=r[1],
        email=r[2],
        permissions=frozenset(r[3] or ()),
        password_hash=r[4],
        is_admin=r[5],
        created_at=r[6],
        updated_at=r[7],
    )


class PostgresIdentityRepository:
    """Identity repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, identity_id: UUID) -> Identity | None:
        """Get identity by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM identity WHERE id = %s",
            (identity_id,),
        )
        r = await cur.fetchone()
        return _row_to_identity(r) if r else None

    async def get_by_email(self, email: str) -> Identity | None:
        """Get identity by email (case-insensitive)."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM identity WHERE lower(email) = lower(%s)",
            (email,),
        )
        r = await cur.fetchone()
        return _row_to_identity(r) if r else None

    async def list(
        self,
        *,
        search: str | None = None,
        sort_by: str = "created_at",
        descending: bool = True,
        offset: int = 0,
        limit: int = 15,
    ) -> tuple[list[Identity], int]:
        """List identities with optional name/email search. Returns (page, total)."""
        column = _SORT_COLUMNS.get(sort_by, "created_at")
        direction = "DESC" if descending else "ASC"
        where = ""
        params: list[object] = []
        if search:
            where = r"WHERE name ILIKE %s ESCAPE '\' OR email ILIKE %s ESCAPE '\'"
            pattern = f"%{escape_like(search)}%"
            params = [pattern, pattern]

        cur = await self._conn.execute(f"SELECT count(*) FROM identity {where}", params)
        total = (await cur.fetchone())[0]

        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM identity {where} "
            f"ORDER BY {column} {direction}, id LIMIT %s OFFSET %s",
            [*params, limit, offset],
        )
        rows = await cur.fetchall()
        return [_row_to_identity(r) for r in rows], total

    async def create(self, identity: Identity) -> Identity:
        """Create identity."""
        await self._conn.execute(
            f"INSERT INTO identity ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                identity.id,
                identity.name,
                identity.email,
                sorted(identity.permissions),
                identity.password_hash,
                identity.is_admin,
                identity.created_at,
                identity.updated_at,
            ),
        )
        return identity

    async def update(self, identity: Identity) -> None:
        """Update identity."""
        await self._conn.execute(
            "UPDATE identity SET name=%s, email=%s, permissions=%s, password_hash=%s, "
            "is_admin=%s, updated_at=%s WHERE id=%s",
            (
                identity.name,
                identity.email,
                sorted(identity.permissions),
                identity.password_hash,
                identity.is_admin,
                identity.updated_at,
                identity.id,
            ),
        )

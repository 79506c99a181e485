"""Password hashing with bcrypt."""

import asyncio

import bcrypt


class PasswordHasher:
    """bcrypt hash/verify. Inputs longer than 72 bytes are rejected by bcrypt.

    Both calls run in the default executor; the event loop is never blocked
    while bcrypt works.
    """

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    async def hash(self, plain: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._hash_sync, plain)

    async def verify(self, plain: str, hashed: str | None) -> bool:
        if not hashed:
            return False
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _verify_sync, plain, hashed)

    def _hash_sync(self, plain: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def _verify_sync(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False

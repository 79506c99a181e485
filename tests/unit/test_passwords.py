"""Unit tests for PasswordHasher."""

import asyncio
import time

import pytest

from actiongate.infrastructure.auth.passwords import PasswordHasher


@pytest.fixture
def passwords() -> PasswordHasher:
    """Production cost, so a blocked loop would be measurable."""
    return PasswordHasher()


async def _max_stall(work) -> tuple[object, float]:
    """Run ``work`` next to a 5 ms heartbeat and return the longest gap seen."""
    done = asyncio.Event()
    gaps: list[float] = []

    async def heartbeat() -> None:
        last = time.perf_counter()
        while not done.is_set():
            await asyncio.sleep(0.005)
            now = time.perf_counter()
            gaps.append(now - last)
            last = now

    beat = asyncio.create_task(heartbeat())
    try:
        result = await work
    finally:
        done.set()
        await beat
    return result, max(gaps, default=0.0)


class TestPasswordHasher:
    @pytest.mark.asyncio
    async def test_hash_then_verify(self) -> None:
        hasher = PasswordHasher(rounds=4)
        hashed = await hasher.hash("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert await hasher.verify("s3cret-pass", hashed) is True
        assert await hasher.verify("wrong-pass", hashed) is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hashed", [None, "", "not-a-bcrypt-hash"])
    async def test_verify_rejects_missing_or_malformed_hash(self, hashed) -> None:
        assert await PasswordHasher(rounds=4).verify("anything", hashed) is False

    @pytest.mark.asyncio
    async def test_hashing_does_not_block_event_loop(self, passwords) -> None:
        hashed, stall = await _max_stall(passwords.hash("s3cret-pass"))

        assert hashed.startswith("$2")
        assert stall < 0.1


class TestChangePasswordConcurrency:
    @pytest.mark.asyncio
    async def test_password_change_keeps_loop_responsive(
        self, passwords, dispatcher, token_service, add_identity
    ) -> None:
        identity = await add_identity(
            {"user.change_password"}, password_hash=await passwords.hash("oldpassword123")
        )
        issued = await token_service.issue(identity.id, "test")

        result, stall = await _max_stall(
            dispatcher.dispatch(
                "POST",
                {
                    "action_type": "user.change_password",
                    "current_password": "oldpassword123",
                    "new_password": "newpassword123",
                    "new_password_confirmation": "newpassword123",
                },
                issued.secret,
            )
        )

        assert result.status_code == 200
        assert stall < 0.1

"""Pytest fixtures for ActionGate tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from actiongate.application.actions import HandlerContext
from actiongate.application.dispatcher import Dispatcher
from actiongate.config import Settings
from actiongate.domain.entities import AuditEvent, Credential, Identity, PermissionOverride
from actiongate.infrastructure.actions.registry import ActionRegistry
from actiongate.infrastructure.auth.passwords import PasswordHasher
from actiongate.infrastructure.auth.token_service import TokenService
from actiongate.infrastructure.permission.permission_checker import OverridePermissionChecker


# --- Fake repositories ---


class FakeIdentityRepository:
    """In-memory identity repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Identity] = {}

    async def get_by_id(self, identity_id: UUID) -> Identity | None:
        return self._by_id.get(identity_id)

    async def get_by_email(self, email: str) -> Identity | None:
        for identity in self._by_id.values():
            if identity.email.lower() == email.lower():
                return identity
        return None

    async def list(
        self,
        *,
        search: str | None = None,
        sort_by: str = "created_at",
        descending: bool = True,
        offset: int = 0,
        limit: int = 15,
    ) -> tuple[list[Identity], int]:
        items = list(self._by_id.values())
        if search:
            needle = search.lower()
            items = [i for i in items if needle in i.name.lower() or needle in i.email.lower()]
        items.sort(key=lambda i: (str(getattr(i, sort_by)), str(i.id)), reverse=descending)
        return items[offset : offset + limit], len(items)

    async def create(self, identity: Identity) -> Identity:
        self._by_id[identity.id] = identity
        return identity

    async def update(self, identity: Identity) -> None:
        self._by_id[identity.id] = identity


class FakeCredentialRepository:
    """In-memory credential repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Credential] = {}
        self.touch_calls = 0

    async def get_by_hash(self, token_hash: str) -> Credential | None:
        for credential in self._by_id.values():
            if credential.token_hash == token_hash:
                return credential
        return None

    async def get_by_id(self, credential_id: UUID) -> Credential | None:
        return self._by_id.get(credential_id)

    async def list_active_by_identity(self, identity_id: UUID) -> list[Credential]:
        items = [c for c in self._by_id.values() if c.identity_id == identity_id and c.is_active]
        items.sort(key=lambda c: c.created_at, reverse=True)
        return items

    async def create(self, credential: Credential) -> Credential:
        self._by_id[credential.id] = credential
        return credential

    async def touch(self, credential_id: UUID, used_at: datetime) -> None:
        self.touch_calls += 1
        credential = self._by_id.get(credential_id)
        if credential and (credential.last_used_at is None or credential.last_used_at < used_at):
            credential.last_used_at = used_at

    async def deactivate(self, credential_id: UUID) -> bool:
        credential = self._by_id.get(credential_id)
        if not credential or not credential.is_active:
            return False
        credential.is_active = False
        return True

    async def deactivate_by_identity(self, identity_id: UUID, name: str | None = None) -> int:
        count = 0
        for credential in self._by_id.values():
            if credential.identity_id != identity_id or not credential.is_active:
                continue
            if name is not None and credential.name != name:
                continue
            credential.is_active = False
            count += 1
        return count

    async def deactivate_expired(self, now: datetime) -> int:
        count = 0
        for credential in self._by_id.values():
            if credential.is_active and credential.is_expired(now):
                credential.is_active = False
                count += 1
        return count


class FakePermissionOverrideRepository:
    """In-memory action permission override repository."""

    def __init__(self) -> None:
        self._by_action: dict[str, PermissionOverride] = {}

    async def get(self, action_type: str) -> PermissionOverride | None:
        return self._by_action.get(action_type)

    async def get_active(self, action_type: str) -> PermissionOverride | None:
        override = self._by_action.get(action_type)
        return override if override and override.is_active else None

    async def list(self, include_inactive: bool = False) -> list[PermissionOverride]:
        return sorted(
            (o for o in self._by_action.values() if include_inactive or o.is_active),
            key=lambda o: o.action_type,
        )

    async def upsert(self, override: PermissionOverride) -> PermissionOverride:
        self._by_action[override.action_type] = override
        return override

    async def delete(self, action_type: str) -> bool:
        return self._by_action.pop(action_type, None) is not None


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.identities = FakeIdentityRepository()
        self.credentials = FakeCredentialRepository()
        self.permission_overrides = FakePermissionOverrideRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


class RecordingAuditSink:
    """Audit sink that keeps events in memory."""

    def __init__(self) -> None:
        self.events: list[AuditEvent] = []

    def emit(self, event: AuditEvent) -> None:
        self.events.append(event)

    def of_kind(self, event: str) -> list[AuditEvent]:
        return [e for e in self.events if e.event == event]


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_identity(
    permissions: set[str] | frozenset[str] = frozenset(),
    *,
    name: str = "Test User",
    email: str | None = None,
    password_hash: str | None = None,
) -> Identity:
    now = datetime.now(UTC)
    return Identity(
        id=uuid4(),
        name=name,
        email=email or f"user-{uuid4().hex[:8]}@example.com",
        created_at=now,
        updated_at=now,
        permissions=frozenset(permissions),
        password_hash=password_hash,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """In-memory UnitOfWork shared by every factory call within a test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields the shared FakeUnitOfWork."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield fake_uow

    return _factory


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()


@pytest.fixture
def passwords() -> PasswordHasher:
    """Cheap bcrypt cost so tests stay fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service(uow_factory) -> TokenService:
    return TokenService(uow_factory)


@pytest.fixture
def permission_checker(uow_factory, audit_sink) -> OverridePermissionChecker:
    return OverridePermissionChecker(uow_factory, audit_sink)


@pytest.fixture
def handler_context(uow_factory, settings, token_service, permission_checker, passwords):
    return HandlerContext(
        unit_of_work_factory=uow_factory,
        settings=settings,
        tokens=token_service,
        permissions=permission_checker,
        passwords=passwords,
    )


@pytest.fixture
def registry(handler_context) -> ActionRegistry:
    """Registry with every built-in action discovered."""
    registry = ActionRegistry(handler_context)
    registry.discover()
    return registry


@pytest.fixture
def dispatcher(token_service, registry, permission_checker, audit_sink) -> Dispatcher:
    return Dispatcher(token_service, registry, permission_checker, audit_sink)


@pytest.fixture
def add_identity(fake_uow: FakeUnitOfWork):
    """Store an identity and return it."""

    async def _add(permissions=frozenset(), **kwargs) -> Identity:
        identity = make_identity(permissions, **kwargs)
        await fake_uow.identities.create(identity)
        return identity

    return _add

"""Permission checker - action requirements with dynamic overrides."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from actiongate.application.dto.action_descriptor import ActionDescriptor
from actiongate.application.dto.caller import Caller
from actiongate.application.ports import AuditSink
from actiongate.domain.entities import AuditEvent, PermissionOverride
from actiongate.domain.exceptions import InsufficientPermissions
from actiongate.domain.value_objects import missing_permissions, normalize_permissions

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class PermissionDecision:
    """Outcome of a check. ``missing`` is for audit, not for callers."""

    allowed: bool
    required: frozenset[str]
    missing: frozenset[str]


class OverridePermissionChecker:
    """Checks callers against an action's required permissions.

    An active override record for the action replaces the action's declared
    permissions. Overrides are read on every check, so enabling or disabling
    one takes effect on the next request.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        audit_sink: AuditSink | None = None,
        *,
        allow_wildcard: bool = True,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink
        self._allow_wildcard = allow_wildcard
        self._clock = clock

    async def required_permissions(self, descriptor: ActionDescriptor) -> frozenset[str]:
        """Effective requirement: active override if any, else the declared default."""
        async with self._uow_factory() as uow:
            override = await uow.permission_overrides.get_active(descriptor.action_type)
        if override is not None:
            return normalize_permissions(override.permissions)
        return normalize_permissions(descriptor.required_permissions)

    async def check(self, caller: Caller, descriptor: ActionDescriptor) -> PermissionDecision:
        """Decide allow/deny. An empty requirement always allows."""
        required = await self.required_permissions(descriptor)
        if not required:
            return PermissionDecision(allowed=True, required=required, missing=frozenset())
        missing = missing_permissions(required, caller.permissions, wildcard=self._allow_wildcard)
        return PermissionDecision(allowed=not missing, required=required, missing=missing)

    async def authorize(
        self, caller: Caller, descriptor: ActionDescriptor, request_id: str | None = None
    ) -> None:
        """Raise InsufficientPermissions if the caller may not run the action."""
        decision = await self.check(caller, descriptor)
        if decision.allowed:
            return
        logger.warning(
            "Permission denied",
            extra={
                "identity_id": str(caller.identity_id),
                "action_type": descriptor.action_type,
                "missing_permissions": sorted(decision.missing),
            },
        )
        if self._audit is not None:
            self._audit.emit(
                AuditEvent(
                    event="permission_denied",
                    request_id=request_id or "",
                    timestamp=self._clock(),
                    action_type=descriptor.action_type,
                    identity_id=caller.identity_id,
                    outcome="denied",
                    details={
                        "required_permissions": sorted(decision.required),
                        "held_permissions": sorted(caller.permissions),
                        "missing_permissions": sorted(decision.missing),
                    },
                )
            )
        raise InsufficientPermissions(missing=decision.missing)

    # --- override management ---

    async def get_override(self, action_type: str) -> PermissionOverride | None:
        async with self._uow_factory() as uow:
            return await uow.permission_overrides.get(action_type)

    async def list_overrides(self, include_inactive: bool = False) -> list[PermissionOverride]:
        async with self._uow_factory() as uow:
            return await uow.permission_overrides.list(include_inactive=include_inactive)

    async def set_override(
        self,
        action_type: str,
        permissions: Iterable[str],
        description: str | None = None,
        is_active: bool = True,
    ) -> PermissionOverride:
        """Create or replace the override for an action."""
        now = self._clock()
        async with self._uow_factory() as uow:
            existing = await uow.permission_overrides.get(action_type)
            override = PermissionOverride(
                action_type=action_type,
                permissions=sorted(normalize_permissions(permissions)),
                description=description,
                is_active=is_active,
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            await uow.permission_overrides.upsert(override)
        logger.info(
            "Action permission override saved",
            extra={
                "action_type": action_type,
                "permissions": override.permissions,
                "is_active": is_active,
            },
        )
        return override

    async def deactivate_override(self, action_type: str) -> bool:
        """Keep the record but stop enforcing it."""
        async with self._uow_factory() as uow:
            existing = await uow.permission_overrides.get(action_type)
            if not existing or not existing.is_active:
                return False
            existing.is_active = False
            existing.updated_at = self._clock()
            await uow.permission_overrides.upsert(existing)
        logger.info("Action permission override deactivated", extra={"action_type": action_type})
        return True

    async def remove_override(self, action_type: str) -> bool:
        async with self._uow_factory() as uow:
            deleted = await uow.permission_overrides.delete(action_type)
        if deleted:
            logger.info("Action permission override removed", extra={"action_type": action_type})
        return deleted

    async def sync_overrides(self, config: Mapping[str, Mapping[str, Any]]) -> int:
        """Upsert overrides from ``{action_type: {permissions, description, is_active}}``."""
        count = 0
        for action_type, entry in config.items():
            await self.set_override(
                action_type,
                entry.get("permissions", []),
                description=entry.get("description"),
                is_active=entry.get("is_active", True),
            )
            count += 1
        logger.info("Action permission overrides synced", extra={"sync_count": count})
        return count

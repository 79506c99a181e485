"""Permission set arithmetic.

Permissions are opaque capability strings; possession is set membership.
The optional sentinel ``ALL_PERMISSIONS`` ("*") stands for every permission.
It only grants anything when it sits in an identity's base set. Inside a
credential scope it means "no narrowing", never more than the base set.
"""

from collections.abc import Iterable

ALL_PERMISSIONS = "*"


def normalize_permissions(permissions: Iterable[str] | None) -> frozenset[str]:
    """Strip, drop empties, de-duplicate."""
    if not permissions:
        return frozenset()
    return frozenset(p.strip() for p in permissions if p and p.strip())


def effective_permissions(
    base: Iterable[str],
    scope: Iterable[str] | None,
    *,
    wildcard: bool = True,
) -> frozenset[str]:
    """Permission ceiling: what a credential may actually use.

    ``scope is None`` inherits the base set. Otherwise the result is
    ``scope ∩ base``, so a scope can only narrow, never widen.
    """
    base_set = normalize_permissions(base)
    if scope is None:
        return base_set
    scope_set = normalize_permissions(scope)
    if not wildcard:
        return (scope_set & base_set) - {ALL_PERMISSIONS}
    if ALL_PERMISSIONS in scope_set:
        return base_set
    if ALL_PERMISSIONS in base_set:
        return scope_set
    return scope_set & base_set


def missing_permissions(
    required: Iterable[str],
    held: Iterable[str],
    *,
    wildcard: bool = True,
) -> frozenset[str]:
    """Required permissions not covered by ``held``. Empty means allowed."""
    required_set = normalize_permissions(required)
    held_set = normalize_permissions(held)
    if wildcard and ALL_PERMISSIONS in held_set:
        return frozenset()
    return required_set - held_set


def is_within(requested: Iterable[str], held: Iterable[str], *, wildcard: bool = True) -> bool:
    """True if every requested permission is already held."""
    requested_set = normalize_permissions(requested)
    if ALL_PERMISSIONS in requested_set:
        return wildcard and ALL_PERMISSIONS in normalize_permissions(held)
    return not missing_permissions(requested_set, held, wildcard=wildcard)

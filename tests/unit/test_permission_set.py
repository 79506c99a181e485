"""Unit tests for permission set arithmetic."""

from actiongate.domain.value_objects import (
    ALL_PERMISSIONS,
    effective_permissions,
    is_within,
    missing_permissions,
    normalize_permissions,
)


class TestNormalizePermissions:
    def test_strips_and_drops_empty(self) -> None:
        assert normalize_permissions([" user.read ", "", "  ", "user.read"]) == {"user.read"}

    def test_none_is_empty(self) -> None:
        assert normalize_permissions(None) == frozenset()


class TestEffectivePermissions:
    """Scope narrows the identity's base set, never widens it."""

    def test_no_scope_inherits_base(self) -> None:
        assert effective_permissions({"a", "b"}, None) == {"a", "b"}

    def test_scope_is_intersected_with_base(self) -> None:
        assert effective_permissions({"a", "b"}, ["b", "c"]) == {"b"}

    def test_empty_scope_grants_nothing(self) -> None:
        assert effective_permissions({"a", "b"}, []) == frozenset()

    def test_wildcard_scope_means_no_narrowing(self) -> None:
        assert effective_permissions({"a"}, [ALL_PERMISSIONS]) == {"a"}

    def test_wildcard_base_keeps_scope(self) -> None:
        assert effective_permissions({ALL_PERMISSIONS}, ["x.read"]) == {"x.read"}

    def test_wildcard_disabled_is_plain_string(self) -> None:
        result = effective_permissions({ALL_PERMISSIONS, "a"}, [ALL_PERMISSIONS, "a"], wildcard=False)
        assert result == {"a"}


class TestMissingPermissions:
    def test_superset_has_nothing_missing(self) -> None:
        assert missing_permissions({"a"}, {"a", "b"}) == frozenset()

    def test_reports_missing(self) -> None:
        assert missing_permissions({"a", "c"}, {"a"}) == {"c"}

    def test_wildcard_holder_has_everything(self) -> None:
        assert missing_permissions({"admin.write"}, {ALL_PERMISSIONS}) == frozenset()

    def test_wildcard_ignored_when_disabled(self) -> None:
        assert missing_permissions({"a"}, {ALL_PERMISSIONS}, wildcard=False) == {"a"}


class TestIsWithin:
    def test_subset(self) -> None:
        assert is_within(["a"], {"a", "b"})

    def test_not_subset(self) -> None:
        assert not is_within(["a", "z"], {"a", "b"})

    def test_requesting_wildcard_needs_wildcard(self) -> None:
        assert not is_within([ALL_PERMISSIONS], {"a"})
        assert is_within([ALL_PERMISSIONS], {ALL_PERMISSIONS})

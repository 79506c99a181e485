"""Unit tests for ActionRegistry."""

import pytest

from actiongate.application.actions import ActionHandler
from actiongate.domain.exceptions import ActionNotFound
from actiongate.infrastructure.actions.registry import ActionRegistry

BUILTIN_ACTIONS = {
    "system.ping",
    "system.actions",
    "user.info",
    "user.update",
    "user.change_password",
    "user.list",
    "token.create",
    "token.list",
    "token.revoke",
    "permission.list",
    "permission.set",
    "permission.remove",
}


class EchoAction(ActionHandler):
    action_type = "demo.echo"
    name = "Echo"
    version = "2.0.0"

    async def execute(self, params, caller) -> dict:
        return {}


class OtherEchoAction(EchoAction):
    pass


class DisabledAction(ActionHandler):
    action_type = "demo.disabled"
    enabled = False

    async def execute(self, params, caller) -> dict:
        return {}


@pytest.fixture
def empty_registry(handler_context) -> ActionRegistry:
    return ActionRegistry(handler_context)


class TestRegisterResolve:
    def test_register_then_resolve(self, empty_registry) -> None:
        empty_registry.register("demo.echo", EchoAction)
        handler = empty_registry.resolve("demo.echo")
        assert isinstance(handler, EchoAction)
        assert empty_registry.has("demo.echo")

    def test_resolve_is_memoized(self, empty_registry) -> None:
        empty_registry.register("demo.echo", EchoAction)
        assert empty_registry.resolve("demo.echo") is empty_registry.resolve("demo.echo")

    def test_unknown_key(self, empty_registry) -> None:
        with pytest.raises(ActionNotFound):
            empty_registry.resolve("nope.nothing")

    def test_invalid_key_rejected(self, empty_registry) -> None:
        with pytest.raises(ValueError):
            empty_registry.register("bad key", EchoAction)

    def test_last_write_wins(self, empty_registry) -> None:
        empty_registry.register("demo.echo", EchoAction)
        first = empty_registry.resolve("demo.echo")
        empty_registry.register("demo.echo", OtherEchoAction)

        second = empty_registry.resolve("demo.echo")

        assert isinstance(second, OtherEchoAction)
        assert second is not first

    def test_clear_cache_constructs_new_instance(self, empty_registry) -> None:
        empty_registry.register("demo.echo", EchoAction)
        before = empty_registry.resolve("demo.echo")

        empty_registry.clear_cache()

        after = empty_registry.resolve("demo.echo")
        assert after is not before
        assert isinstance(after, EchoAction)

    def test_disabled_action_still_resolves(self, empty_registry) -> None:
        empty_registry.register("demo.disabled", DisabledAction)
        assert empty_registry.resolve("demo.disabled").enabled is False

    def test_unregister(self, empty_registry) -> None:
        empty_registry.register("demo.echo", EchoAction)
        assert empty_registry.unregister("demo.echo") is True
        assert empty_registry.unregister("demo.echo") is False
        assert not empty_registry.has("demo.echo")

    def test_handlers_receive_registry_in_context(self, empty_registry) -> None:
        empty_registry.register("demo.echo", EchoAction)
        assert empty_registry.resolve("demo.echo")._context.registry is empty_registry


class TestDiscover:
    def test_discovers_builtin_actions(self, empty_registry) -> None:
        registered = empty_registry.discover()
        assert set(registered) == BUILTIN_ACTIONS
        assert set(empty_registry.keys()) == BUILTIN_ACTIONS

    def test_discover_is_idempotent(self, empty_registry) -> None:
        empty_registry.discover()
        handler = empty_registry.resolve("system.ping")

        assert empty_registry.discover() == []
        assert empty_registry.resolve("system.ping") is handler

    def test_discover_unknown_package(self, empty_registry) -> None:
        with pytest.raises(ModuleNotFoundError):
            empty_registry.discover(["actiongate.no_such_package"])


class TestIntrospection:
    def test_statistics(self, empty_registry) -> None:
        empty_registry.register("demo.echo", EchoAction)
        empty_registry.register("demo.disabled", DisabledAction)

        stats = empty_registry.statistics()

        assert stats["total"] == 2
        assert stats["enabled"] == 1
        assert stats["disabled"] == 1
        assert stats["versions"] == {"2.0.0": 1, "1.0.0": 1}
        assert stats["cached_instances"] == 2

    def test_descriptor(self, registry) -> None:
        descriptor = registry.descriptor("user.list")

        assert descriptor.action_type == "user.list"
        assert descriptor.required_permissions == {"user.list"}
        assert "per_page" in descriptor.parameters["properties"]
        assert descriptor.handler.endswith("ListUsersAction")

    def test_all_is_sorted(self, registry) -> None:
        assert list(registry.all()) == sorted(BUILTIN_ACTIONS)

    def test_unconstructible_handler_is_skipped(self, empty_registry, caplog) -> None:
        def broken_factory(context):
            raise RuntimeError("missing dependency")

        empty_registry.register("demo.echo", EchoAction)
        empty_registry.register("demo.broken", broken_factory)

        assert list(empty_registry.all()) == ["demo.echo"]
        assert empty_registry.statistics()["enabled"] == 1
        assert "Action could not be constructed" in caplog.text

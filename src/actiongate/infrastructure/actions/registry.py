"""Registry: map action_type keys to handler factories and cached instances."""

import importlib
import inspect
import logging
import pkgutil
from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from actiongate.application.actions import ActionHandler, HandlerContext
from actiongate.application.dto.action_descriptor import ActionDescriptor
from actiongate.domain.exceptions import ActionNotFound
from actiongate.domain.value_objects import ActionKey

logger = logging.getLogger(__name__)

HandlerFactory = Callable[[HandlerContext], ActionHandler]

DEFAULT_ACTION_PACKAGES = ("actiongate.application.use_cases",)


class ActionRegistry:
    """Action lookup and lifecycle.

    Factories and cached instances are held in read-only snapshots that are
    replaced wholesale on every write, so concurrent readers never see a
    half-updated map. The registry does not enforce ``enabled``; that is the
    dispatcher's decision.
    """

    def __init__(
        self,
        context: HandlerContext,
        packages: Iterable[str] = DEFAULT_ACTION_PACKAGES,
    ) -> None:
        self._context = replace(context, registry=self)
        self._packages = tuple(packages)
        self._factories: Mapping[str, HandlerFactory] = MappingProxyType({})
        self._instances: Mapping[str, ActionHandler] = MappingProxyType({})
        self._generation = 0

    def register(self, action_type: str, factory: HandlerFactory) -> None:
        """Add or replace a mapping. Last write wins."""
        key = str(ActionKey(action_type))
        if not callable(factory):
            raise TypeError(f"Handler factory for {key} is not callable")
        self._factories = MappingProxyType({**self._factories, key: factory})
        if key in self._instances:
            self._instances = MappingProxyType(
                {k: v for k, v in self._instances.items() if k != key}
            )
        logger.info(
            "Action registered",
            extra={"action_type": key, "handler": _factory_name(factory)},
        )

    def unregister(self, action_type: str) -> bool:
        if action_type not in self._factories:
            return False
        self._factories = MappingProxyType(
            {k: v for k, v in self._factories.items() if k != action_type}
        )
        self._instances = MappingProxyType(
            {k: v for k, v in self._instances.items() if k != action_type}
        )
        logger.info("Action unregistered", extra={"action_type": action_type})
        return True

    def has(self, action_type: str) -> bool:
        return action_type in self._factories

    def keys(self) -> list[str]:
        return sorted(self._factories)

    def resolve(self, action_type: str) -> ActionHandler:
        """Return the (memoized) handler for ``action_type``.

        Raises ActionNotFound for unknown keys. Disabled handlers resolve
        normally.
        """
        cached = self._instances.get(action_type)
        if cached is not None:
            return cached
        factory = self._factories.get(action_type)
        if factory is None:
            raise ActionNotFound()

        generation = self._generation
        instance = factory(self._context)
        # A clear_cache() or re-register during construction wins over this instance.
        if generation == self._generation and self._factories.get(action_type) is factory:
            self._instances = MappingProxyType({**self._instances, action_type: instance})
        return instance

    def clear_cache(self) -> None:
        """Drop cached instances; the next resolve constructs fresh ones."""
        self._generation += 1
        self._instances = MappingProxyType({})
        logger.info("Action instance cache cleared")

    def discover(self, packages: Iterable[str] | None = None) -> list[str]:
        """Import handler modules and register every concrete ActionHandler.

        Keys already bound to the same class are skipped, so repeated calls
        are no-ops. Returns the keys registered by this call.
        """
        registered: list[str] = []
        for package_name in tuple(packages) if packages is not None else self._packages:
            for handler_cls in _iter_handler_classes(package_name):
                key = handler_cls.action_type
                if self._factories.get(key) is handler_cls:
                    continue
                self.register(key, handler_cls)
                registered.append(key)
        logger.info(
            "Action discovery finished",
            extra={"discovered_count": len(registered), "total_actions": len(self._factories)},
        )
        return registered

    def descriptor(self, action_type: str) -> ActionDescriptor:
        return self.resolve(action_type).descriptor()

    def all(self) -> dict[str, ActionDescriptor]:
        """Descriptors of every constructible action, keyed by action_type.

        Handlers whose factory fails are logged and left out.
        """
        descriptors: dict[str, ActionDescriptor] = {}
        for key in sorted(self._factories):
            handler = self._try_resolve(key)
            if handler is not None:
                descriptors[key] = handler.descriptor()
        return descriptors

    def statistics(self) -> dict[str, Any]:
        enabled = 0
        disabled = 0
        versions: Counter[str] = Counter()
        for key in list(self._factories):
            handler = self._try_resolve(key)
            if handler is None:
                disabled += 1
                continue
            if handler.enabled:
                enabled += 1
            else:
                disabled += 1
            versions[handler.version] += 1
        return {
            "total": len(self._factories),
            "enabled": enabled,
            "disabled": disabled,
            "versions": dict(versions),
            "cached_instances": len(self._instances),
        }

    def _try_resolve(self, action_type: str) -> ActionHandler | None:
        try:
            return self.resolve(action_type)
        except Exception:
            logger.warning(
                "Action could not be constructed",
                extra={"action_type": action_type},
                exc_info=True,
            )
            return None


def _iter_handler_classes(package_name: str) -> list[type[ActionHandler]]:
    """Concrete ActionHandler subclasses defined in a package tree."""
    package = importlib.import_module(package_name)
    modules = [package]
    if hasattr(package, "__path__"):
        for info in pkgutil.walk_packages(package.__path__, prefix=f"{package_name}."):
            modules.append(importlib.import_module(info.name))

    found: list[type[ActionHandler]] = []
    for module in modules:
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if (
                issubclass(obj, ActionHandler)
                and obj.__module__ == module.__name__
                and obj.action_type
                and not inspect.isabstract(obj)
            ):
                found.append(obj)
    return found


def _factory_name(factory: HandlerFactory) -> str:
    return getattr(factory, "__qualname__", type(factory).__qualname__)

"""Action registry."""

from actiongate.infrastructure.actions.registry import ActionRegistry

__all__ = ["ActionRegistry"]

"""Action handler contract."""

from actiongate.application.actions.base import ActionHandler, NoParams, field_errors
from actiongate.application.actions.context import HandlerContext

__all__ = ["ActionHandler", "HandlerContext", "NoParams", "field_errors"]

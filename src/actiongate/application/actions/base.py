"""Base class for action handlers."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from actiongate.application.actions.context import HandlerContext
from actiongate.application.dto.action_descriptor import ActionDescriptor
from actiongate.application.dto.caller import Caller
from actiongate.domain.exceptions import ValidationError


class NoParams(BaseModel):
    """Parameter model for actions that take no input."""

    model_config = ConfigDict(extra="ignore")


class ActionHandler(ABC):
    """An operation reachable through the unified endpoint.

    Subclasses set ``action_type`` and implement ``execute``. Parameters are
    described by a pydantic model; its JSON schema doubles as documentation.
    """

    action_type: ClassVar[str] = ""
    name: ClassVar[str] = ""
    description: ClassVar[str] = "No description provided"
    version: ClassVar[str] = "1.0.0"
    enabled: ClassVar[bool] = True
    required_permissions: ClassVar[frozenset[str]] = frozenset()
    params_model: ClassVar[type[BaseModel]] = NoParams
    examples: ClassVar[list[dict[str, Any]]] = []
    success_message: ClassVar[str] = "Action executed successfully"

    def __init__(self, context: HandlerContext) -> None:
        self._context = context
        self._descriptor: ActionDescriptor | None = None

    @property
    def _uow_factory(self):
        return self._context.unit_of_work_factory

    def validate(self, payload: dict[str, Any]) -> BaseModel:
        """Validate request fields (everything but ``action_type``)."""
        data = {k: v for k, v in payload.items() if k != "action_type"}
        try:
            return self.params_model.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(details=field_errors(e)) from None

    @abstractmethod
    async def execute(self, params: Any, caller: Caller) -> dict[str, Any]:
        """Run the action. Raise domain errors for expected failures."""

    def responses(self) -> dict[str, Any]:
        return {
            "success": {"status": "success", "message": self.success_message, "data": {}},
            "error": {"status": "error", "message": "Error message", "error_code": "ERROR_CODE"},
        }

    def descriptor(self) -> ActionDescriptor:
        if self._descriptor is None:
            self._descriptor = self._build_descriptor()
        return self._descriptor

    def _build_descriptor(self) -> ActionDescriptor:
        cls = type(self)
        return ActionDescriptor(
            action_type=self.action_type,
            name=self.name or self.action_type,
            description=self.description,
            version=self.version,
            enabled=self.enabled,
            required_permissions=frozenset(self.required_permissions),
            parameters=self.params_model.model_json_schema(),
            responses=self.responses(),
            examples=list(self.examples),
            handler=f"{cls.__module__}.{cls.__qualname__}",
        )


def field_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Flatten pydantic errors into ``{field: [messages]}``."""
    details: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        details.setdefault(loc, []).append(err.get("msg", "Invalid value"))
    return details

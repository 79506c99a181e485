"""Action descriptor DTO - read-only action metadata."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ActionDescriptor:
    """Metadata of a registered action, as seen by dispatch and documentation."""

    action_type: str
    name: str
    description: str
    version: str
    enabled: bool
    required_permissions: frozenset[str]
    parameters: dict[str, Any] = field(default_factory=dict)
    responses: dict[str, Any] = field(default_factory=dict)
    examples: list[dict[str, Any]] = field(default_factory=list)
    handler: str = ""

    def summary(self) -> dict[str, Any]:
        """Short form for listings."""
        return {
            "action_type": self.action_type,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "enabled": self.enabled,
            "required_permissions": sorted(self.required_permissions),
        }

    def to_dict(self) -> dict[str, Any]:
        """Full documentation form."""
        return {
            **self.summary(),
            "parameters": self.parameters,
            "responses": self.responses,
            "examples": self.examples,
        }

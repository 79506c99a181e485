"""Action type identifier."""

import re
from dataclasses import dataclass

ACTION_KEY_MAX_LENGTH = 100
_ACTION_KEY_RE = re.compile(r"[A-Za-z0-9._-]+")


@dataclass(frozen=True)
class ActionKey:
    """Stable action identifier, ``domain.verb`` by convention."""

    value: str

    def __post_init__(self) -> None:
        problem = action_key_problem(self.value)
        if problem:
            raise ValueError(problem)

    def __str__(self) -> str:
        return self.value


def action_key_problem(value: object, max_length: int = ACTION_KEY_MAX_LENGTH) -> str | None:
    """Return a human-readable reason why ``value`` is not a valid key, or None."""
    if value is None:
        return "action_type is required"
    if not isinstance(value, str):
        return "action_type must be a string"
    if not value:
        return "action_type is required"
    if len(value) > max_length:
        return f"action_type must not exceed {max_length} characters"
    if not _ACTION_KEY_RE.fullmatch(value):
        return "action_type may only contain letters, digits, '.', '_' and '-'"
    return None

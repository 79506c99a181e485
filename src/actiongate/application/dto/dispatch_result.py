"""Dispatch result DTO."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DispatchResult:
    """HTTP status and envelope produced by the dispatcher."""

    status_code: int
    body: dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status_code < 400

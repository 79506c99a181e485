"""Response envelopes for the unified endpoint."""

import math
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ResponseFormatter:
    """Builds success and error envelopes with a shared request id and timestamp."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock

    def _timestamp(self) -> str:
        return self._clock().isoformat().replace("+00:00", "Z")

    def success(
        self,
        data: dict[str, Any] | None = None,
        message: str = "Action executed successfully",
        *,
        request_id: str,
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "status": "success",
            "message": message,
            "data": data or {},
            "timestamp": self._timestamp(),
            "request_id": request_id,
        }
        if meta:
            body["meta"] = meta
        return body

    def error(
        self,
        message: str,
        error_code: str,
        *,
        request_id: str,
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "status": "error",
            "message": message,
            "error_code": str(error_code),
            "timestamp": self._timestamp(),
            "request_id": request_id,
        }
        if details:
            body["details"] = details
        return body

    def validation_error(
        self,
        errors: dict[str, list[str]],
        *,
        request_id: str,
        message: str = "Request validation failed",
    ) -> dict[str, Any]:
        return self.error(message, "VALIDATION_ERROR", request_id=request_id, details=errors)


def paginate(items: list[Any], *, page: int, per_page: int, total: int) -> dict[str, Any]:
    """Pagination block used by list actions."""
    last_page = max(1, math.ceil(total / per_page)) if per_page else 1
    first = (page - 1) * per_page + 1 if items else None
    return {
        "current_page": page,
        "per_page": per_page,
        "total": total,
        "last_page": last_page,
        "from": first,
        "to": first + len(items) - 1 if first is not None else None,
        "has_more_pages": page < last_page,
    }

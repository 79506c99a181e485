"""Unit tests for ResponseFormatter and paginate."""

from datetime import UTC, datetime

from actiongate.application.response_formatter import ResponseFormatter, paginate


def _formatter() -> ResponseFormatter:
    return ResponseFormatter(clock=lambda: datetime(2026, 3, 1, 9, 30, tzinfo=UTC))


class TestEnvelopes:
    def test_success(self) -> None:
        body = _formatter().success({"x": 1}, "Done", request_id="r1")
        assert body == {
            "status": "success",
            "message": "Done",
            "data": {"x": 1},
            "timestamp": "2026-03-01T09:30:00Z",
            "request_id": "r1",
        }

    def test_success_with_meta(self) -> None:
        body = _formatter().success(None, request_id="r1", meta={"version": "1.0.0"})
        assert body["data"] == {}
        assert body["meta"] == {"version": "1.0.0"}

    def test_error_omits_empty_details(self) -> None:
        body = _formatter().error("Action not found", "ACTION_NOT_FOUND", request_id="r2")
        assert "details" not in body
        assert body["status"] == "error"
        assert body["error_code"] == "ACTION_NOT_FOUND"

    def test_validation_error(self) -> None:
        body = _formatter().validation_error({"name": ["required"]}, request_id="r3")
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"] == {"name": ["required"]}


class TestPaginate:
    def test_middle_page(self) -> None:
        block = paginate([1, 2], page=2, per_page=2, total=5)
        assert block == {
            "current_page": 2,
            "per_page": 2,
            "total": 5,
            "last_page": 3,
            "from": 3,
            "to": 4,
            "has_more_pages": True,
        }

    def test_empty(self) -> None:
        block = paginate([], page=1, per_page=15, total=0)
        assert block["last_page"] == 1
        assert block["from"] is None
        assert block["to"] is None
        assert block["has_more_pages"] is False

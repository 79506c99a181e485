"""Unified entry point - validate, authenticate, resolve, authorize, execute."""

import logging
import time
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.application.dto.dispatch_result import DispatchResult
from actiongate.application.ports import AuditSink, Authenticator, PermissionChecker
from actiongate.application.response_formatter import ResponseFormatter
from actiongate.domain.entities import AuditEvent
from actiongate.domain.exceptions import (
    ActionGateError,
    ActionNotFound,
    InternalError,
    MethodNotAllowed,
    Unauthorized,
    ValidationError,
)
from actiongate.domain.value_objects import ACTION_KEY_MAX_LENGTH, action_key_problem

logger = logging.getLogger(__name__)

ACCEPTED_METHOD = "POST"


class Dispatcher:
    """Runs one request through the dispatch pipeline.

    The first failing stage ends the request. Every outcome, success or
    error, is turned into an envelope here and reported to the audit sink
    with the request id and latency.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        registry,
        permission_checker: PermissionChecker,
        audit_sink: AuditSink,
        *,
        formatter: ResponseFormatter | None = None,
        expose_error_details: bool = False,
        max_action_type_length: int = ACTION_KEY_MAX_LENGTH,
    ) -> None:
        self._authenticator = authenticator
        self._registry = registry
        self._permission_checker = permission_checker
        self._audit = audit_sink
        self._formatter = formatter or ResponseFormatter()
        self._expose_error_details = expose_error_details
        self._max_action_type_length = max_action_type_length

    async def dispatch(
        self,
        method: str,
        payload: Any,
        bearer_token: str | None,
        client: dict[str, Any] | None = None,
    ) -> DispatchResult:
        """Handle one request and return its status code and envelope."""
        request_id = str(uuid4())
        started = time.perf_counter()
        caller: Caller | None = None
        action_type = _peek_action_type(payload)

        try:
            self._check_method(method)
            action_type = self._validate_shape(payload)
            caller = await self._authenticate(bearer_token)
            handler = self._resolve(action_type)
            await self._permission_checker.authorize(
                caller, handler.descriptor(), request_id=request_id
            )
            params = handler.validate(payload)
            data = await handler.execute(params, caller)
            result = DispatchResult(
                status_code=200,
                body=self._formatter.success(
                    data, handler.success_message, request_id=request_id
                ),
            )
        except ActionGateError as e:
            result = self._error_result(e, request_id)
        except Exception as e:
            logger.exception(
                "Unhandled error while dispatching action",
                extra={"request_id": request_id, "action_type": action_type},
            )
            result = self._internal_error(e, request_id)

        self._report(
            request_id=request_id,
            action_type=action_type,
            caller=caller,
            result=result,
            payload=payload,
            method=method,
            client=client,
            latency_ms=(time.perf_counter() - started) * 1000,
        )
        return result

    def _check_method(self, method: str) -> None:
        if (method or "").upper() != ACCEPTED_METHOD:
            raise MethodNotAllowed()

    def _validate_shape(self, payload: Any) -> str:
        if not isinstance(payload, dict):
            raise ValidationError(
                "Request body must be a JSON object",
                details={"__root__": ["Request body must be a JSON object"]},
            )
        action_type = payload.get("action_type")
        problem = action_key_problem(action_type, self._max_action_type_length)
        if problem:
            raise ValidationError.for_field("action_type", problem)
        return action_type

    async def _authenticate(self, bearer_token: str | None) -> Caller:
        if not bearer_token:
            raise Unauthorized()
        caller = await self._authenticator.validate(bearer_token)
        if caller is None:
            raise Unauthorized()
        return caller

    def _resolve(self, action_type: str) -> ActionHandler:
        handler = self._registry.resolve(action_type)
        if not handler.enabled:
            raise ActionNotFound()
        return handler

    def _error_result(self, error: ActionGateError, request_id: str) -> DispatchResult:
        if isinstance(error, InternalError):
            return self._internal_error(error, request_id)
        return DispatchResult(
            status_code=error.http_status,
            body=self._formatter.error(
                error.message,
                error.error_code,
                request_id=request_id,
                details=error.details,
            ),
        )

    def _internal_error(self, error: Exception, request_id: str) -> DispatchResult:
        details = {"exception": type(error).__name__} if self._expose_error_details else None
        return DispatchResult(
            status_code=InternalError.http_status,
            body=self._formatter.error(
                InternalError.default_message,
                InternalError.error_code,
                request_id=request_id,
                details=details,
            ),
        )

    def _report(
        self,
        *,
        request_id: str,
        action_type: str | None,
        caller: Caller | None,
        result: DispatchResult,
        payload: Any,
        method: str,
        client: dict[str, Any] | None,
        latency_ms: float,
    ) -> None:
        outcome = "success" if result.ok else result.body.get("error_code", "error")
        event = AuditEvent(
            event="request_completed",
            request_id=request_id,
            timestamp=datetime.now(UTC),
            action_type=action_type,
            identity_id=caller.identity_id if caller else None,
            outcome=outcome,
            status_code=result.status_code,
            latency_ms=round(latency_ms, 3),
            details={"method": method, **(client or {})},
            request_data=payload if isinstance(payload, dict) else None,
        )
        try:
            self._audit.emit(event)
        except Exception:
            logger.exception("Audit sink failed", extra={"request_id": request_id})


def _peek_action_type(payload: Any) -> str | None:
    """Best-effort action type for audit records before validation."""
    if isinstance(payload, dict):
        value = payload.get("action_type")
        if isinstance(value, str):
            return value[:ACTION_KEY_MAX_LENGTH]
    return None

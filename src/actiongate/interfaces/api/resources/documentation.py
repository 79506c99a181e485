"""Read-only action documentation endpoints."""

from uuid import uuid4

import falcon.asgi

from actiongate.application.response_formatter import ResponseFormatter
from actiongate.domain.exceptions import ActionNotFound
from actiongate.infrastructure.actions.registry import ActionRegistry


class _DocsResource:
    def __init__(self, registry: ActionRegistry, formatter: ResponseFormatter | None = None) -> None:
        self._registry = registry
        self._formatter = formatter or ResponseFormatter()


class ActionDocsResource(_DocsResource):
    """GET /v1/docs/actions - summaries of enabled actions."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actions = [d.summary() for d in self._registry.all().values() if d.enabled]
        resp.media = self._formatter.success(
            {"actions": actions, "count": len(actions)},
            "Actions retrieved",
            request_id=str(uuid4()),
        )
        resp.status = falcon.HTTP_200


class ActionDocResource(_DocsResource):
    """GET /v1/docs/actions/{action_type} - full descriptor of one action."""

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, action_type: str
    ) -> None:
        try:
            descriptor = self._registry.descriptor(action_type)
        except ActionNotFound:
            descriptor = None
        if descriptor is None or not descriptor.enabled:
            error = ActionNotFound()
            resp.media = self._formatter.error(
                error.message, error.error_code, request_id=str(uuid4())
            )
            resp.status = falcon.HTTP_404
            return
        resp.media = self._formatter.success(
            descriptor.to_dict(), "Action documentation retrieved", request_id=str(uuid4())
        )
        resp.status = falcon.HTTP_200


class ActionStatisticsResource(_DocsResource):
    """GET /v1/docs/statistics - registry statistics."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = self._formatter.success(
            self._registry.statistics(), "Statistics retrieved", request_id=str(uuid4())
        )
        resp.status = falcon.HTTP_200

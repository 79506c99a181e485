"""Application entry point and composition root."""

import logging
from uuid import uuid4

import falcon
import falcon.asgi

from actiongate import __version__
from actiongate.application.actions import HandlerContext
from actiongate.application.dispatcher import Dispatcher
from actiongate.application.response_formatter import ResponseFormatter
from actiongate.config import Settings, get_settings
from actiongate.domain.exceptions import InternalError
from actiongate.infrastructure.actions.registry import ActionRegistry
from actiongate.infrastructure.audit.logging_sink import LoggingAuditSink
from actiongate.infrastructure.auth.passwords import PasswordHasher
from actiongate.infrastructure.auth.token_service import TokenService
from actiongate.infrastructure.permission.permission_checker import OverridePermissionChecker
from actiongate.infrastructure.persistence.postgres.connection import create_pool
from actiongate.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from actiongate.interfaces.api.middleware import (
    BearerTokenMiddleware,
    CORSMiddleware,
    PoolLifespanMiddleware,
)
from actiongate.interfaces.api.resources.documentation import (
    ActionDocResource,
    ActionDocsResource,
    ActionStatisticsResource,
)
from actiongate.interfaces.api.resources.health import HealthResource
from actiongate.interfaces.api.resources.unified import UnifiedApiResource
from actiongate.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting actiongate", extra={"version": __version__})
    uvicorn.run(create_actiongate_app(settings), host=settings.host, port=settings.port)


def build_dispatcher(
    uow_factory, settings: Settings
) -> tuple[Dispatcher, ActionRegistry]:
    """Wire token service, checker, registry and audit sink into a dispatcher."""
    audit_sink = LoggingAuditSink(extra_sensitive_fields=settings.audit_sensitive_fields)
    tokens = TokenService(uow_factory, allow_wildcard=settings.allow_wildcard_permission)
    permission_checker = OverridePermissionChecker(
        uow_factory,
        audit_sink,
        allow_wildcard=settings.allow_wildcard_permission,
    )
    context = HandlerContext(
        unit_of_work_factory=uow_factory,
        settings=settings,
        tokens=tokens,
        permissions=permission_checker,
        passwords=PasswordHasher(),
    )
    registry = ActionRegistry(context, settings.action_packages)
    registry.discover()

    dispatcher = Dispatcher(
        tokens,
        registry,
        permission_checker,
        audit_sink,
        formatter=ResponseFormatter(),
        expose_error_details=settings.expose_error_details,
        max_action_type_length=settings.max_action_type_length,
    )
    return dispatcher, registry


def create_actiongate_app(settings: Settings | None = None) -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)
    dispatcher, registry = build_dispatcher(uow_factory, settings)

    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(settings.cors_origin_list),
            PoolLifespanMiddleware(pool),
            BearerTokenMiddleware(),
        ],
    )
    add_routes(app, dispatcher, registry, HealthResource(pool))

    formatter = ResponseFormatter()

    async def handle_unexpected(req, resp, ex, params):
        logger.exception("Unhandled error", extra={"path": req.path})
        error = InternalError()
        resp.status = falcon.HTTP_500
        resp.media = formatter.error(error.message, error.error_code, request_id=str(uuid4()))

    # HTTPError keeps Falcon's default handler; the most specific handler wins.
    app.add_error_handler(Exception, handle_unexpected)
    return app


def add_routes(
    app: falcon.asgi.App,
    dispatcher: Dispatcher,
    registry: ActionRegistry,
    health: HealthResource,
) -> None:
    app.add_route("/v1/api", UnifiedApiResource(dispatcher))
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    app.add_route("/v1/docs/actions", ActionDocsResource(registry))
    app.add_route("/v1/docs/actions/{action_type}", ActionDocResource(registry))
    app.add_route("/v1/docs/statistics", ActionStatisticsResource(registry))

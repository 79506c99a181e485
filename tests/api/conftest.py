"""Fixtures for API tests."""

import falcon.asgi
import pytest
import pytest_asyncio
from falcon.testing import ASGIConductor, TestClient

from actiongate.interfaces.api.middleware import BearerTokenMiddleware, CORSMiddleware
from actiongate.interfaces.api.resources.health import HealthResource
from actiongate.main import add_routes


@pytest.fixture
def app(dispatcher, registry):
    """Falcon ASGI app wired to in-memory repositories."""
    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(["https://app.example.com"]),
            BearerTokenMiddleware(),
        ],
    )
    add_routes(app, dispatcher, registry, HealthResource())
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def bearer(token_service, add_identity):
    """Issue a token and return the Authorization header for it."""

    async def _bearer(permissions=frozenset()) -> dict[str, str]:
        identity = await add_identity(permissions)
        issued = await token_service.issue(identity.id, "api-test")
        return {"Authorization": f"Bearer {issued.secret}"}

    return _bearer


@pytest_asyncio.fixture
async def conductor(app):
    """Async test client for tests that also await fixtures."""
    async with ASGIConductor(app) as conductor:
        yield conductor

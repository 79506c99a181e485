"""Auth middleware - extracts the bearer credential from the request."""

import falcon.asgi

_BEARER_PREFIX = "bearer "


def extract_bearer_token(header: str | None) -> str | None:
    """Credential from an ``Authorization: Bearer <token>`` header, else None."""
    if not header or not header[: len(_BEARER_PREFIX)].lower() == _BEARER_PREFIX:
        return None
    token = header[len(_BEARER_PREFIX):].strip()
    return token or None


class BearerTokenMiddleware:
    """Sets req.context.bearer_token. Validation happens in the dispatcher."""

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        req.context.bearer_token = extract_bearer_token(req.get_header("Authorization"))

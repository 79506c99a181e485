"""Unified action endpoint - /v1/api."""

import logging

import falcon
import falcon.asgi
from falcon.constants import COMBINED_METHODS

from actiongate.application.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class UnifiedApiResource:
    """Every HTTP method lands here; the dispatcher decides what is allowed.

    A body that is missing, not JSON, or of another media type is passed on
    as ``None`` and rejected by the dispatcher as a validation error.
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def _handle(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        payload = await _read_payload(req)
        result = await self._dispatcher.dispatch(
            req.method,
            payload,
            getattr(req.context, "bearer_token", None),
            client={"ip": req.remote_addr, "user_agent": req.user_agent},
        )
        resp.status = result.status_code
        resp.media = result.body
        if result.status_code == 405:
            resp.set_header("Allow", "POST")

    on_post = _handle


# OPTIONS is answered by the CORS preflight; every other method Falcon can
# route goes through the dispatcher and gets the 405 envelope.
for _method in COMBINED_METHODS:
    if _method not in ("POST", "OPTIONS"):
        setattr(UnifiedApiResource, f"on_{_method.lower()}", UnifiedApiResource._handle)


async def _read_payload(req: falcon.asgi.Request):
    try:
        return await req.get_media(default_when_empty=None)
    except (falcon.MediaMalformedError, falcon.HTTPUnsupportedMediaType) as e:
        logger.debug("Unreadable request body", extra={"error": e.title})
        return None

"""Per-request id for the fake platform API."""

import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from dashboard.logging import get_logger

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Give each fake backend request an id and log the answer.

    A dashboard test can send X-Request-ID to follow one call (a factory
    delete, a page fetch) through the fake backend's log; otherwise a uuid4
    is used. The id is echoed on the response, and simulated failures and
    handler errors logged meanwhile carry it as request_id.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.debug(
            "fake_backend_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
        )
        return response

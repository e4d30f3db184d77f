"""HTTP plumbing shared by the API services.

Every request goes through send(), which is the one place where httpx
responses and transport errors are turned into NetworkError.
"""

from typing import Any

import httpx

from dashboard.config import Settings
from dashboard.exceptions import NOT_MODIFIED, NetworkError
from dashboard.logging import get_logger

logger = get_logger(__name__)


def create_client(settings: Settings, **kwargs: Any) -> httpx.AsyncClient:
    """Build the AsyncClient all services of one dashboard share.

    Extra keyword arguments go straight to httpx (tests pass ``transport``).
    """
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.api_request_timeout,
        **kwargs,
    )


def _server_message(response: httpx.Response) -> str | None:
    """Extract the ``message`` field of an error body, if the body has one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


async def send(client: httpx.AsyncClient, method: str, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
    """Issue a request and return the response if it succeeded.

    Raises:
        NetworkError: when no usable response arrived (status None), on 304,
            and on any 4xx/5xx response (with the server's message when it
            sent one).
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.RequestError as exc:
        logger.warning("api_request_failed", method=method, url=str(url), error=str(exc))
        raise NetworkError(None) from exc

    if response.status_code == NOT_MODIFIED:
        raise NetworkError(NOT_MODIFIED)
    if response.is_error:
        message = _server_message(response)
        logger.warning(
            "api_request_rejected",
            method=method,
            url=str(response.request.url),
            status=response.status_code,
            message=message,
        )
        raise NetworkError(response.status_code, message)
    return response


def parse_json(response: httpx.Response) -> Any:
    """Decode a successful response body.

    Raises:
        NetworkError: with the response status when the body is not JSON.
    """
    try:
        return response.json()
    except ValueError as exc:
        logger.warning(
            "api_response_malformed",
            url=str(response.request.url),
            status=response.status_code,
            content_type=response.headers.get("content-type"),
        )
        raise NetworkError(response.status_code) from exc

"""Factory API service.

Lists the current user's factories page by page, follows the page links the
API advertises, and deletes factories by id. The service owns the list of
the currently loaded page and its PagesInfo; both are updated in place so
controllers can hold on to them across fetches.
"""

from typing import Any

import httpx
from pydantic import ValidationError

from dashboard.api.http import parse_json, send
from dashboard.api.user import UserService
from dashboard.exceptions import NetworkError
from dashboard.logging import get_logger
from dashboard.schemas.entities import DeleteResult, Factory
from dashboard.schemas.pagination import PagesInfo, page_number, validate_window

logger = get_logger(__name__)

FIND_PATH = "/api/factory/find"


def _window_of(url: str | httpx.URL) -> tuple[int, int] | None:
    """Read (maxItems, skipCount) back out of a page link."""
    params = httpx.URL(url).params
    try:
        return int(params["maxItems"]), int(params.get("skipCount", 0))
    except (KeyError, ValueError):
        return None


def _validate_factories(response: httpx.Response, items: list[Any]) -> list[Factory]:
    try:
        return [Factory.model_validate(item) for item in items]
    except ValidationError as exc:
        logger.warning("factory_payload_invalid", status=response.status_code, errors=exc.error_count())
        raise NetworkError(response.status_code) from exc


class FactoryService:
    def __init__(self, client: httpx.AsyncClient, user_service: UserService) -> None:
        self._client = client
        self._users = user_service
        self._page_factories: list[Factory] = []
        self._factories_by_id: dict[str, Factory] = {}
        self._pages_info = PagesInfo()
        self._page_links: dict[str, str] = {}
        self._etag: str | None = None
        self._sequence = 0

    def get_page_factories(self) -> list[Factory]:
        """The live list of the currently loaded page.

        The same list object is returned for the lifetime of the service.
        """
        return self._page_factories

    def get_pages_info(self) -> PagesInfo:
        return self._pages_info

    def get_page_links(self) -> dict[str, str]:
        return dict(self._page_links)

    def get_factory_by_id(self, factory_id: str) -> Factory | None:
        return self._factories_by_id.get(factory_id)

    async def fetch_factories(self, max_items: int, skip_count: int) -> list[Factory]:
        """Load the page window (max_items, skip_count) of the user's factories."""
        validate_window(max_items, skip_count)
        user = await self._users.fetch_user()
        params = {"creator.userId": user.id, "maxItems": max_items, "skipCount": skip_count}
        return await self._fetch_page(httpx.URL(FIND_PATH, params=params))

    async def fetch_factory_page(self, page_key: str) -> list[Factory]:
        """Load the page behind one of the advertised links (first, prev, next, last)."""
        url = self._page_links.get(page_key)
        if url is None:
            raise NetworkError(None, "Error. No necessary link.")
        return await self._fetch_page(httpx.URL(url))

    async def fetch_factory_by_id(self, factory_id: str) -> Factory:
        response = await send(self._client, "GET", f"/api/factory/{factory_id}")
        data = parse_json(response)
        if not isinstance(data, dict):
            raise NetworkError(response.status_code)
        [factory] = _validate_factories(response, [data])
        self._factories_by_id[factory.id] = factory
        return factory

    async def delete_factory_by_id(self, factory_id: str) -> DeleteResult:
        response = await send(self._client, "DELETE", f"/api/factory/{factory_id}")
        self._factories_by_id.pop(factory_id, None)
        if not response.content:
            return DeleteResult()
        try:
            return DeleteResult.model_validate(parse_json(response))
        except ValidationError as exc:
            raise NetworkError(response.status_code) from exc

    async def _fetch_page(self, url: httpx.URL) -> list[Factory]:
        self._sequence += 1
        sequence = self._sequence
        headers = {"If-None-Match": self._etag} if self._etag else {}

        response = await send(self._client, "GET", url, headers=headers)
        data = parse_json(response)
        if not isinstance(data, list):
            raise NetworkError(response.status_code)
        factories = _validate_factories(response, data)

        if sequence != self._sequence:
            # A newer fetch was issued while this one was in flight
            logger.debug("stale_factories_page_discarded", url=str(url), sequence=sequence)
            return factories

        self._etag = response.headers.get("ETag")
        self._page_factories[:] = factories
        for factory in factories:
            self._factories_by_id[factory.id] = factory
        self._update_pages(response, url)
        logger.info(
            "factories_fetched",
            count=len(factories),
            page=self._pages_info.current_page_number,
            count_of_pages=self._pages_info.count_of_pages,
        )
        return factories

    def _update_pages(self, response: httpx.Response, url: httpx.URL) -> None:
        self._page_links = {rel: link["url"] for rel, link in response.links.items() if "url" in link}

        window = _window_of(url)
        if window is None:
            return
        max_items, skip_count = window
        self._pages_info.current_page_number = page_number(skip_count, max_items)

        last = self._page_links.get("last")
        last_window = _window_of(last) if last else None
        if last_window is None:
            self._pages_info.count_of_pages = None
        else:
            self._pages_info.count_of_pages = page_number(last_window[1], max_items)

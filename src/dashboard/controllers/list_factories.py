"""Factories list view."""

from collections.abc import Sequence
from typing import Any

from dashboard.api.factory import FactoryService
from dashboard.config import settings
from dashboard.controllers.list_controller import PaginatedListController
from dashboard.schemas.entities import DeleteResult, Factory
from dashboard.schemas.pagination import PagesInfo
from dashboard.state import DashboardState
from dashboard.ui import ConfirmDialog, Notifier
from dashboard.widgets.list_helper import ListHelperFactory


class ListFactoriesController(PaginatedListController):
    """Lists the current user's factories and deletes them in bulk."""

    helper_id = "list-factories"
    entity_singular = "factory"
    entity_plural = "factories"

    def __init__(
        self,
        factory_service: FactoryService,
        *,
        list_helper_factory: ListHelperFactory,
        notifier: Notifier,
        confirm_dialog: ConfirmDialog,
        max_items: int | None = None,
        state: DashboardState | None = None,
    ) -> None:
        self._factories = factory_service
        super().__init__(
            list_helper_factory=list_helper_factory,
            notifier=notifier,
            confirm_dialog=confirm_dialog,
            max_items=max_items or settings.factories_page_size,
            state=state,
        )

    async def _fetch_window(self, max_items: int, skip_count: int) -> list[Factory]:
        return await self._factories.fetch_factories(max_items, skip_count)

    async def _fetch_by_key(self, page_key: str) -> list[Factory]:
        return await self._factories.fetch_factory_page(page_key)

    async def _delete_by_id(self, item_id: str) -> DeleteResult:
        return await self._factories.delete_factory_by_id(item_id)

    def _page_items(self) -> Sequence[Any]:
        return self._factories.get_page_factories()

    def _pages_info(self) -> PagesInfo:
        return self._factories.get_pages_info()

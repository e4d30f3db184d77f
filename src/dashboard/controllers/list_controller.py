"""Paginated, filterable, multi-select list views backed by the REST API.

PaginatedListController drives one view: it loads a page window from an API
service, hands the page to a ListHelper for filtering and selection, and
deletes the selected entities in bulk. Subclasses bind it to one entity
kind by implementing the four service hooks.

Every load follows the same cycle::

    Idle -> Loading -> Loaded | NotModified | Failed -> list helper refreshed

A 304 answer is not an error: the page already held by the service is still
valid. Loads are numbered, and the answer to a load that has since been
superseded by a newer one is dropped without touching the view.
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Self

from dashboard.controllers.pagination import PaginationInfo, pagination_info
from dashboard.exceptions import ConfirmationDeclined, EmptySelectionError, NetworkError, PartialDeleteFailure
from dashboard.logging import get_logger
from dashboard.schemas.pagination import PagesInfo, validate_window
from dashboard.state import DashboardState
from dashboard.ui import ConfirmDialog, Notifier
from dashboard.widgets.list_helper import ListHelper, ListHelperFactory

logger = get_logger(__name__)

UPDATE_FAILED_MESSAGE = "Update information failed."
DELETE_FAILED_MESSAGE = "Delete failed."


class LoadState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    NOT_MODIFIED = "not_modified"
    FAILED = "failed"


@dataclass
class BulkDeleteResult:
    """What a bulk delete did. ``confirmed`` is False when nothing was attempted."""

    requested: list[str] = field(default_factory=list)
    failed: dict[str, BaseException] = field(default_factory=dict)
    confirmed: bool = False

    @property
    def deleted(self) -> list[str]:
        return [item_id for item_id in self.requested if self.confirmed and item_id not in self.failed]

    @property
    def partial_failure(self) -> PartialDeleteFailure | None:
        if not self.failed:
            return None
        return PartialDeleteFailure(self.failed)


class PaginatedListController:
    helper_id: str = "list"
    entity_singular: str = "item"
    entity_plural: str = "items"
    id_field: str = "id"

    def __init__(
        self,
        *,
        list_helper_factory: ListHelperFactory,
        notifier: Notifier,
        confirm_dialog: ConfirmDialog,
        max_items: int,
        state: DashboardState | None = None,
    ) -> None:
        validate_window(max_items, 0)
        self._helper_factory = list_helper_factory
        self._notifier = notifier
        self._confirm_dialog = confirm_dialog
        self.list_helper: ListHelper = list_helper_factory.get_helper(self.helper_id)

        self.max_items = max_items
        self.skip_count = 0
        self.filter: dict[str, str] = {"name": ""}

        self.is_loading = True
        self.load_state = LoadState.IDLE
        self._sequence = 0

        self.items = self._page_items()
        self.pages_info = self._pages_info()

        if state is not None:
            state.show_ide = False

    @classmethod
    async def create(cls, *args: Any, **kwargs: Any) -> Self:
        """Build the controller and wait for its first page."""
        controller = cls(*args, **kwargs)
        await controller.load()
        return controller

    # Service hooks implemented per entity kind

    async def _fetch_window(self, max_items: int, skip_count: int) -> Any:
        raise NotImplementedError

    async def _fetch_by_key(self, page_key: str) -> Any:
        raise NotImplementedError

    async def _delete_by_id(self, item_id: str) -> Any:
        raise NotImplementedError

    def _page_items(self) -> Sequence[Any]:
        raise NotImplementedError

    def _pages_info(self) -> PagesInfo:
        raise NotImplementedError

    @property
    def load_error_message(self) -> str:
        return f"Failed to retrieve the list of {self.entity_plural}."

    # Loading

    async def load(self) -> None:
        """Load the first page window."""
        self.skip_count = 0
        await self._run_load(lambda: self._fetch_window(self.max_items, self.skip_count), self.load_error_message)

    async def fetch_page(self, page_key: str) -> None:
        """Load the page behind a page link (first, prev, next, last)."""
        await self._run_load(lambda: self._fetch_by_key(page_key), UPDATE_FAILED_MESSAGE)
        if self.load_state == LoadState.LOADED:
            # Keep later refreshes on the page the user is looking at
            self.skip_count = (self.pages_info.current_page_number - 1) * self.max_items

    async def refresh(self) -> None:
        """Reload the current page window."""
        await self._run_load(lambda: self._fetch_window(self.max_items, self.skip_count), UPDATE_FAILED_MESSAGE)

    async def _run_load(self, fetch: Callable[[], Awaitable[Any]], fallback_message: str) -> None:
        self._sequence += 1
        sequence = self._sequence
        self.is_loading = True
        self.load_state = LoadState.LOADING
        try:
            await fetch()
        except NetworkError as error:
            if sequence != self._sequence:
                logger.debug("stale_load_discarded", helper_id=self.helper_id, sequence=sequence)
                return
            self.is_loading = False
            if error.not_modified:
                outcome = LoadState.NOT_MODIFIED
            else:
                outcome = LoadState.FAILED
                self._notifier.show_error(error.server_message or fallback_message)
        else:
            if sequence != self._sequence:
                logger.debug("stale_load_discarded", helper_id=self.helper_id, sequence=sequence)
                return
            self.is_loading = False
            outcome = LoadState.LOADED
        self.update_list_helper()
        self.load_state = outcome

    def update_list_helper(self) -> None:
        """Provide the current page to the list helper."""
        self.list_helper.set_list(self.items, self.id_field)

    def on_search_changed(self, text: str) -> None:
        """Filter the loaded page by name; does not touch the network."""
        self.filter["name"] = text
        self.list_helper.apply_filter("name", self.filter)

    # Pagination

    @property
    def pagination(self) -> PaginationInfo:
        return pagination_info(self.pages_info, len(self.items), self.max_items)

    def has_next_page(self) -> bool:
        return self.pagination.has_next_page()

    def has_previous_page(self) -> bool:
        return self.pagination.has_previous_page()

    def has_last_page(self) -> bool:
        return self.pagination.has_last_page()

    def is_pagination(self) -> bool:
        return self.pagination.is_pagination()

    # Bulk delete

    def _selected_ids(self) -> list[str]:
        ids = [str(self._id_of(item)) for item in self.list_helper.get_selected_items()]
        if not ids:
            raise EmptySelectionError(f"No {self.entity_singular} selected.")
        return ids

    def _id_of(self, item: Any) -> Any:
        if isinstance(item, Mapping):
            return item.get(self.id_field)
        return getattr(item, self.id_field)

    def _count_noun(self, count: int) -> str:
        return self.entity_singular if count == 1 else self.entity_plural

    def delete_confirmation_content(self, count: int) -> str:
        content = "Would you like to delete "
        if count > 1:
            return content + f"these {count} {self.entity_plural}?"
        return content + f"this selected {self.entity_singular}?"

    async def _confirm_delete(self, count: int) -> bool:
        try:
            confirmed = await self._confirm_dialog.show_confirm_dialog(
                f"Remove {self.entity_plural}",
                self.delete_confirmation_content(count),
                "Delete",
            )
        except ConfirmationDeclined:
            return False
        return bool(confirmed)

    async def delete_selected(self) -> BulkDeleteResult:
        """Delete every selected item, then reload the current page.

        Deletes run concurrently and a failed one does not stop the others.
        Selection flags are cleared as each delete is issued. The user gets a
        single notification for the whole batch, sent once the reload has
        been started.
        """
        try:
            ids = self._selected_ids()
        except EmptySelectionError as error:
            self._notifier.show_error(error.message)
            return BulkDeleteResult()

        if not await self._confirm_delete(len(ids)):
            return BulkDeleteResult(requested=ids)

        tasks = []
        for item_id in ids:
            self.list_helper.deselect(item_id)
            tasks.append(asyncio.create_task(self._delete_by_id(item_id)))
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        result = BulkDeleteResult(requested=ids, confirmed=True)
        for item_id, outcome in zip(ids, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                result.failed[item_id] = outcome
                logger.error(
                    "delete_failed",
                    entity=self.entity_singular,
                    item_id=item_id,
                    error=str(outcome),
                )

        self.is_loading = True
        reload = asyncio.create_task(self.refresh())

        if result.failed:
            self._notifier.show_error(DELETE_FAILED_MESSAGE)
        else:
            self._notifier.show_info(f"{len(ids)} {self._count_noun(len(ids))} has been removed.")

        await reload
        return result

    def destroy(self) -> None:
        """Release the list helper when the view goes away."""
        self._helper_factory.remove_helper(self.helper_id)

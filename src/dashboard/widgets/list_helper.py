"""Client-side filtering and selection for the loaded page of a list view.

A ListHelper is the single writer of its selection map. Views change
selection through the command methods (toggle_selection, deselect,
select_all, ...) and read it back through items_selection_status, which is
a read-only view.
"""

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from dashboard.logging import get_logger

logger = get_logger(__name__)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _matches(item: Any, filter_props: Mapping[str, Any]) -> bool:
    """Case-insensitive substring match on every key of filter_props."""
    for key, expected in filter_props.items():
        if expected is None or expected == "":
            continue
        value = _field(item, key)
        if value is None or str(expected).lower() not in str(value).lower():
            return False
    return True


class ListHelper:
    def __init__(self, helper_id: str) -> None:
        self.helper_id = helper_id
        self._id_field = "id"
        self._items: list[Any] = []
        self._visible: list[Any] = []
        self._filters: dict[str, tuple[Mapping[str, Any], ...]] = {}
        self._selection: dict[str, bool] = {}

    @property
    def items_selection_status(self) -> Mapping[str, bool]:
        return MappingProxyType(self._selection)

    @property
    def selected_count(self) -> int:
        return len(self.get_selected_items())

    @property
    def is_all_selected(self) -> bool:
        return bool(self._visible) and all(self._selection.get(self._id_of(item), False) for item in self._visible)

    @property
    def is_no_selected(self) -> bool:
        return self.selected_count == 0

    def set_list(self, items: Sequence[Any], id_field: str) -> None:
        """Replace the backing items.

        Selection is kept for ids that are still present and dropped for the
        others. Active filters are re-applied to the new items.
        """
        self._id_field = id_field
        self._items = list(items)
        ids = {self._id_of(item) for item in self._items}
        self._selection = {item_id: selected for item_id, selected in self._selection.items() if item_id in ids}
        for item_id in ids:
            self._selection.setdefault(item_id, False)
        self._refilter()

    def apply_filter(self, name: str, *filter_props: Mapping[str, Any]) -> None:
        """Register (or replace) the filter called ``name`` and recompute visible items.

        An item is visible when it matches at least one of the filter_props of
        every registered filter. Passing no filter_props removes the filter.
        """
        if filter_props:
            self._filters[name] = tuple(dict(props) for props in filter_props)
        else:
            self._filters.pop(name, None)
        self._refilter()

    def clear_filter(self, name: str) -> None:
        self.apply_filter(name)

    def get_visible_items(self) -> list[Any]:
        return list(self._visible)

    def get_selected_items(self) -> list[Any]:
        """Selected items among the visible ones."""
        return [item for item in self._visible if self._selection.get(self._id_of(item), False)]

    def toggle_selection(self, item_id: str, selected: bool | None = None) -> bool:
        """Flip (or set) the selection of one item and return the new flag."""
        if item_id not in self._selection:
            raise KeyError(item_id)
        new_value = (not self._selection[item_id]) if selected is None else selected
        self._selection[item_id] = new_value
        return new_value

    def deselect(self, item_id: str) -> None:
        if item_id in self._selection:
            self._selection[item_id] = False

    def select_all(self) -> None:
        for item in self._visible:
            self._selection[self._id_of(item)] = True

    def deselect_all(self) -> None:
        for item_id in self._selection:
            self._selection[item_id] = False

    def _id_of(self, item: Any) -> str:
        return str(_field(item, self._id_field))

    def _refilter(self) -> None:
        self._visible = [
            item
            for item in self._items
            if all(any(_matches(item, props) for props in group) for group in self._filters.values())
        ]
        # Hidden items cannot stay selected
        visible_ids = {self._id_of(item) for item in self._visible}
        for item_id in self._selection:
            if item_id not in visible_ids:
                self._selection[item_id] = False


class ListHelperFactory:
    """Keeps one ListHelper per list view id."""

    def __init__(self) -> None:
        self._helpers: dict[str, ListHelper] = {}

    def get_helper(self, helper_id: str) -> ListHelper:
        helper = self._helpers.get(helper_id)
        if helper is None:
            helper = ListHelper(helper_id)
            self._helpers[helper_id] = helper
        return helper

    def remove_helper(self, helper_id: str) -> None:
        if self._helpers.pop(helper_id, None) is not None:
            logger.debug("list_helper_removed", helper_id=helper_id)

    def helper_ids(self) -> Iterable[str]:
        return tuple(self._helpers)

import pytest

from dashboard.testing.builders import ListHelperMock
from dashboard.widgets.list_helper import ListHelper, ListHelperFactory


@pytest.fixture
def mock() -> ListHelperMock:
    mock = ListHelperMock(id_key="id", count=15)
    mock.mock_data()
    return mock


@pytest.fixture
def helper(mock: ListHelperMock) -> ListHelper:
    helper = ListHelper("test-helper")
    helper.set_list(mock.get_items_list(), mock.get_id_key())
    return helper


def test_set_list_starts_with_nothing_selected(helper: ListHelper) -> None:
    assert len(helper.get_visible_items()) == 15
    assert helper.is_no_selected
    assert not helper.is_all_selected
    assert set(helper.items_selection_status.values()) == {False}


def test_selection_status_is_read_only(helper: ListHelper) -> None:
    with pytest.raises(TypeError):
        helper.items_selection_status["item-id-0"] = True  # type: ignore[index]


def test_toggle_selection(helper: ListHelper) -> None:
    assert helper.toggle_selection("item-id-0") is True
    assert helper.selected_count == 1
    assert helper.toggle_selection("item-id-0") is False
    assert helper.toggle_selection("item-id-1", selected=True) is True
    assert helper.toggle_selection("item-id-1", selected=True) is True
    assert [item["id"] for item in helper.get_selected_items()] == ["item-id-1"]


def test_toggle_unknown_item(helper: ListHelper) -> None:
    with pytest.raises(KeyError):
        helper.toggle_selection("missing")


def test_select_all_and_deselect_all(helper: ListHelper) -> None:
    helper.select_all()
    assert helper.is_all_selected
    assert helper.selected_count == 15

    helper.deselect("item-id-3")
    assert not helper.is_all_selected
    assert helper.selected_count == 14

    helper.deselect_all()
    assert helper.is_no_selected


def test_filter_by_name_is_case_insensitive(helper: ListHelper, mock: ListHelperMock) -> None:
    helper.apply_filter("name", *mock.create_filter_by_name("ITEM-NAME-1"))
    names = [item["name"] for item in helper.get_visible_items()]
    assert names == ["item-name-1"] + [f"item-name-{i}" for i in range(10, 15)]


def test_filter_with_several_props_matches_any(helper: ListHelper) -> None:
    helper.apply_filter("name", {"name": "item-name-2"}, {"name": "item-name-3"})
    assert [item["name"] for item in helper.get_visible_items()] == ["item-name-2", "item-name-3"]


def test_filters_combine(helper: ListHelper) -> None:
    helper.apply_filter("name", {"name": "item-name-1"})
    helper.apply_filter("id", {"id": "item-id-12"})
    assert [item["id"] for item in helper.get_visible_items()] == ["item-id-12"]

    helper.clear_filter("id")
    assert len(helper.get_visible_items()) == 6


def test_select_all_only_selects_visible_items(helper: ListHelper) -> None:
    helper.apply_filter("name", {"name": "item-name-1"})
    helper.select_all()
    assert helper.is_all_selected
    assert helper.selected_count == 6
    assert helper.items_selection_status["item-id-2"] is False


def test_hidden_items_are_deselected(helper: ListHelper) -> None:
    helper.toggle_selection("item-id-2")
    helper.toggle_selection("item-id-12")

    helper.apply_filter("name", {"name": "item-name-1"})

    assert [item["id"] for item in helper.get_selected_items()] == ["item-id-12"]
    assert helper.items_selection_status["item-id-2"] is False

    helper.clear_filter("name")
    assert helper.selected_count == 1


def test_set_list_keeps_selection_of_surviving_items(helper: ListHelper, mock: ListHelperMock) -> None:
    helper.toggle_selection("item-id-0")
    helper.toggle_selection("item-id-1")

    helper.set_list(mock.get_items_list()[1:5], "id")

    assert [item["id"] for item in helper.get_selected_items()] == ["item-id-1"]
    assert "item-id-0" not in helper.items_selection_status
    assert len(helper.items_selection_status) == 4


def test_set_list_reapplies_filters(helper: ListHelper, mock: ListHelperMock) -> None:
    helper.apply_filter("name", {"name": "item-name-1"})
    helper.set_list(mock.get_items_list()[:5], "id")
    assert [item["id"] for item in helper.get_visible_items()] == ["item-id-1"]


def test_objects_with_attributes() -> None:
    class Item:
        def __init__(self, key: str, name: str) -> None:
            self.key = key
            self.name = name

    helper = ListHelper("objects")
    helper.set_list([Item("a", "alpha"), Item("b", "beta")], "key")
    helper.toggle_selection("b")
    assert [item.name for item in helper.get_selected_items()] == ["beta"]


def test_empty_list_is_never_all_selected() -> None:
    helper = ListHelper("empty")
    helper.set_list([], "id")
    helper.select_all()
    assert not helper.is_all_selected
    assert helper.is_no_selected


def test_factory_keeps_one_helper_per_id() -> None:
    factory = ListHelperFactory()
    helper = factory.get_helper("a")
    assert factory.get_helper("a") is helper
    assert factory.get_helper("b") is not helper
    assert set(factory.helper_ids()) == {"a", "b"}

    factory.remove_helper("a")
    factory.remove_helper("a")
    assert factory.helper_ids() == ("b",)
    assert factory.get_helper("a") is not helper

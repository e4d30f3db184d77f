"""Pagination predicates for list views.

Some backends report how many pages a collection has, some do not. Both
cases are modelled as variants sharing the same four predicates, so list
controllers never branch on which kind of backend they talk to.
"""

from dataclasses import dataclass

from dashboard.schemas.pagination import PagesInfo


@dataclass(frozen=True)
class KnownPagination:
    """The backend reported the total number of pages."""

    current: int
    total: int

    def has_next_page(self) -> bool:
        return self.current < self.total

    def has_previous_page(self) -> bool:
        return self.current > 1

    def has_last_page(self) -> bool:
        return self.current < self.total

    def is_pagination(self) -> bool:
        return self.total > 1


@dataclass(frozen=True)
class UnknownPagination:
    """No total known; a full last page means there may be more."""

    current: int
    last_page_was_full: bool

    def has_next_page(self) -> bool:
        return self.last_page_was_full

    def has_previous_page(self) -> bool:
        return self.current > 1

    def has_last_page(self) -> bool:
        return False

    def is_pagination(self) -> bool:
        return self.last_page_was_full or self.current > 1


PaginationInfo = KnownPagination | UnknownPagination


def pagination_info(pages_info: PagesInfo, loaded_count: int, max_items: int) -> PaginationInfo:
    """Pick the variant for the current state of a paginated collection.

    A count_of_pages of 0 is treated the same as a missing one.
    """
    if pages_info.count_of_pages:
        return KnownPagination(current=pages_info.current_page_number, total=pages_info.count_of_pages)
    return UnknownPagination(
        current=pages_info.current_page_number,
        last_page_was_full=loaded_count == max_items,
    )

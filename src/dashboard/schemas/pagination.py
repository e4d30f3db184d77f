"""Pagination types.

Paginated[T]: one page of a collection, as the fake backend cuts it.
PagesInfo: client-side view of where we are in a server-paginated collection.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Paginated(Generic[T]):
    """One page of a collection plus the window it was cut with.

    The fake backend's routers turn this into a JSON array body and a
    ``Link`` header, which is how the platform API paginates.
    """

    items: list[T]
    total: int
    skip: int
    limit: int

    @property
    def has_next(self) -> bool:
        return self.skip + self.limit < self.total

    @property
    def last_skip(self) -> int:
        """skipCount of the last page (0 for an empty collection)."""
        if self.total == 0:
            return 0
        return ((self.total - 1) // self.limit) * self.limit


@dataclass
class PagesInfo:
    """Where the client currently is in a paginated collection.

    Owned and mutated in place by the API service; controllers keep a
    reference. ``count_of_pages`` stays None when the backend did not
    advertise a ``last`` page.
    """

    current_page_number: int = 1
    count_of_pages: int | None = None


def page_number(skip_count: int, max_items: int) -> int:
    """1-based page number of the window starting at skip_count."""
    return skip_count // max_items + 1


def validate_window(max_items: int, skip_count: int) -> None:
    if max_items <= 0:
        raise ValueError(f"max_items must be positive, got {max_items}")
    if skip_count < 0:
        raise ValueError(f"skip_count must not be negative, got {skip_count}")

"""
Pagination View

Slices the sorted, filtered roster into table pages after applying the
name search box. An empty match set has zero pages; page 1 of 0 is a
valid empty page. Out-of-range page numbers are clamped, never rejected.
"""

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

from core.models import StudentRecord
from services.roster_filter_service import search_by_name


T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of table rows."""

    items: List[T]
    page_number: int
    total_pages: int
    total_items: int
    page_size: int

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages

    def previous_page(self) -> int:
        """Page number the "Previous" button leads to."""
        return self.page_number - 1 if self.has_previous else self.page_number

    def next_page(self) -> int:
        """Page number the "Next" button leads to."""
        return self.page_number + 1 if self.has_next else self.page_number


def total_pages_for(item_count: int, page_size: int) -> int:
    return math.ceil(item_count / page_size)


def clamp_page(page_number: int, total_pages: int) -> int:
    return max(1, min(page_number, max(total_pages, 1)))


def paginate_items(items: Sequence[T], page_size: int, page_number: int) -> Page[T]:
    """Slice an already searched sequence."""
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")

    total_pages = total_pages_for(len(items), page_size)
    page_number = clamp_page(page_number, total_pages)
    start = (page_number - 1) * page_size

    return Page(
        items=list(items[start : start + page_size]),
        page_number=page_number,
        total_pages=total_pages,
        total_items=len(items),
        page_size=page_size,
    )


def paginate(
    roster: Sequence[StudentRecord],
    name_query: str = "",
    page_size: int = DEFAULT_PAGE_SIZE,
    page_number: int = 1,
) -> Page[StudentRecord]:
    """
    Search by name, then return the requested page.

    Args:
        roster: Sorted, filtered students
        name_query: Case-insensitive substring of the student name
        page_size: Rows per page
        page_number: 1-based page, clamped into range

    Returns:
        Page of students
    """
    matches = search_by_name(roster, name_query)
    return paginate_items(matches, page_size, page_number)

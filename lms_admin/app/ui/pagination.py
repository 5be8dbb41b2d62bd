from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_WINDOW = 5


@dataclass
class PaginationState:
    current_page: int = 1
    items_per_page: int = 10
    total_items: int = 0


@dataclass(frozen=True)
class DisplayRange:
    start: int
    end: int
    total: int


def effective_total(total_items: int, data_length: int) -> int:
    return total_items or data_length


def total_pages(total: int, items_per_page: int) -> int:
    if items_per_page <= 0 or total <= 0:
        return 0
    return math.ceil(total / items_per_page)


def paginated_slice(data: Sequence[T], current_page: int, items_per_page: int) -> list[T]:
    start = (current_page - 1) * items_per_page
    end = start + items_per_page
    if end <= 0:
        return []
    return list(data[max(0, start):end])


def page_numbers(current_page: int, pages: int, window: int = DEFAULT_PAGE_WINDOW) -> list[int]:
    half = window // 2
    start = max(1, current_page - half)
    end = min(pages, start + window - 1)
    # near the last page the window slides back instead of shrinking
    if end - start + 1 < window:
        start = max(1, end - window + 1)
    return list(range(start, end + 1))


def display_range(current_page: int, items_per_page: int, total: int) -> DisplayRange:
    return DisplayRange(
        start=(current_page - 1) * items_per_page + 1,
        end=min(current_page * items_per_page, total),
        total=total,
    )


def goto_page(state: PaginationState, page: Any, pages: int) -> bool:
    if not isinstance(page, int) or isinstance(page, bool):
        return False
    if page < 1 or page > pages:
        return False
    state.current_page = page
    return True

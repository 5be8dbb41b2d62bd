from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Protocol

from lms_admin.app.ui import pagination
from lms_admin.app.ui.columns import ColumnDef, get_cell_value
from lms_admin.app.ui.sorting import SortDirection, SortIntent


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    page_size: int = 10
    sort: SortIntent | None = None
    search: str = ""


@dataclass(frozen=True)
class PageResult:
    rows: list[Any] = field(default_factory=list)
    total: int = 0


class DataProvider(Protocol):
    def fetch_page(self, request: PageRequest) -> PageResult:
        ...


class InMemoryDataProvider:
    """Searches, sorts and pages a row list held in memory.

    ``columns`` lets sorting read values through the same selectors the table
    renders with; keys without a column are read straight off the row.
    """

    def __init__(
        self,
        rows: Iterable[Any] = (),
        search_keys: Sequence[str] | None = None,
        columns: Sequence[ColumnDef] | None = None,
    ) -> None:
        self._rows = list(rows)
        self.search_keys = list(search_keys) if search_keys else None
        self.columns = list(columns or [])

    def replace(self, rows: Iterable[Any]) -> None:
        self._rows = list(rows)

    def fetch_page(self, request: PageRequest) -> PageResult:
        return page_rows(self._rows, request, self.search_keys, self.columns)


def page_rows(
    rows: Sequence[Any],
    request: PageRequest,
    search_keys: Sequence[str] | None = None,
    columns: Sequence[ColumnDef] | None = None,
) -> PageResult:
    matched = filter_rows(rows, request.search, search_keys)
    ordered = sort_rows(matched, request.sort, columns)
    return PageResult(
        rows=pagination.paginated_slice(ordered, request.page, request.page_size),
        total=len(ordered),
    )


def filter_rows(rows: Sequence[Any], term: str, search_keys: Sequence[str] | None = None) -> list[Any]:
    needle = (term or "").strip().casefold()
    if not needle:
        return list(rows)
    return [row for row in rows if any(needle in text for text in _searchable_texts(row, search_keys))]


def sort_rows(rows: Sequence[Any], sort: SortIntent | None, columns: Sequence[ColumnDef] | None = None) -> list[Any]:
    """Stable sort by the intent column; empty values go last in both directions."""
    if sort is None:
        return list(rows)
    value_of = _accessor(sort.column, columns)
    present = [row for row in rows if not _is_empty(value_of(row))]
    missing = [row for row in rows if _is_empty(value_of(row))]
    present.sort(key=lambda row: _sort_key(value_of(row)), reverse=sort.direction is SortDirection.DESC)
    return present + missing


def _accessor(key: str, columns: Sequence[ColumnDef] | None) -> Callable[[Any], Any]:
    for column in columns or ():
        if column.key == key:
            return lambda row: get_cell_value(row, column)
    return lambda row: _field(row, key)


def _field(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def _searchable_texts(row: Any, search_keys: Sequence[str] | None) -> list[str]:
    if search_keys is None:
        if isinstance(row, Mapping):
            values = list(row.values())
        else:
            values = list(vars(row).values()) if hasattr(row, "__dict__") else []
    else:
        values = [_field(row, key) for key in search_keys]
    return [str(value).casefold() for value in values if isinstance(value, (str, int, float)) and not isinstance(value, bool)]


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _sort_key(value: Any) -> tuple[int, Any]:
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (0, value)
    if isinstance(value, (date, datetime)):
        return (1, value.isoformat())
    return (2, str(value).casefold())

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from lms_admin.app.config import TableConfig
from lms_admin.app.infrastructure.logging.logger import get_logger, log_event
from lms_admin.app.state import TableViewState
from lms_admin.app.ui import pagination
from lms_admin.app.ui.columns import ActionDef, ColumnDef, get_cell_value, validate_columns
from lms_admin.app.ui.events import EventChannel
from lms_admin.app.ui.pagination import PaginationState
from lms_admin.app.ui.selection import RowSelection
from lms_admin.app.ui.sorting import SortDirection, SortIntent, SortState
from lms_admin.app.ui.status_badges import status_badge_class

DEFAULT_TITLE = "قائمة البيانات"
DEFAULT_SEARCH_PLACEHOLDER = "بحث..."


class ClickRegion(str, Enum):
    ROW = "row"
    CHECKBOX = "checkbox"
    ACTIONS = "actions"


# clicks on these sub-controls never count as a row click
INTERACTIVE_REGIONS = frozenset({ClickRegion.CHECKBOX, ClickRegion.ACTIONS})


@dataclass(frozen=True)
class ActionClick:
    action: ActionDef
    row: Any


class DataTable:
    """Sortable, selectable, paginated table over rows supplied by the caller.

    The table never filters or reorders ``data``. Search and sort requests are
    emitted as intents and the owner is expected to answer with new data;
    only pagination is applied locally, unless ``paginate_locally`` is off
    because the owner already supplies one page at a time.
    """

    def __init__(
        self,
        *,
        columns: Iterable[ColumnDef] = (),
        actions: Iterable[ActionDef] = (),
        data: Sequence[Any] = (),
        items_per_page: int | None = None,
        current_page: int = 1,
        total_items: int = 0,
        page_window: int | None = None,
        identity: Callable[[Any], Hashable] | None = None,
        title: str = DEFAULT_TITLE,
        search_placeholder: str = DEFAULT_SEARCH_PLACEHOLDER,
        show_search: bool = True,
        show_checkboxes: bool | None = None,
        paginate_locally: bool = True,
        config: TableConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or TableConfig()
        self.title = title
        self.search_placeholder = search_placeholder
        self.show_search = show_search
        self.show_checkboxes = self.config.show_checkboxes if show_checkboxes is None else show_checkboxes
        self.paginate_locally = paginate_locally
        self.page_window = page_window or self.config.page_window
        self._logger = logger or get_logger("lms_admin.table")

        self._columns: list[ColumnDef] = validate_columns(columns)
        self._actions: list[ActionDef] = list(actions)
        self._data: list[Any] = list(data)
        self._pagination = PaginationState(
            current_page=current_page,
            items_per_page=_require_positive(self.config.items_per_page if items_per_page is None else items_per_page),
            total_items=max(0, total_items),
        )
        self._selection = RowSelection(identity=identity)
        self._sort = SortState()
        self.search_term = ""

        self.row_click: EventChannel[Any] = EventChannel("row_click")
        self.action_click: EventChannel[ActionClick] = EventChannel("action_click")
        self.search_change: EventChannel[str] = EventChannel("search_change")
        self.page_change: EventChannel[int] = EventChannel("page_change")
        self.selection_change: EventChannel[list[Any]] = EventChannel("selection_change")
        self.sort_change: EventChannel[SortIntent] = EventChannel("sort_change")

    @property
    def data(self) -> list[Any]:
        return list(self._data)

    @property
    def columns(self) -> list[ColumnDef]:
        return list(self._columns)

    @property
    def actions(self) -> list[ActionDef]:
        return list(self._actions)

    def set_data(self, data: Sequence[Any], total_items: int | None = None) -> None:
        self._data = list(data)
        if total_items is not None:
            self._pagination.total_items = max(0, total_items)

    def set_columns(self, columns: Iterable[ColumnDef]) -> None:
        self._columns = validate_columns(columns)

    def set_actions(self, actions: Iterable[ActionDef]) -> None:
        self._actions = list(actions)

    @property
    def items_per_page(self) -> int:
        return self._pagination.items_per_page

    @items_per_page.setter
    def items_per_page(self, value: int) -> None:
        self._pagination.items_per_page = _require_positive(value)

    @property
    def total_items(self) -> int:
        return self._pagination.total_items

    @total_items.setter
    def total_items(self, value: int) -> None:
        self._pagination.total_items = max(0, value)

    @property
    def current_page(self) -> int:
        return self._pagination.current_page

    @current_page.setter
    def current_page(self, value: int) -> None:
        # caller-driven, unguarded: an out-of-range page renders no rows
        self._pagination.current_page = value

    def on_search_change(self, term: str) -> None:
        self.search_term = term
        self._log("search_change", term_length=len(term))
        self.search_change.emit(term)

    def on_row_click(self, row: Any, region: ClickRegion | None = None) -> bool:
        if region in INTERACTIVE_REGIONS:
            return False
        self.row_click.emit(row)
        return True

    def on_action_click(self, action: ActionDef, row: Any) -> None:
        self._log("action_click", action=action.label)
        self.action_click.emit(ActionClick(action=action, row=row))
        action.handler(row)

    @property
    def selected_rows(self) -> list[Any]:
        return self._selection.rows()

    @property
    def all_selected(self) -> bool:
        return self._selection.all_selected(self._data)

    def is_row_selected(self, row: Any) -> bool:
        return self._selection.is_selected(row)

    def toggle_select_all(self) -> None:
        if not self._data:
            return
        selected = self._selection.toggle_all(self._data)
        self._log("toggle_select_all", selected=len(selected))
        self.selection_change.emit(selected)

    def toggle_row_selection(self, row: Any) -> None:
        selected = self._selection.toggle(row)
        self._log("toggle_row_selection", selected=len(selected))
        self.selection_change.emit(selected)

    def clear_selection(self) -> None:
        self._selection.clear()
        self.selection_change.emit([])

    @property
    def sort_column(self) -> str | None:
        return self._sort.column

    @property
    def sort_direction(self) -> SortDirection:
        return self._sort.direction

    @property
    def sort_intent(self) -> SortIntent | None:
        return self._sort.intent

    def request_sort(self, column: ColumnDef) -> SortIntent | None:
        intent = self._sort.request(column)
        if intent is None:
            self._log("sort_change", outcome="ignored", column=column.key)
            return None
        self._log("sort_change", column=intent.column, direction=intent.direction.value)
        self.sort_change.emit(intent)
        return intent

    def restore_sort(self, intent: SortIntent | None) -> None:
        """Put the sort state back without emitting, e.g. after a refetch failed."""
        self._sort.restore(intent)

    @property
    def display_total(self) -> int:
        return pagination.effective_total(self._pagination.total_items, len(self._data))

    @property
    def total_pages(self) -> int:
        return pagination.total_pages(self.display_total, self._pagination.items_per_page)

    @property
    def paginated_data(self) -> list[Any]:
        if not self.paginate_locally:
            return list(self._data)
        return pagination.paginated_slice(self._data, self._pagination.current_page, self._pagination.items_per_page)

    @property
    def page_numbers(self) -> list[int]:
        return pagination.page_numbers(self._pagination.current_page, self.total_pages, self.page_window)

    @property
    def display_start(self) -> int:
        return self._display_range().start

    @property
    def display_end(self) -> int:
        return self._display_range().end

    def go_to_page(self, page: int) -> bool:
        if not pagination.goto_page(self._pagination, page, self.total_pages):
            self._log("page_change", outcome="ignored", page=page)
            return False
        self._log("page_change", page=page)
        self.page_change.emit(page)
        return True

    def _display_range(self) -> pagination.DisplayRange:
        return pagination.display_range(
            self._pagination.current_page,
            self._pagination.items_per_page,
            self.display_total,
        )

    def get_cell_value(self, row: Any, column: ColumnDef) -> Any:
        return get_cell_value(row, column)

    @staticmethod
    def status_badge_class(status: str | None) -> str:
        return status_badge_class(status)

    def view_state(self) -> TableViewState:
        return TableViewState(
            search_term=self.search_term,
            selected_rows=self._selection.rows(),
            sort_column=self._sort.column,
            sort_direction=self._sort.direction,
            current_page=self._pagination.current_page,
        )

    def _log(self, event: str, outcome: str = "emitted", **details: Any) -> None:
        log_event(self._logger, "table", event, outcome, level=logging.DEBUG, **details)


def _require_positive(items_per_page: int) -> int:
    if items_per_page < 1:
        raise ValueError("items_per_page must be >= 1")
    return items_per_page

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from lms_admin.app.ui.sorting import SortDirection


@dataclass(frozen=True)
class TableViewState:
    search_term: str = ""
    selected_rows: list[Any] = field(default_factory=list)
    sort_column: str | None = None
    sort_direction: SortDirection = SortDirection.ASC
    current_page: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "search_term": self.search_term,
            "selected_count": len(self.selected_rows),
            "sort_column": self.sort_column,
            "sort_direction": self.sort_direction.value,
            "current_page": self.current_page,
        }

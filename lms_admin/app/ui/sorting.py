from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lms_admin.app.ui.columns import ColumnDef


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class SortIntent:
    column: str
    direction: SortDirection = SortDirection.ASC


@dataclass
class SortState:
    column: str | None = None
    direction: SortDirection = SortDirection.ASC

    def request(self, column: ColumnDef) -> SortIntent | None:
        if not column.sortable:
            return None
        if self.column == column.key:
            self.direction = self.direction.flipped()
        else:
            self.column = column.key
            self.direction = SortDirection.ASC
        return SortIntent(column=column.key, direction=self.direction)

    def restore(self, intent: SortIntent | None) -> None:
        if intent is None:
            self.column, self.direction = None, SortDirection.ASC
        else:
            self.column, self.direction = intent.column, intent.direction

    @property
    def intent(self) -> SortIntent | None:
        if self.column is None:
            return None
        return SortIntent(column=self.column, direction=self.direction)

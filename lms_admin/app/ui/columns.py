from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

EMPTY_VALUE = "—"


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str
    sortable: bool = False
    align: Align = Align.LEFT
    width: int | None = None
    renderer: Callable[[Any, Any], str] | None = None
    selector: Callable[[Any], Any] | None = None


@dataclass(frozen=True)
class ActionDef:
    label: str
    handler: Callable[[Any], None]
    icon: str | None = None
    style_class: str | None = None


def get_cell_value(row: Any, column: ColumnDef) -> Any:
    if column.selector is not None:
        return column.selector(row)
    if isinstance(row, Mapping):
        return row.get(column.key)
    return getattr(row, column.key, None)


def validate_columns(columns: Iterable[ColumnDef]) -> list[ColumnDef]:
    resolved = list(columns)
    seen: set[str] = set()
    for column in resolved:
        if column.key in seen:
            raise ValueError(f"Duplicate column key: {column.key}")
        seen.add(column.key)
    return resolved


def format_cell(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        clean = value.strip()
        return clean or EMPTY_VALUE
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, float):
        return f"{value:.2f}"
    if isinstance(value, (list, tuple, set)):
        return ", ".join(format_cell(item) for item in value) or EMPTY_VALUE
    return str(value)

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from typing import Any


class RowSelection:
    """Selected rows of a table, keyed by ``identity(row)``.

    The default identity is the object itself (``id(row)``): a structurally
    equal copy of a selected row is a different row. Selection is additive
    across data reloads and only shrinks through ``toggle``/``toggle_all``/
    ``clear``.
    """

    def __init__(self, identity: Callable[[Any], Hashable] | None = None) -> None:
        self._identity = identity or id
        self._rows: dict[Hashable, Any] = {}

    def is_selected(self, row: Any) -> bool:
        return self._identity(row) in self._rows

    def all_selected(self, data: Sequence[Any]) -> bool:
        return len(data) > 0 and all(self.is_selected(row) for row in data)

    def toggle(self, row: Any) -> list[Any]:
        key = self._identity(row)
        if key in self._rows:
            del self._rows[key]
        else:
            self._rows[key] = row
        return self.rows()

    def toggle_all(self, data: Sequence[Any]) -> list[Any]:
        if self.all_selected(data):
            self._rows.clear()
        else:
            for row in data:
                self._rows.setdefault(self._identity(row), row)
        return self.rows()

    def clear(self) -> None:
        self._rows.clear()

    def rows(self) -> list[Any]:
        return list(self._rows.values())

    def __len__(self) -> int:
        return len(self._rows)

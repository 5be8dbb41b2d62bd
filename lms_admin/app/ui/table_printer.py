from __future__ import annotations

from typing import Any

from lms_admin.app.ui.columns import Align, ColumnDef, format_cell
from lms_admin.app.ui.table import DataTable

EMPTY_MESSAGE = "لا توجد بيانات"
ACTIONS_LABEL = "الإجراءات"
STATUS_KEYS = {"status"}


def render_cell(table: DataTable, row: Any, column: ColumnDef) -> str:
    value = table.get_cell_value(row, column)
    if column.renderer is not None:
        return column.renderer(value, row)
    text = format_cell(value)
    if column.key in STATUS_KEYS and value is not None:
        return f"{text} ({table.status_badge_class(str(value))})"
    return text


def render_table(table: DataTable) -> str:
    rows = table.paginated_data
    columns = table.columns
    lines = [table.title]
    if table.show_search and table.search_term:
        lines.append(f"{table.search_placeholder} {table.search_term}")

    cells = [[render_cell(table, row, column) for column in columns] for row in rows]
    widths = []
    for idx, column in enumerate(columns):
        natural = max([len(column.label), *(len(line[idx]) for line in cells)])
        widths.append(column.width or natural)

    actions_text = " / ".join(f"[{action.label}]" for action in table.actions)
    actions_width = max(len(ACTIONS_LABEL), len(actions_text))

    header = [_fit(column.label, widths[idx], column.align) for idx, column in enumerate(columns)]
    separator = ["-" * width for width in widths]
    if table.show_checkboxes:
        header.insert(0, "[x]" if table.all_selected else "[ ]")
        separator.insert(0, "---")
    if table.actions:
        header.append(_fit(ACTIONS_LABEL, actions_width, Align.CENTER))
        separator.append("-" * actions_width)
    lines.append(" | ".join(header).rstrip())
    lines.append("-+-".join(separator))

    if not rows:
        lines.append(EMPTY_MESSAGE)
    for row, row_cells in zip(rows, cells):
        line = [_fit(text, widths[idx], columns[idx].align) for idx, text in enumerate(row_cells)]
        if table.show_checkboxes:
            line.insert(0, "[x]" if table.is_row_selected(row) else "[ ]")
        if table.actions:
            line.append(_fit(actions_text, actions_width, Align.CENTER))
        lines.append(" | ".join(line).rstrip())

    lines.append(render_footer(table))
    return "\n".join(lines)


def render_footer(table: DataTable) -> str:
    if table.display_total == 0:
        return "0 / 0"
    pages = " ".join(f"[{page}]" if page == table.current_page else str(page) for page in table.page_numbers)
    return f"{table.display_start}–{table.display_end} / {table.display_total}  {pages}"


def print_table(table: DataTable) -> None:
    print(render_table(table))


def _fit(text: str, width: int, align: Align) -> str:
    if len(text) > width:
        return text[: width - 1] + "…" if width > 1 else text[:width]
    if align is Align.RIGHT:
        return text.rjust(width)
    if align is Align.CENTER:
        return text.center(width)
    return text.ljust(width)

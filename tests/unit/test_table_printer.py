from lms_admin.app.ui.columns import ActionDef, Align, ColumnDef
from lms_admin.app.ui.table import DataTable
from lms_admin.app.ui.table_printer import ACTIONS_LABEL, EMPTY_MESSAGE, print_table, render_footer, render_table


def _table(**kwargs) -> DataTable:
    columns = [
        ColumnDef("id", "ID", sortable=True, align=Align.RIGHT, width=4),
        ColumnDef("name", "Name"),
        ColumnDef("status", "Status", align=Align.CENTER),
    ]
    return DataTable(columns=columns, title="Requests", **kwargs)


def test_render_table_shows_current_page_with_badges_and_footer() -> None:
    rows = [{"id": idx, "name": f"s{idx}", "status": "مقبول" if idx % 2 else "مرفوض"} for idx in range(1, 24)]
    table = _table(data=rows, items_per_page=10, current_page=2)
    table.toggle_row_selection(rows[10])

    output = render_table(table).splitlines()

    assert output[0] == "Requests"
    assert output[1].startswith("[ ] |   ID | Name")
    body = output[3:-1]
    assert len(body) == 10
    assert body[0].startswith("[x] |   11 | s11")
    assert "مقبول (bg-success)" in body[0]
    assert "مرفوض (bg-danger)" in body[1]
    assert output[-1] == "11–20 / 23  1 [2] 3"


def test_render_table_empty_state() -> None:
    table = _table(data=[])

    output = render_table(table).splitlines()

    assert EMPTY_MESSAGE in output
    assert output[-1] == "0 / 0"


def test_custom_renderer_and_actions_column() -> None:
    columns = [ColumnDef("price", "Price", renderer=lambda value, _row: f"{value:.2f} SAR")]
    actions = [ActionDef("edit", handler=lambda _row: None), ActionDef("delete", handler=lambda _row: None)]
    table = DataTable(columns=columns, actions=actions, data=[{"price": 150}], show_checkboxes=False, title="Courses")

    output = render_table(table).splitlines()

    header, separator, row = output[1], output[2], output[3]
    assert header.split(" | ")[1].strip() == ACTIONS_LABEL
    assert row == "150.00 SAR | [edit] / [delete]"
    assert separator == "-" * 10 + "-+-" + "-" * len("[edit] / [delete]")


def test_every_row_gets_an_actions_cell_aligned_with_the_header() -> None:
    rows = [{"id": 1, "name": "Ali", "status": "مقبول"}, {"id": 2, "name": "Mona", "status": "مرفوض"}]
    table = _table(data=rows, actions=[ActionDef("edit", handler=lambda _row: None)])

    output = render_table(table).splitlines()

    header, body = output[1], output[3:5]
    assert header.count(" | ") == 4
    for line in body:
        assert line.count(" | ") == 4
        assert line.endswith("[edit]".center(len(ACTIONS_LABEL)).rstrip())
        assert line.rindex(" | ") == header.rindex(" | ")


def test_footer_highlights_current_page_window() -> None:
    table = _table(data=[{"id": 1}], total_items=120, current_page=5)

    assert render_footer(table) == "41–50 / 120  3 4 [5] 6 7"


def test_print_table_writes_to_stdout(capsys) -> None:
    print_table(_table(data=[{"id": 1, "name": "Ali", "status": None}]))

    captured = capsys.readouterr().out
    assert "Requests" in captured
    assert "Ali" in captured

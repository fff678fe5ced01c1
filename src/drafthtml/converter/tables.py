"""Table entity data: HTML ``<table>`` to ``{"rows", "header"}``.

The table entity stores plain cell text::

    {"rows": [["Name", "Qty"], ["Apples", "3"]], "header": True}

``header`` is true when the first row sits in ``<thead>`` or is made only
of ``<th>`` cells.  Short rows are padded with empty cells to the widest
row.  Rows of nested tables belong to those tables and are skipped.
"""

from __future__ import annotations

from typing import Any

from bs4 import Tag


def build_table_data(table: Tag) -> dict[str, Any]:
    """Return the table entity data for a ``<table>`` element."""
    rows: list[list[str]] = []
    header = False

    for index, row in enumerate(_own_rows(table)):
        cells = row.find_all(["th", "td"], recursive=False)
        if index == 0:
            in_head = row.find_parent("thead") is not None
            header = in_head or (bool(cells) and all(c.name == "th" for c in cells))
        rows.append([cell.get_text() for cell in cells])

    width = max((len(r) for r in rows), default=0)
    for row_cells in rows:
        row_cells.extend([""] * (width - len(row_cells)))

    return {"rows": rows, "header": header}


def _own_rows(table: Tag) -> list[Tag]:
    return [row for row in table.find_all("tr") if row.find_parent("table") is table]

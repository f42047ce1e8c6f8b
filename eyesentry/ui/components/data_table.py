"""
Searchable data table: optional single-field substring filter plus
per-column cell rendering.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, TypeVar

import pandas as pd
import streamlit as st

RowT = TypeVar("RowT", bound=Mapping[str, Any])

NO_RESULTS_MESSAGE = "No results found."
DEFAULT_SEARCH_PLACEHOLDER = "Search..."

TABLE_CSS = """
<style>
table.es-data-table {width: 100%; border-collapse: collapse; font-size: 0.9rem;}
table.es-data-table th {text-align: left; padding: 0.75rem 1rem; border-bottom: 1px solid #e5e7eb; color: #6b7280;}
table.es-data-table td {padding: 0.75rem 1rem; border-bottom: 1px solid #f3f4f6;}
table.es-data-table td.es-empty {height: 6rem; text-align: center; color: #6b7280;}
</style>
"""


@dataclass(frozen=True)
class ColumnSpec(Generic[RowT]):
    header: str
    accessor_key: Optional[str] = None
    id: Optional[str] = None
    cell: Optional[Callable[[RowT], Any]] = None

    def __post_init__(self) -> None:
        if not (self.accessor_key or self.id):
            raise ValueError(f"Column {self.header!r} needs an accessor_key or an id")


@dataclass
class TableView:
    headers: List[str]
    keys: List[str]
    rows: List[List[str]]
    row_keys: List[str]

    @property
    def is_empty(self) -> bool:
        return not self.rows


def column_key(column: ColumnSpec) -> str:
    return column.accessor_key or column.id  # type: ignore[return-value]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict, set)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _as_text(value: Any) -> str:
    return "" if _is_blank(value) else str(value)


def filter_rows(rows: Sequence[RowT], field: Optional[str], term: str) -> List[RowT]:
    """Keep rows whose `field` contains `term`, case-insensitively, in input order."""
    if not field or not term:
        return list(rows)
    needle = term.casefold()
    return [row for row in rows if needle in _as_text(row.get(field)).casefold()]


def cell_value(column: ColumnSpec[RowT], row: RowT) -> str:
    if column.cell is not None:
        return _as_text(column.cell(row))
    if column.accessor_key is None:
        return ""
    return _as_text(row.get(column.accessor_key))


def build_table(
    columns: Sequence[ColumnSpec[RowT]],
    rows: Sequence[RowT],
    filter_field: Optional[str] = None,
    filter_text: str = "",
    id_field: str = "id",
) -> TableView:
    displayed = filter_rows(rows, filter_field, filter_text)
    return TableView(
        headers=[col.header for col in columns],
        keys=[column_key(col) for col in columns],
        rows=[[cell_value(col, row) for col in columns] for row in displayed],
        row_keys=[_as_text(row.get(id_field)) for row in displayed],
    )


def table_to_html(view: TableView) -> str:
    head = "".join(
        f'<th data-key="{html.escape(key)}">{html.escape(label)}</th>'
        for key, label in zip(view.keys, view.headers)
    )
    if view.is_empty:
        body = (
            f'<tr><td class="es-empty" colspan="{len(view.headers)}">'
            f"{NO_RESULTS_MESSAGE}</td></tr>"
        )
    else:
        body = "".join(
            f'<tr data-key="{html.escape(row_key)}">'
            + "".join(f"<td>{html.escape(value)}</td>" for value in cells)
            + "</tr>"
            for row_key, cells in zip(view.row_keys, view.rows)
        )
    return (
        '<table class="es-data-table">'
        f"<thead><tr>{head}</tr></thead>"
        f"<tbody>{body}</tbody>"
        "</table>"
    )


def render_data_table(
    columns: Sequence[ColumnSpec[RowT]],
    rows: Sequence[RowT],
    key: str,
    search_column: Optional[str] = None,
    search_placeholder: str = DEFAULT_SEARCH_PLACEHOLDER,
    id_field: str = "id",
) -> TableView:
    """
    Render a searchable table. `key` scopes the search box state to this
    table instance; the returned view reflects what was drawn.
    """
    search_term = ""
    if search_column:
        search_term = st.text_input(
            search_placeholder,
            key=f"{key}_search",
            placeholder=search_placeholder,
            label_visibility="collapsed",
        )

    view = build_table(columns, rows, search_column, search_term, id_field=id_field)
    st.markdown(TABLE_CSS + table_to_html(view), unsafe_allow_html=True)
    return view

from __future__ import annotations

import pandas as pd
import streamlit as st

from eyesentry.data.loader import load_profiles
from eyesentry.ui.components.data_table import ColumnSpec, render_data_table
from eyesentry.ui.components.formatting import format_date, format_flag
from eyesentry.ui.pages.context import PageContext
from eyesentry.ui.pages.helpers import frame_to_rows


def _flag(row, name: str):
    value = row.get(name)
    if value is None or pd.isna(value):
        return None
    return bool(value)


def _status(row) -> str:
    if _flag(row, "is_suspended"):
        return "Suspended"
    if _flag(row, "is_approved") is False:
        return "Pending approval"
    return "Active"


COLUMNS = [
    ColumnSpec("Email", accessor_key="email"),
    ColumnSpec("Name", accessor_key="name"),
    ColumnSpec("Admin", accessor_key="is_admin", cell=lambda row: format_flag(row.get("is_admin"))),
    ColumnSpec("Status", id="status", cell=_status),
    ColumnSpec("Joined", accessor_key="created_at", cell=lambda row: format_date(row.get("created_at"))),
]


def render(context: PageContext) -> None:
    st.subheader("User Management")
    df = load_profiles(context.client)
    rows = frame_to_rows(df)
    st.caption(f"{len(rows):,} registered users")
    render_data_table(COLUMNS, rows, key="es_users", search_column="email", search_placeholder="Search by email...")

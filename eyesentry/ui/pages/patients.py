from __future__ import annotations

import pandas as pd
import streamlit as st

from eyesentry.data.loader import load_questionnaires
from eyesentry.ui.components.data_table import ColumnSpec, render_data_table
from eyesentry.ui.components.formatting import format_date, format_number
from eyesentry.ui.pages.context import PageContext
from eyesentry.ui.pages.helpers import frame_to_rows


def with_patient_name(df: pd.DataFrame) -> pd.DataFrame:
    """Add a `patient_name` column joined from first and last name."""
    display = df.copy()
    first = display.get("first_name", pd.Series("", index=display.index)).fillna("").astype(str)
    last = display.get("last_name", pd.Series("", index=display.index)).fillna("").astype(str)
    display["patient_name"] = (first + " " + last).str.strip()
    return display


COLUMNS = [
    ColumnSpec("Patient", accessor_key="patient_name"),
    ColumnSpec("Age", accessor_key="age", cell=lambda row: format_number(row.get("age"))),
    ColumnSpec("Race", accessor_key="race"),
    ColumnSpec("Score", accessor_key="total_score", cell=lambda row: format_number(row.get("total_score"))),
    ColumnSpec("Risk Level", accessor_key="risk_level"),
    ColumnSpec("Submitted", accessor_key="created_at", cell=lambda row: format_date(row.get("created_at"))),
]


def render(context: PageContext) -> None:
    st.subheader("Patient Questionnaires")
    df = load_questionnaires(context.client)
    if df.empty:
        st.info("No questionnaires submitted yet.")
        return

    display = with_patient_name(df)
    render_data_table(
        COLUMNS,
        frame_to_rows(display),
        key="es_patients",
        search_column="patient_name",
        search_placeholder="Search by patient name...",
    )

    csv_bytes = display.drop(columns=["patient_name"]).to_csv(index=False).encode("utf-8")
    st.download_button(
        "Download CSV",
        data=csv_bytes,
        file_name="patient_questionnaires.csv",
        mime="text/csv",
    )

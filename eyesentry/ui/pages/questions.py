from __future__ import annotations

import pandas as pd
import streamlit as st

from eyesentry.data.loader import load_questions
from eyesentry.ui.components.data_table import ColumnSpec, render_data_table
from eyesentry.ui.components.formatting import format_flag, format_number
from eyesentry.ui.pages.context import PageContext
from eyesentry.ui.pages.helpers import frame_to_rows

CATEGORY_LABELS = {
    "patient_info": "Patient Information",
    "medical_history": "Medical History",
    "clinical_measurements": "Clinical Measurements",
}


def _category(row) -> str:
    value = row.get("page_category")
    if not isinstance(value, str):
        return ""
    return CATEGORY_LABELS.get(value, value.replace("_", " ").title())


def _status(row) -> str:
    # Rows loaded before the is_active column existed count as active
    value = row.get("is_active")
    if value is None or pd.isna(value):
        return "Active"
    return format_flag(value, "Active", "Inactive")


COLUMNS = [
    ColumnSpec("Order", accessor_key="display_order", cell=lambda row: format_number(row.get("display_order"))),
    ColumnSpec("Question", accessor_key="question"),
    ColumnSpec("Category", accessor_key="page_category", cell=_category),
    ColumnSpec("Status", id="status", cell=_status),
]


def render(context: PageContext) -> None:
    st.subheader("Questionnaire Questions")
    df = load_questions(context.client)

    categories = sorted(df["page_category"].dropna().unique()) if "page_category" in df.columns else []
    if categories:
        selected = st.selectbox(
            "Category",
            options=["All", *categories],
            format_func=lambda v: v if v == "All" else CATEGORY_LABELS.get(v, v),
            key="es_questions_category",
        )
        if selected != "All":
            df = df[df["page_category"] == selected]

    render_data_table(
        COLUMNS,
        frame_to_rows(df),
        key="es_questions",
        search_column="question",
        search_placeholder="Search questions...",
    )

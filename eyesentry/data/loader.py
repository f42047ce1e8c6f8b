import logging
from typing import Any, Dict, List, Optional, Sequence, Set

import pandas as pd
import streamlit as st
from pandas.api.types import is_object_dtype, is_string_dtype

logger = logging.getLogger(__name__)

SENTINELS: Set[str] = {"", "None", "none", "N/A", "n/a", "NA", "na", "null", "Null", "-", "—"}
DATETIME_COLUMNS = ["created_at", "updated_at", "submitted_at"]

PROFILE_COLUMNS = "id, email, name, is_admin, is_approved, is_suspended, created_at"
QUESTION_COLUMNS = "id, question, page_category, question_type, display_order, is_active, tooltip, risk_score"
QUESTIONNAIRE_COLUMNS = (
    "id, patient_id, first_name, last_name, age, race, total_score, risk_level, created_at"
)


def _normalize_sentinels(df: pd.DataFrame) -> pd.DataFrame:
    """Replace sentinel string tokens with None (in-place) and record counts in df.attrs.

    Adds / updates:
        df.attrs['sentinel_replacements'] = {column: count_replaced, ...}
    """
    replacements = {}
    for col in df.columns:
        # pandas 3 infers the dedicated `str` dtype for text columns
        if is_object_dtype(df[col]) or is_string_dtype(df[col]):
            mask = df[col].apply(lambda v: isinstance(v, str) and v.strip() in SENTINELS)
            count = int(mask.sum())
            if count:
                replacements[col] = count
                df.loc[mask, col] = None
    if replacements:
        existing = df.attrs.get("sentinel_replacements", {})
        existing.update(replacements)
        df.attrs["sentinel_replacements"] = existing
    return df


def records_to_frame(records: Sequence[Dict[str, Any]], numeric_cols: Sequence[str] = ()) -> pd.DataFrame:
    """Turn PostgREST records into a normalized DataFrame."""
    df = pd.DataFrame(list(records))
    if df.empty:
        return df

    df = _normalize_sentinels(df)

    for c in DATETIME_COLUMNS:
        if c in df.columns:
            df[c] = pd.to_datetime(df[c], errors="coerce", utc=True)
    for c in numeric_cols:
        if c in df.columns:
            df[c] = pd.to_numeric(df[c], errors="coerce")
    return df


def fetch_records(
    client,
    table: str,
    columns: str = "*",
    order_by: Optional[str] = None,
    desc: bool = False,
) -> List[Dict[str, Any]]:
    query = client.table(table).select(columns)
    if order_by:
        query = query.order(order_by, desc=desc)
    response = query.execute()
    records = response.data or []
    logger.info("Fetched %d rows from %s", len(records), table)
    return records


@st.cache_data(show_spinner=False, ttl=600)
def _load_table_impl(
    _client,
    table: str,
    columns: str,
    order_by: Optional[str],
    desc: bool,
    numeric_cols: tuple,
) -> pd.DataFrame:
    """Cached by table/columns/order; the client handle is excluded from the key."""
    records = fetch_records(_client, table, columns, order_by=order_by, desc=desc)
    return records_to_frame(records, numeric_cols)


def load_profiles(client) -> pd.DataFrame:
    return _load_table_impl(client, "profiles", PROFILE_COLUMNS, "created_at", True, ())


def load_questions(client) -> pd.DataFrame:
    return _load_table_impl(
        client, "questions", QUESTION_COLUMNS, "display_order", False, ("display_order", "risk_score")
    )


def load_questionnaires(client) -> pd.DataFrame:
    return _load_table_impl(
        client,
        "patient_questionnaires",
        QUESTIONNAIRE_COLUMNS,
        "created_at",
        True,
        ("age", "total_score"),
    )


def clear_cache() -> None:
    _load_table_impl.clear()  # type: ignore[attr-defined]

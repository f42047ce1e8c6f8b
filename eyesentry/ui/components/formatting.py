"""
Utility helpers for formatting numbers, percentages, dates, and flags in table cells.
"""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return "–"
    try:
        if pd.isna(value):
            return "–"
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    if value is None:
        return "–"
    try:
        return f"{value:+.{decimals}f}%"
    except (TypeError, ValueError):
        return "–"


def format_date(value: Any, fmt: str = "%b %d, %Y") -> str:
    if value is None:
        return ""
    ts = pd.to_datetime(value, errors="coerce", utc=True)
    if pd.isna(ts):
        return ""
    return ts.strftime(fmt)


def format_flag(value: Any, true_label: str = "Yes", false_label: str = "No") -> str:
    if isinstance(value, str):
        value = value.strip().lower() in {"true", "t", "1", "yes"}
    elif value is None or pd.isna(value):
        value = False
    return true_label if bool(value) else false_label

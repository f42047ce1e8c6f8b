from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

RISK_LEVELS = ["Low", "Moderate", "High"]


def safe_mean(series: pd.Series) -> Optional[float]:
    cleaned = pd.to_numeric(series, errors="coerce").dropna()
    if cleaned.empty:
        return None
    return float(cleaned.mean())


def pct_change(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    if current is None or previous in (None, 0):
        return None
    try:
        return ((current - previous) / previous) * 100
    except ZeroDivisionError:
        return None


def frame_to_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df.empty:
        return []
    return df.to_dict("records")


def risk_level_distribution(df: pd.DataFrame) -> pd.DataFrame:
    if "risk_level" not in df.columns:
        return pd.DataFrame({"risk_level": RISK_LEVELS, "count": [0] * len(RISK_LEVELS)})
    counts = df["risk_level"].astype(str).str.strip().str.title().value_counts()
    return pd.DataFrame({"risk_level": RISK_LEVELS, "count": [int(counts.get(level, 0)) for level in RISK_LEVELS]})


def monthly_submissions(
    df: pd.DataFrame,
    date_col: str = "created_at",
    months_back: int = 6,
    now: Optional[pd.Timestamp] = None,
) -> pd.DataFrame:
    """Count submissions per calendar month for the `months_back` months ending with the current one."""
    if date_col not in df.columns:
        return pd.DataFrame(columns=["month", "count"])
    dates = pd.to_datetime(df[date_col], errors="coerce", utc=True).dropna()
    if dates.empty:
        return pd.DataFrame(columns=["month", "count"])
    months = dates.dt.tz_convert(None).dt.to_period("M")
    counts = months.value_counts().sort_index()
    now = pd.Timestamp.now(tz="UTC") if now is None else pd.Timestamp(now)
    if now.tzinfo is not None:
        now = now.tz_convert("UTC").tz_localize(None)
    end = now.to_period("M")
    index = pd.period_range(end=end, periods=months_back, freq="M")
    counts = counts.reindex(index, fill_value=0)
    return pd.DataFrame({"month": index.to_timestamp(), "count": counts.to_numpy()})


def month_over_month(trend: pd.DataFrame) -> Optional[float]:
    if len(trend) < 2:
        return None
    return pct_change(float(trend["count"].iloc[-1]), float(trend["count"].iloc[-2]))

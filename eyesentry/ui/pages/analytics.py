from __future__ import annotations

import pandas as pd
import streamlit as st

from eyesentry.data.loader import load_questionnaires
from eyesentry.ui.components.charts import RISK_COLORS, bar_chart, line_chart, render_plotly
from eyesentry.ui.components.kpi import KpiCard, render_kpi_cards
from eyesentry.ui.pages.context import PageContext
from eyesentry.ui.pages.helpers import (
    RISK_LEVELS,
    month_over_month,
    monthly_submissions,
    risk_level_distribution,
    safe_mean,
)


def build_kpis(df: pd.DataFrame, trend: pd.DataFrame) -> list[KpiCard]:
    avg_score = safe_mean(df["total_score"]) if "total_score" in df.columns else None
    return [
        KpiCard(label="Total Submissions", value=float(len(df))),
        KpiCard(label="Average Risk Score", value=avg_score, decimals=1),
        KpiCard(
            label="Submissions This Month",
            value=float(trend["count"].iloc[-1]) if not trend.empty else None,
            delta=month_over_month(trend),
            help_text="Change versus the previous calendar month.",
        ),
    ]


def render(context: PageContext) -> None:
    st.subheader("Patient Analytics")
    df = load_questionnaires(context.client)
    if df.empty:
        st.info("No questionnaire data to analyse yet.")
        return

    months_back = st.select_slider("Months shown", options=[3, 6, 12], value=6, key="es_analytics_months")
    trend = monthly_submissions(df, months_back=months_back)
    render_kpi_cards(build_kpis(df, trend), columns=3)

    col_risk, col_trend = st.columns(2)
    with col_risk:
        render_plotly(
            bar_chart(
                risk_level_distribution(df),
                x="risk_level",
                y="count",
                title="Risk Level Distribution",
                yaxis_title="Patients",
                color_map=RISK_COLORS,
                category_order=RISK_LEVELS,
            )
        )
    with col_trend:
        if trend.empty:
            st.info("No dated submissions.")
        else:
            render_plotly(line_chart(trend, x="month", y="count", title="Monthly Submissions", yaxis_title="Submissions"))

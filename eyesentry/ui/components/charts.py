"""
Plotly chart factory functions with consistent styling for the console.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st


DEFAULT_TEMPLATE = "plotly_white"
DEFAULT_COLOR_SEQUENCE = [
    "#0ea5e9",
    "#6366f1",
    "#a855f7",
    "#ec4899",
    "#f43f5e",
    "#f97316",
    "#eab308",
]
RISK_COLORS = {
    "High": "#ef4444",
    "Moderate": "#f97316",
    "Low": "#22c55e",
}


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
) -> go.Figure:
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        colorway=DEFAULT_COLOR_SEQUENCE,
        title=title,
        hovermode="x unified",
        margin=dict(l=40, r=20, t=60, b=40),
        showlegend=False,
    )
    if yaxis_title:
        fig.update_yaxes(title=yaxis_title)
    fig.update_xaxes(showgrid=False)
    fig.update_yaxes(showgrid=True, zeroline=True)
    return fig


def render_plotly(fig: go.Figure) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def line_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
) -> go.Figure:
    fig = px.line(df, x=x, y=y, markers=True)
    return _configure_layout(fig, title, yaxis_title)


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    color_map: Optional[Dict[str, str]] = None,
    category_order: Optional[List[str]] = None,
) -> go.Figure:
    fig = px.bar(
        df,
        x=x,
        y=y,
        color=x if color_map else None,
        color_discrete_map=color_map,
        category_orders={x: category_order} if category_order else None,
    )
    return _configure_layout(fig, title, yaxis_title)

"""
Standard chart wrappers using Plotly, coloured by the active report theme.
"""
from typing import Dict, List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from proanaliz.config import MONTHS
from proanaliz.data.models import DEFAULT_THEME, ProductionType, ReportTheme
from proanaliz.metrics.yearly import YearlyTeamRollup


CHART_TEMPLATE = "plotly_white"

DEFAULT_LAYOUT = {
    "template": CHART_TEMPLATE,
    "font": {"family": "Arial, sans-serif", "size": 11},
    "margin": {"l": 40, "r": 20, "t": 40, "b": 40},
    "hoverlabel": {"bgcolor": "white"},
}


def apply_layout(fig: go.Figure, **kwargs) -> go.Figure:
    """Apply standard layout to figure."""
    layout = {**DEFAULT_LAYOUT, **kwargs}
    fig.update_layout(**layout)
    return fig


def team_performance_bar(df: pd.DataFrame, theme: Optional[ReportTheme] = None,
                         title: str = "Ekip Verimliliği (kg/kişi)") -> go.Figure:
    """
    Vertical bar of kg per person per team.

    Expects columns team_name and perf.
    """
    theme = theme or DEFAULT_THEME
    fig = px.bar(df, x="team_name", y="perf", title=title, text="perf")
    fig.update_traces(marker_color=theme.primary, textposition="outside")
    fig.update_layout(xaxis_title=None, yaxis_title=None)
    return apply_layout(fig)


def type_breakdown_donut(breakdown: Dict[ProductionType, float],
                         theme: Optional[ReportTheme] = None,
                         title: str = "Üretim Dağılımı") -> go.Figure:
    """Donut of kg per production type."""
    theme = theme or DEFAULT_THEME
    types = list(breakdown.keys())
    fig = go.Figure(go.Pie(
        labels=[t.value for t in types],
        values=[breakdown[t] for t in types],
        hole=0.55,
        marker={"colors": [theme.type_color(t) for t in types]},
        sort=False,
    ))
    fig.update_layout(title=title, legend={"orientation": "h"})
    return apply_layout(fig, height=320)


def type_breakdown_bar(df: pd.DataFrame, label_col: str,
                       theme: Optional[ReportTheme] = None,
                       title: str = "") -> go.Figure:
    """Stacked bar of production types per row (team or project)."""
    theme = theme or DEFAULT_THEME
    fig = go.Figure()
    for t in ProductionType:
        if t.value not in df.columns:
            continue
        fig.add_trace(go.Bar(
            name=t.value,
            x=df[label_col],
            y=df[t.value],
            marker_color=theme.type_color(t),
        ))
    fig.update_layout(barmode="stack", title=title)
    return apply_layout(fig)


def monthly_trend(rollup: YearlyTeamRollup, theme: Optional[ReportTheme] = None) -> go.Figure:
    """
    Monthly kg bars with unit cost line on a secondary axis.

    Months without data stay on the axis so the grid is always twelve wide.
    """
    theme = theme or DEFAULT_THEME
    monthly = rollup.monthly_frame()
    fig = go.Figure()
    fig.add_trace(go.Bar(
        name="Üretim (kg)",
        x=monthly["month"],
        y=monthly["kg"],
        marker_color=[theme.primary if h else "#e2e8f0" for h in monthly["has_data"]],
    ))
    fig.add_trace(go.Scatter(
        name="Birim Maliyet (TL/kg)",
        x=monthly["month"],
        y=monthly["unit_cost"],
        yaxis="y2",
        mode="lines+markers",
        line={"color": theme.accent},
    ))
    fig.update_layout(
        title=f"{rollup.team_name} — {rollup.year}",
        xaxis={"categoryorder": "array", "categoryarray": MONTHS},
        yaxis2={"overlaying": "y", "side": "right", "showgrid": False},
        legend={"orientation": "h"},
    )
    return apply_layout(fig, height=320)


def allocation_pie(labels: List[str], values: List[float],
                   theme: Optional[ReportTheme] = None, title: str = "") -> go.Figure:
    """Share of allocated cost or hours."""
    theme = theme or DEFAULT_THEME
    palette = [theme.primary, theme.accent, theme.temizlik, theme.secondary, theme.kaynak]
    fig = go.Figure(go.Pie(
        labels=labels,
        values=values,
        hole=0.4,
        marker={"colors": [palette[i % len(palette)] for i in range(len(labels))]},
    ))
    fig.update_layout(title=title)
    return apply_layout(fig, height=300)

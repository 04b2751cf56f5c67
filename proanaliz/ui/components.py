"""
Reusable UI components and blocks.
"""
from typing import Any, Dict, Optional

import pandas as pd
import streamlit as st

from proanaliz.data.models import ProductionType, ReportTemplate
from proanaliz.data.templates import field_label, is_field_visible
from proanaliz.metrics.dashboard import type_share
from proanaliz.metrics.team_period import TeamPeriodStats
from proanaliz.ui.formatting import (
    fmt_count,
    fmt_currency,
    fmt_hours,
    fmt_kg,
    fmt_percent,
    fmt_ratio,
)


FORMATTERS = {
    "currency": fmt_currency,
    "kg": fmt_kg,
    "hours": fmt_hours,
    "ratio": fmt_ratio,
    "percent": fmt_percent,
    "count": fmt_count,
    "text": lambda x: str(x) if pd.notna(x) else "—",
}


def kpi_strip(metrics: Dict[str, Any],
              format_map: Optional[Dict[str, str]] = None):
    """
    Render horizontal strip of KPI cards.

    Args:
        metrics: Dict of {label: value}
        format_map: Dict of {label: format_type} where format_type is
                    'currency', 'kg', 'hours', 'ratio', 'percent', 'count'
    """
    if not metrics:
        return
    if format_map is None:
        format_map = {}

    cols = st.columns(len(metrics))
    for i, (label, value) in enumerate(metrics.items()):
        with cols[i]:
            formatter = FORMATTERS.get(format_map.get(label, "kg"), str)
            st.metric(label=label, value=formatter(value))


def empty_state(message: str = "Seçilen kriterlere uygun veri bulunamadı."):
    st.info(message)


# =============================================================================
# TEMPLATE-DRIVEN TEAM CARD
# =============================================================================

# field id -> (stats attribute, format type)
TEMPLATE_FIELD_METRICS = {
    "personnel": ("personnel", "count"),
    "budget": ("budget_amount", "currency"),
    "efficiency": ("kg_per_person", "ratio"),
    "costPerKg": ("cost_per_kg", "ratio"),
    "manHours": ("man_hours", "hours"),
}


def template_metrics(stats: TeamPeriodStats, template: ReportTemplate) -> Dict[str, Any]:
    """
    KPI values for the visible template fields, keyed by their labels.

    Total kg is always shown first.
    """
    metrics: Dict[str, Any] = {"Toplam Üretim": stats.total_kg}
    for f in template.fields:
        if f.id not in TEMPLATE_FIELD_METRICS or not is_field_visible(template, f.id):
            continue
        attr, _ = TEMPLATE_FIELD_METRICS[f.id]
        metrics[field_label(template, f.id, f.label)] = getattr(stats, attr)
    return metrics


def template_format_map(template: ReportTemplate) -> Dict[str, str]:
    format_map = {"Toplam Üretim": "kg"}
    for f in template.fields:
        if f.id in TEMPLATE_FIELD_METRICS:
            format_map[field_label(template, f.id, f.label)] = TEMPLATE_FIELD_METRICS[f.id][1]
    return format_map


def render_type_breakdown(breakdown: Dict[ProductionType, float], label: str = "Üretim Detayları"):
    st.markdown(f"**{label}**")
    shares = type_share(breakdown)
    cols = st.columns(len(breakdown))
    for i, (t, kg) in enumerate(breakdown.items()):
        with cols[i]:
            st.metric(t.value, fmt_kg(kg), fmt_percent(shares[t]), delta_color="off")


def render_team_card(stats: TeamPeriodStats, template: ReportTemplate):
    """Single-team report body honouring the template's visible fields."""
    kpi_strip(template_metrics(stats, template), template_format_map(template))
    if is_field_visible(template, "breakdown"):
        render_type_breakdown(
            stats.type_breakdown,
            field_label(template, "breakdown", "Üretim Detayları"),
        )

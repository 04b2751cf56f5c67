"""
Dashboard Page

Company-wide production, cost and team efficiency at a glance.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data import marts
from proanaliz.data.loader import load_collections, load_templates
from proanaliz.data.templates import active_template
from proanaliz.metrics.dashboard import compute_team_performance, compute_type_totals
from proanaliz.data.semantic import type_breakdown, filter_entries
from proanaliz.ui.charts import team_performance_bar, type_breakdown_donut
from proanaliz.ui.components import empty_state, kpi_strip
from proanaliz.ui.formatting import format_metric_df, label_columns
from proanaliz.ui.layout import render_year_filter, require_session, section_header
from proanaliz.logging_config import setup_logging
from proanaliz.ui.state import init_state


st.set_page_config(page_title="Gösterge Paneli", page_icon="📈", layout="wide")

setup_logging()
init_state()


def main():
    require_session()
    st.title("Gösterge Paneli")

    year = render_year_filter()
    data = load_collections()
    theme = active_template(load_templates()).theme

    totals = marts.overview(data.entries, data.budgets, year=year)
    kpi_strip(
        {
            "Toplam Üretim": totals.total_kg,
            "Toplam Hakediş": totals.total_cost,
            "Adam-Saat": totals.total_hours,
            "kg/Kişi": totals.kg_per_person,
            "TL/kg": totals.cost_per_kg,
        },
        {
            "Toplam Üretim": "kg",
            "Toplam Hakediş": "currency",
            "Adam-Saat": "hours",
            "kg/Kişi": "ratio",
            "TL/kg": "ratio",
        },
    )

    performance = compute_team_performance(data.entries, data.budgets, data.teams, year=year)
    if len(performance) == 0:
        empty_state("Kayıtlı ekip yok.")
        return

    section_header("Ekip Performansı", f"{year} yılı toplam üretimin toplam personele oranı")
    col1, col2 = st.columns([3, 2])
    with col1:
        st.plotly_chart(team_performance_bar(performance, theme), use_container_width=True)
    with col2:
        breakdown = type_breakdown(filter_entries(data.entries, year=year))
        st.plotly_chart(type_breakdown_donut(breakdown, theme), use_container_width=True)

    st.dataframe(
        label_columns(format_metric_df(performance.drop(columns=["team_id"]))),
        use_container_width=True,
        hide_index=True,
    )

    with st.expander("Üretim türü toplamları"):
        st.dataframe(format_metric_df(compute_type_totals(data.entries, year=year)),
                     use_container_width=True, hide_index=True)


if __name__ == "__main__":
    main()

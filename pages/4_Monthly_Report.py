"""
Monthly Report Page

Team report for one month or the whole year, in three views:
single team, all teams side by side, and a team's project allocation.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data import marts
from proanaliz.data.loader import load_collections, load_templates
from proanaliz.data.templates import active_template
from proanaliz.metrics.project_allocation import allocation_frame
from proanaliz.metrics.team_period import stats_frame
from proanaliz.ui.charts import allocation_pie, type_breakdown_bar, type_breakdown_donut
from proanaliz.ui.components import empty_state, kpi_strip, render_team_card
from proanaliz.ui.formatting import format_metric_df, label_columns
from proanaliz.ui.layout import (
    render_month_filter,
    render_report_footer,
    render_report_header,
    render_team_filter,
    render_year_filter,
    require_session,
    section_header,
)
from proanaliz.logging_config import setup_logging
from proanaliz.ui.state import get_state, init_state, set_state


st.set_page_config(page_title="Aylık Rapor", page_icon="📄", layout="wide")

setup_logging()
init_state()

VIEWS = {
    "single": "Tek Ekip",
    "compare": "Ekip Karşılaştırma",
    "project": "Proje Dağılımı",
}


def render_single(data, template, year: int, period_label: str):
    team_id = render_team_filter(data.teams)
    if team_id is None:
        empty_state("Rapor için önce bir ekip ekleyin.")
        return

    stats = marts.team_period_stats(team_id, year, period_label,
                                    data.entries, data.budgets, data.teams)
    section_header(stats.team_name)
    if not stats.has_data:
        empty_state()
        return

    render_team_card(stats, template)
    if template.show_charts and stats.total_kg > 0:
        st.plotly_chart(type_breakdown_donut(stats.type_breakdown, template.theme),
                        use_container_width=True)


def render_compare(data, template, year: int, period_label: str):
    stats = marts.team_comparison(year, period_label, data.entries, data.budgets, data.teams)
    active = [s for s in stats if s.has_data]
    if not active:
        empty_state()
        return

    df = stats_frame(active)
    if template.show_charts:
        st.plotly_chart(
            type_breakdown_bar(df, "team_name", template.theme, title="Ekip Bazında Üretim"),
            use_container_width=True,
        )
    st.dataframe(label_columns(format_metric_df(df.drop(columns=["team_id"]))),
                 use_container_width=True, hide_index=True)


def render_project_split(data, template, year: int, period_label: str):
    team_id = render_team_filter(data.teams)
    if team_id is None:
        empty_state("Rapor için önce bir ekip ekleyin.")
        return

    stats = marts.team_period_stats(team_id, year, period_label,
                                    data.entries, data.budgets, data.teams)
    rows = marts.team_project_allocations(team_id, year, period_label, data.entries,
                                          data.budgets, data.teams, data.projects)
    section_header(stats.team_name, "Ekip saat ve maliyetinin projelere üretim payına göre dağılımı")
    if not rows:
        empty_state()
        return

    kpi_strip(
        {"Toplam Üretim": stats.total_kg, "Adam-Saat": stats.man_hours,
         "Toplam Hakediş": stats.budget_amount},
        {"Toplam Üretim": "kg", "Adam-Saat": "hours", "Toplam Hakediş": "currency"},
    )

    df = allocation_frame(rows)
    if template.show_charts:
        st.plotly_chart(
            allocation_pie(df["project_name"].tolist(), df["allocated_cost"].tolist(),
                           template.theme, title="Maliyet Dağılımı"),
            use_container_width=True,
        )
    display = df[["project_name", "project_kg", "ratio", "allocated_hours",
                  "allocated_cost", "unit_cost"]]
    st.dataframe(label_columns(format_metric_df(display)), use_container_width=True, hide_index=True)


def main():
    require_session()

    year = render_year_filter()
    period_label = render_month_filter()

    view = st.radio("Görünüm", list(VIEWS), format_func=VIEWS.get, horizontal=True,
                    index=list(VIEWS).index(get_state("report_view")))
    set_state("report_view", view)

    data = load_collections()
    template = active_template(load_templates())

    render_report_header(template.header_title, VIEWS[view], f"{period_label} {year}")

    if view == "single":
        render_single(data, template, year, period_label)
    elif view == "compare":
        render_compare(data, template, year, period_label)
    else:
        render_project_split(data, template, year, period_label)

    render_report_footer()


if __name__ == "__main__":
    main()

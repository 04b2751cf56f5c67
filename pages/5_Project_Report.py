"""
Project Report Page

Every team that produced for a project, with the share of its hours and
cost allocated to that project.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data import marts
from proanaliz.data.loader import load_collections, load_templates
from proanaliz.data.templates import active_template
from proanaliz.metrics.project_allocation import allocation_frame
from proanaliz.ui.charts import allocation_pie, type_breakdown_bar
from proanaliz.ui.components import empty_state, kpi_strip
from proanaliz.ui.formatting import format_metric_df, label_columns
from proanaliz.ui.layout import (
    render_month_filter,
    render_project_filter,
    render_report_footer,
    render_report_header,
    render_year_filter,
    require_session,
    section_header,
)
from proanaliz.logging_config import setup_logging
from proanaliz.ui.state import init_state


st.set_page_config(page_title="Proje Raporu", page_icon="🏗️", layout="wide")

setup_logging()
init_state()


def main():
    require_session()

    year = render_year_filter()
    period_label = render_month_filter()
    data = load_collections()
    project_id = render_project_filter(data.projects)
    template = active_template(load_templates())

    report = marts.project_report(project_id, year, period_label, data.entries,
                                  data.budgets, data.teams, data.projects)
    summary = report.summary

    render_report_header("Proje Maliyet Raporu", summary.project_name, f"{period_label} {year}")

    if project_id is None:
        empty_state("Rapor için önce bir proje ekleyin.")
        return
    if not report.rows:
        empty_state()
        render_report_footer()
        return

    kpi_strip(
        {
            "Proje Üretimi": summary.project_total_kg,
            "Ekip Sayısı": summary.team_count,
            "Ekip Başına Ort.": summary.avg_per_team,
            "Dağıtılan Saat": summary.total_allocated_hours,
            "Dağıtılan Maliyet": summary.total_allocated_cost,
            "Birim Maliyet (TL/kg)": summary.unit_cost,
        },
        {
            "Proje Üretimi": "kg",
            "Ekip Sayısı": "count",
            "Ekip Başına Ort.": "kg",
            "Dağıtılan Saat": "hours",
            "Dağıtılan Maliyet": "currency",
            "Birim Maliyet (TL/kg)": "ratio",
        },
    )

    df = allocation_frame(report.rows)

    if template.show_charts:
        col1, col2 = st.columns(2)
        with col1:
            st.plotly_chart(
                type_breakdown_bar(df, "team_name", template.theme, title="Ekip Bazında Üretim"),
                use_container_width=True,
            )
        with col2:
            st.plotly_chart(
                allocation_pie(df["team_name"].tolist(), df["allocated_cost"].tolist(),
                               template.theme, title="Maliyet Payları"),
                use_container_width=True,
            )

    section_header("Ekip Detayı", "Ekip sırası projeye ilk giriş sırasına göredir")
    display = df[["team_name", "personnel", "project_kg", "team_total_kg", "ratio",
                  "allocated_hours", "allocated_cost", "unit_cost"]]
    st.dataframe(label_columns(format_metric_df(display)), use_container_width=True, hide_index=True)

    render_report_footer()


if __name__ == "__main__":
    main()

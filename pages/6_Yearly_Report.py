"""
Yearly Report Page

Twelve-month grid per active team with annual totals.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data import marts
from proanaliz.data.loader import load_collections, load_templates
from proanaliz.data.templates import active_template
from proanaliz.metrics.yearly import yearly_matrix
from proanaliz.ui.charts import monthly_trend
from proanaliz.ui.components import empty_state, kpi_strip
from proanaliz.ui.formatting import format_metric_df, label_columns
from proanaliz.ui.layout import (
    render_report_footer,
    render_report_header,
    render_year_filter,
    require_session,
    section_header,
)
from proanaliz.logging_config import setup_logging
from proanaliz.ui.state import init_state


st.set_page_config(page_title="Yıllık Rapor", page_icon="📅", layout="wide")

setup_logging()
init_state()

MATRIX_METRICS = {
    "kg": "Üretim (kg)",
    "cost": "Hakediş (TL)",
    "hours": "Adam-Saat",
    "unit_cost": "Birim Maliyet (TL/kg)",
}


def main():
    require_session()

    year = render_year_filter()
    data = load_collections()
    template = active_template(load_templates())

    report = marts.yearly_report(year, data.entries, data.budgets, data.teams)
    render_report_header("Yıllık Performans Raporu", "Tüm ekipler", str(year))

    kpi_strip(
        {
            "Yıllık Üretim": report.summary.total_kg,
            "Yıllık Hakediş": report.summary.total_cost,
            "Yıllık Adam-Saat": report.summary.total_hours,
            "Ort. Verim (kg/kişi)": report.summary.avg_efficiency,
        },
        {
            "Yıllık Üretim": "kg",
            "Yıllık Hakediş": "currency",
            "Yıllık Adam-Saat": "hours",
            "Ort. Verim (kg/kişi)": "ratio",
        },
    )

    if not report.teams:
        empty_state(f"{year} yılı için veri yok.")
        return

    section_header("Aylık Matris")
    metric = st.selectbox("Gösterge", list(MATRIX_METRICS), format_func=MATRIX_METRICS.get)
    matrix = yearly_matrix(report, metric=metric).set_index("team_name")
    st.dataframe(matrix.round(2), use_container_width=True)

    section_header("Ekip Detayı")
    for rollup in report.teams:
        with st.expander(f"{rollup.team_name}: {rollup.annual_kg:,.0f} kg"):
            if template.show_charts:
                st.plotly_chart(monthly_trend(rollup, template.theme), use_container_width=True)
            monthly = rollup.monthly_frame()
            monthly = monthly[monthly["has_data"]].drop(columns=["has_data"])
            st.dataframe(label_columns(format_metric_df(monthly)),
                         use_container_width=True, hide_index=True)

    render_report_footer()


if __name__ == "__main__":
    main()

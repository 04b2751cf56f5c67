"""
Period Summary Page

All teams and projects together for one month or the whole year.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data import marts
from proanaliz.data.loader import load_collections, load_templates
from proanaliz.data.models import parse_period
from proanaliz.data.semantic import filter_entries, type_breakdown
from proanaliz.data.templates import active_template
from proanaliz.ui.charts import type_breakdown_donut
from proanaliz.ui.components import kpi_strip, render_type_breakdown
from proanaliz.ui.layout import (
    render_month_filter,
    render_report_footer,
    render_report_header,
    render_year_filter,
    require_session,
)
from proanaliz.logging_config import setup_logging
from proanaliz.ui.state import init_state


st.set_page_config(page_title="Dönem Özeti", page_icon="🧾", layout="wide")

setup_logging()
init_state()


def main():
    require_session()

    year = render_year_filter()
    period_label = render_month_filter()
    data = load_collections()
    template = active_template(load_templates())

    summary = marts.period_summary(year, period_label, data.entries, data.budgets)
    render_report_header("Dönem Özeti", "Tüm ekipler ve projeler", f"{period_label} {year}")

    kpi_strip(
        {
            "Toplam Üretim": summary.kg,
            "Toplam Hakediş": summary.budget,
            "Personel": summary.personnel,
            "Adam-Saat": summary.hours,
            "TL/kg": summary.cost_per_kg,
            "kg/Saat": summary.kg_per_hour,
        },
        {
            "Toplam Üretim": "kg",
            "Toplam Hakediş": "currency",
            "Personel": "count",
            "Adam-Saat": "hours",
            "TL/kg": "ratio",
            "kg/Saat": "ratio",
        },
    )

    breakdown = type_breakdown(filter_entries(data.entries, year=year, period=parse_period(period_label)))
    render_type_breakdown(breakdown)
    if template.show_charts and summary.kg > 0:
        st.plotly_chart(type_breakdown_donut(breakdown, template.theme), use_container_width=True)

    render_report_footer()


if __name__ == "__main__":
    main()

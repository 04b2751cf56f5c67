"""
Budgets Page

Monthly personnel count, budget amount and working-day calendar per team.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.auth import ROLE_ADMIN
from proanaliz.config import MONTHS, YEARS
from proanaliz.data.actions import add_budget, delete_budget
from proanaliz.data.calendar_days import (
    month_day_numbers,
    weekday_off_days,
    working_days_from_off_days,
    working_days_from_on_days,
)
from proanaliz.data.loader import load_collections
from proanaliz.data.semantic import filter_budgets, name_lookup
from proanaliz.data.validation import ValidationError
from proanaliz.metrics.man_hours import add_man_hours_column, man_hours
from proanaliz.ui.components import empty_state
from proanaliz.ui.formatting import fmt_currency, fmt_hours, format_metric_df, label_columns
from proanaliz.ui.layout import render_year_filter, require_session, section_header
from proanaliz.logging_config import setup_logging
from proanaliz.ui.state import init_state


st.set_page_config(page_title="Bütçe ve Personel", page_icon="💰", layout="wide")

setup_logging()
init_state()

CALENDAR_MODES = {
    "off": "Tatil günlerini işaretle",
    "on": "Çalışılan günleri işaretle",
}


def render_budget_form(teams):
    if len(teams) == 0:
        empty_state("Bütçe girişi için önce Ayarlar sayfasından ekip ekleyin.")
        return

    team_names = name_lookup(teams)

    # Calendar widgets sit outside the form so the day list follows the month.
    c1, c2, c3 = st.columns(3)
    year = c1.selectbox("Yıl", YEARS, key="budget_year")
    month = c2.selectbox("Ay", MONTHS, key="budget_month")
    mode = c3.radio("Takvim", list(CALENDAR_MODES), format_func=CALENDAR_MODES.get,
                    key="budget_calendar_mode")

    days = month_day_numbers(year, month)
    if mode == "off":
        marked = st.multiselect("Tatil günleri", days,
                                default=weekday_off_days(year, month),
                                key=f"budget_off_{year}_{month}")
        working_days = working_days_from_off_days(year, month, marked)
    else:
        weekends = set(weekday_off_days(year, month))
        marked = st.multiselect("Çalışılan günler", days,
                                default=[d for d in days if d not in weekends],
                                key=f"budget_on_{year}_{month}")
        working_days = working_days_from_on_days(year, month, marked)

    with st.form("budget_form", clear_on_submit=True):
        f1, f2, f3 = st.columns(3)
        team_id = f1.selectbox("Ekip", list(team_names), format_func=lambda x: team_names[x])
        personnel = f2.number_input("Personel Sayısı", min_value=0, step=1)
        amount = f3.number_input("Hakediş Tutarı (TL)", min_value=0.0, step=1000.0)
        st.caption(
            f"{working_days.count} çalışma günü · "
            f"{fmt_hours(man_hours(personnel, working_days))} adam-saat"
        )
        submitted = st.form_submit_button("Kaydet")

    if submitted:
        try:
            saved = add_budget({
                "team_id": team_id,
                "year": year,
                "month": month,
                "personnel_count": personnel,
                "amount_tl": amount,
                "working_days": working_days,
            })
        except ValidationError as e:
            st.error(f"HATA: {e}")
            return
        if saved is None:
            st.error("Kayıt sırasında bir hata oluştu.")
        else:
            st.toast(f"{team_names[team_id]} için {month} {year} bütçesi kaydedildi "
                     f"({fmt_currency(saved['amount_tl'])}).")
            st.rerun()


def render_budget_list(budgets, teams, year: int):
    section_header("Kayıtlı Bütçeler", f"{year} yılı")
    df = filter_budgets(budgets, year=year)
    if len(df) == 0:
        empty_state("Bu yıl için bütçe kaydı yok.")
        return

    team_names = name_lookup(teams)
    df = add_man_hours_column(df)
    df["team_name"] = df["team_id"].map(team_names).fillna("Ekip")
    df["working_day_count"] = df["working_days"].apply(lambda w: w.count)

    display = df[["month", "team_name", "personnel_count", "amount_tl",
                  "working_day_count", "man_hours"]]
    st.dataframe(label_columns(format_metric_df(display)), use_container_width=True, hide_index=True)

    with st.expander("Bütçe sil"):
        options = dict(zip(df["id"], df["month"] + " · " + df["team_name"]))
        budget_id = st.selectbox("Kayıt", list(options), format_func=options.get)
        if st.button("Seçili bütçeyi sil"):
            if delete_budget(budget_id):
                st.rerun()
            st.error("Silme işlemi başarısız.")


def main():
    require_session(allowed_roles=(ROLE_ADMIN,))
    st.title("Bütçe ve Personel")

    data = load_collections()
    render_budget_form(data.teams)

    st.markdown("---")
    year = render_year_filter()
    render_budget_list(data.budgets, data.teams, year)


if __name__ == "__main__":
    main()

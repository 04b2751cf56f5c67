"""
Production Entry Page

Record produced kilograms per project, team and production type.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.auth import ROLE_ADMIN
from proanaliz.config import MONTHS, YEARS
from proanaliz.data.actions import add_entry, delete_entry
from proanaliz.data.loader import load_collections
from proanaliz.data.models import PRODUCTION_TYPES
from proanaliz.data.semantic import name_lookup
from proanaliz.data.validation import ValidationError
from proanaliz.ui.components import empty_state
from proanaliz.ui.formatting import fmt_kg
from proanaliz.ui.layout import require_session, section_header
from proanaliz.logging_config import setup_logging
from proanaliz.ui.state import get_state, init_state


st.set_page_config(page_title="Üretim Girişi", page_icon="📝", layout="wide")

setup_logging()
init_state()


def render_entry_form(teams, projects):
    if len(teams) == 0 or len(projects) == 0:
        empty_state("Üretim girişi için önce Ayarlar sayfasından ekip ve proje ekleyin.")
        return

    team_names = name_lookup(teams)
    project_names = name_lookup(projects)
    year_default = get_state("filter_year")

    with st.form("entry_form", clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            year = st.selectbox("Yıl", YEARS,
                                index=YEARS.index(year_default) if year_default in YEARS else 0)
            project_id = st.selectbox("Proje", list(project_names),
                                      format_func=lambda x: project_names[x])
            production_type = st.selectbox("Üretim Türü", [t.value for t in PRODUCTION_TYPES])
        with c2:
            month = st.selectbox("Ay", MONTHS)
            team_id = st.selectbox("Ekip", list(team_names), format_func=lambda x: team_names[x])
            quantity = st.number_input("Miktar (kg)", min_value=0.0, step=10.0)
        submitted = st.form_submit_button("Kaydet")

    if submitted:
        try:
            saved = add_entry({
                "year": year,
                "month": month,
                "project_id": project_id,
                "team_id": team_id,
                "type": production_type,
                "quantity_kg": quantity,
            })
        except ValidationError as e:
            st.error(f"HATA: {e}")
            return
        if saved is None:
            st.error("Kayıt sırasında bir hata oluştu.")
        else:
            st.success(f"{fmt_kg(saved['quantity_kg'])} kaydedildi.")


def render_recent_entries(entries, teams, projects, limit: int = 50):
    section_header("Son Girişler")
    if len(entries) == 0:
        empty_state("Henüz üretim girişi yok.")
        return

    team_names = name_lookup(teams)
    project_names = name_lookup(projects)
    recent = entries.iloc[::-1].head(limit)

    for _, row in recent.iterrows():
        c1, c2, c3, c4, c5 = st.columns([2, 3, 3, 2, 1])
        c1.write(f"{row['month']} {row['year']}")
        c2.write(project_names.get(row["project_id"], "Proje"))
        c3.write(f"{team_names.get(row['team_id'], 'Ekip')} · {row['type']}")
        c4.write(fmt_kg(row["quantity_kg"]))
        if c5.button("Sil", key=f"delete_entry_{row['id']}"):
            if delete_entry(row["id"]):
                st.rerun()
            st.error("Silme işlemi başarısız.")


def main():
    require_session(allowed_roles=(ROLE_ADMIN,))
    st.title("Üretim Girişi")

    data = load_collections()
    render_entry_form(data.teams, data.projects)

    st.markdown("---")
    render_recent_entries(data.entries, data.teams, data.projects)


if __name__ == "__main__":
    main()

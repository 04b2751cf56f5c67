"""
ProAnaliz Production Tracking Dashboard

Main entry point for Streamlit app.
"""
import streamlit as st
from pathlib import Path

# Page config must be first Streamlit command
st.set_page_config(
    page_title="ProAnaliz",
    page_icon="🏭",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Add package root to path
import sys
sys.path.insert(0, str(Path(__file__).parent))

from proanaliz.auth import AuthenticationError, ROLE_ADMIN, ROLE_VIEWER
from proanaliz.config import config, TABLE_FILES
from proanaliz.data.loader import get_data_status, load_collections
from proanaliz.data import marts
from proanaliz.logging_config import setup_logging
from proanaliz.ui.components import kpi_strip
from proanaliz.ui.layout import ROLE_LABELS, render_session_box
from proanaliz.ui.state import current_session, get_auth_service, init_state, start_session


setup_logging()


def render_login():
    """Role + password gate."""
    st.title("ProAnaliz")
    st.caption("Personel ve Üretim Takip Sistemi")

    with st.form("login_form"):
        role = st.radio(
            "Giriş türü",
            options=[ROLE_VIEWER, ROLE_ADMIN],
            format_func=lambda r: ROLE_LABELS[r],
            horizontal=True,
        )
        password = st.text_input("Şifre", type="password")
        submitted = st.form_submit_button("Giriş Yap")

    if submitted:
        try:
            session = get_auth_service().login(role, password)
        except AuthenticationError as e:
            st.error(str(e))
            return
        start_session(session)
        st.rerun()


def main():
    """Main app entry point."""

    # Initialize session state
    init_state()

    session = current_session()
    if session is None:
        render_login()
        return

    render_session_box(session)

    st.title("ProAnaliz Üretim Takip")
    st.caption(f"{ROLE_LABELS[session.role]} olarak giriş yapıldı.")

    status = get_data_status()
    if not any(info["rows"] for info in status.values()):
        st.info(
            "Henüz kayıt yok. Ayarlar sayfasından ekip ve proje ekleyin, "
            "ardından bütçe ve üretim girişi yapın."
        )

    data = load_collections()
    totals = marts.overview(data.entries, data.budgets)

    kpi_strip(
        {
            "Toplam Üretim": totals.total_kg,
            "Toplam Hakediş": totals.total_cost,
            "Toplam Adam-Saat": totals.total_hours,
            "Birim Maliyet (TL/kg)": totals.cost_per_kg,
        },
        {
            "Toplam Üretim": "kg",
            "Toplam Hakediş": "currency",
            "Toplam Adam-Saat": "hours",
            "Birim Maliyet (TL/kg)": "ratio",
        },
    )

    # Navigation
    st.markdown("---")

    col1, col2 = st.columns([1, 3])

    with col1:
        st.markdown("### Sayfalar")
        st.page_link("pages/1_Dashboard.py", label="Gösterge Paneli", icon="📈")
        if session.is_admin:
            st.page_link("pages/2_Production_Entry.py", label="Üretim Girişi", icon="📝")
            st.page_link("pages/3_Budgets.py", label="Bütçe ve Personel", icon="💰")
        st.page_link("pages/4_Monthly_Report.py", label="Aylık Rapor", icon="📄")
        st.page_link("pages/5_Project_Report.py", label="Proje Raporu", icon="🏗️")
        st.page_link("pages/6_Yearly_Report.py", label="Yıllık Rapor", icon="📅")
        st.page_link("pages/7_Period_Summary.py", label="Dönem Özeti", icon="🧾")
        if session.is_admin:
            st.page_link("pages/8_Settings.py", label="Ayarlar", icon="⚙️")

    with col2:
        with st.expander("Veri Durumu"):
            for table, info in status.items():
                if info["error"]:
                    st.markdown(f"❌ `{TABLE_FILES[table]}`: {info['error']}")
                else:
                    icon = "✅" if info["exists"] else "⚪"
                    st.markdown(f"{icon} `{TABLE_FILES[table]}` ({info['rows']:,} kayıt)")
            st.caption(f"Kayıt dizini: {config.store_dir}")


if __name__ == "__main__":
    main()

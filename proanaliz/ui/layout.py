"""
Page scaffolding: access gate, sidebar filters, report headers.
"""
from datetime import date
from typing import Iterable, Optional

import pandas as pd
import streamlit as st

from proanaliz.auth import ROLE_ADMIN, ROLE_VIEWER, Session
from proanaliz.config import ALL_MONTHS_LABEL, MONTHS, YEARS
from proanaliz.ui.state import current_session, end_session, get_state, set_state


# =============================================================================
# ACCESS
# =============================================================================

ROLE_LABELS = {
    ROLE_ADMIN: "Yönetici",
    ROLE_VIEWER: "İzleyici",
}


def require_session(allowed_roles: Iterable[str] = (ROLE_ADMIN, ROLE_VIEWER)) -> Session:
    """
    Stop the page unless the tab holds a valid session with an allowed role.
    """
    session = current_session()
    if session is None:
        st.warning("Oturum bulunamadı. Lütfen ana sayfadan giriş yapın.")
        st.page_link("app.py", label="Giriş", icon="🔐")
        st.stop()
    if not session.can_view(tuple(allowed_roles)):
        st.error("Bu sayfa için yetkiniz yok.")
        st.stop()
    render_session_box(session)
    return session


def render_session_box(session: Session):
    with st.sidebar:
        st.caption(f"{ROLE_LABELS.get(session.role, session.role).upper()} MODU")
        if st.button("Oturumu Kapat", key="logout_button"):
            end_session()
            st.rerun()
        st.divider()


# =============================================================================
# SIDEBAR FILTERS
# =============================================================================

def render_year_filter(key: str = "filter_year_select") -> int:
    current = get_state("filter_year")
    index = YEARS.index(current) if current in YEARS else 0
    year = st.sidebar.selectbox("Yıl", options=YEARS, index=index, key=key)
    set_state("filter_year", year)
    return year


def render_month_filter(allow_all: bool = True, key: str = "filter_month_select") -> str:
    options = ([ALL_MONTHS_LABEL] if allow_all else []) + MONTHS
    current = get_state("filter_month")
    index = options.index(current) if current in options else options.index(MONTHS[0])
    month = st.sidebar.selectbox("Ay", options=options, index=index, key=key)
    set_state("filter_month", month)
    return month


def render_team_filter(teams: pd.DataFrame, key: str = "filter_team_select") -> Optional[str]:
    if len(teams) == 0:
        st.sidebar.info("Kayıtlı ekip yok.")
        return None
    ids = teams["id"].tolist()
    names = dict(zip(teams["id"], teams["name"]))
    current = get_state("selected_team")
    index = ids.index(current) if current in ids else 0
    team_id = st.sidebar.selectbox("Ekip", options=ids, index=index,
                                   format_func=lambda x: names.get(x, x), key=key)
    set_state("selected_team", team_id)
    return team_id


def render_project_filter(projects: pd.DataFrame, key: str = "filter_project_select") -> Optional[str]:
    if len(projects) == 0:
        st.sidebar.info("Kayıtlı proje yok.")
        return None
    ids = projects["id"].tolist()
    names = dict(zip(projects["id"], projects["name"]))
    current = get_state("selected_project")
    index = ids.index(current) if current in ids else 0
    project_id = st.sidebar.selectbox("Proje", options=ids, index=index,
                                      format_func=lambda x: names.get(x, x), key=key)
    set_state("selected_project", project_id)
    return project_id


# =============================================================================
# REPORT HEADER / FOOTER
# =============================================================================

def section_header(title: str, description: Optional[str] = None):
    """Render section header with optional description."""
    st.subheader(title)
    if description:
        st.caption(description)


def render_report_header(title: str, subtitle: str, period_text: str):
    col1, col2 = st.columns([3, 2])
    with col1:
        st.markdown("### PROANALİZ ENTERPRISE")
        st.caption(subtitle)
    with col2:
        st.markdown(f"**{title.upper()}**")
        st.caption(f"DÖNEM: {period_text}")
    st.divider()


def render_report_footer():
    st.caption(f"SİSTEM ONAYLI BELGE · RAPOR TARİHİ: {date.today().strftime('%d.%m.%Y')}")

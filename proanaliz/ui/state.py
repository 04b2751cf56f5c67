"""
Session state management for Streamlit app.
"""
from typing import Any, Optional

import streamlit as st

from proanaliz.auth import AuthService, Session
from proanaliz.config import config, MONTHS
from proanaliz.data.store import get_store


# =============================================================================
# DEFAULT VALUES
# =============================================================================

DEFAULTS = {
    "session_token": None,
    "filter_year": config.default_year,
    "filter_month": MONTHS[0],
    "selected_team": None,
    "selected_project": None,
    "report_view": "single",
}


# =============================================================================
# STATE HELPERS
# =============================================================================

def init_state():
    """Initialize all session state keys with defaults."""
    for key, default in DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = default


def get_state(key: str) -> Any:
    """Get state value with default fallback."""
    init_state()
    return st.session_state.get(key, DEFAULTS.get(key))


def set_state(key: str, value: Any):
    """Set state value."""
    st.session_state[key] = value


def reset_state():
    """Reset all state to defaults."""
    for key, default in DEFAULTS.items():
        st.session_state[key] = default


# =============================================================================
# AUTHENTICATION
# =============================================================================

@st.cache_resource
def get_auth_service() -> AuthService:
    """Process-wide auth service; tokens live as long as the server."""
    return AuthService(get_store())


def current_session() -> Optional[Session]:
    """Validated session for this browser tab, or None."""
    session = get_auth_service().validate(get_state("session_token"))
    if session is None and get_state("session_token") is not None:
        set_state("session_token", None)
    return session


def start_session(session: Session):
    set_state("session_token", session.token)


def end_session():
    get_auth_service().logout(get_state("session_token"))
    reset_state()


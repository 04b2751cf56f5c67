"""
Data loading utilities with Streamlit caching.

Every load goes through the store, the schema check and the table
sanitiser. A failed read is logged and rendered as an empty table so the
reports show zeros instead of crashing.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

import pandas as pd
import streamlit as st

from proanaliz.config import config, TABLE_FILES, SETTING_REPORT_TEMPLATE
from proanaliz.data.models import ReportTemplate
from proanaliz.data.schema import empty_table, sanitize_table, validate_schema
from proanaliz.data.store import StoreError, get_store
from proanaliz.data.templates import parse_templates

logger = logging.getLogger(__name__)


def read_table(table: str, store=None) -> pd.DataFrame:
    """Uncached read of one sanitised table."""
    store = store if store is not None else get_store()
    try:
        raw = store.list(table)
    except StoreError as e:
        logger.error("Could not load %s: %s", table, e, extra={"table": table})
        return sanitize_table(empty_table(table), table)

    result = validate_schema(raw, table, strict=False)
    if not result["is_valid"]:
        logger.error(
            "Table %s is missing required columns %s; treating it as empty",
            table, result["missing_required"], extra={"table": table},
        )
        return sanitize_table(empty_table(table), table)

    return sanitize_table(raw, table)


@st.cache_data(ttl=config.cache_ttl_seconds)
def load_teams() -> pd.DataFrame:
    """Load the teams table."""
    return read_table("teams")


@st.cache_data(ttl=config.cache_ttl_seconds)
def load_projects() -> pd.DataFrame:
    """Load the projects table."""
    return read_table("projects")


@st.cache_data(ttl=config.cache_ttl_seconds)
def load_budgets() -> pd.DataFrame:
    """Load budgets with parsed working-day calendars."""
    return read_table("budgets")


@st.cache_data(ttl=config.cache_ttl_seconds)
def load_entries() -> pd.DataFrame:
    """Load production entries."""
    return read_table("entries")


def read_templates(store=None) -> List[ReportTemplate]:
    store = store if store is not None else get_store()
    try:
        value = store.get_setting(SETTING_REPORT_TEMPLATE)
    except StoreError as e:
        logger.error("Could not load report template: %s", e)
        value = None
    return parse_templates(value)


@st.cache_data(ttl=config.cache_ttl_seconds)
def load_templates() -> List[ReportTemplate]:
    """Load report templates (default template when none is stored)."""
    return read_templates()


@dataclass
class Collections:
    """Snapshot of the four record collections."""
    teams: pd.DataFrame
    projects: pd.DataFrame
    budgets: pd.DataFrame
    entries: pd.DataFrame


def load_collections() -> Collections:
    return Collections(
        teams=load_teams(),
        projects=load_projects(),
        budgets=load_budgets(),
        entries=load_entries(),
    )


def clear_caches() -> None:
    """Drop cached tables after a write."""
    st.cache_data.clear()


def get_data_status(store=None) -> Dict[str, Any]:
    """Row counts and file presence for every table."""
    store = store if store is not None else get_store()
    status = {}
    for table in TABLE_FILES:
        try:
            exists = store.exists(table)
            rows = len(store.list(table)) if exists else 0
            status[table] = {"exists": exists, "rows": rows, "error": None}
        except StoreError as e:
            status[table] = {"exists": False, "rows": 0, "error": str(e)}
    return status

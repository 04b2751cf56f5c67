"""
Memoised report builders.

Thin st.cache_data wrappers around the metrics packs, keyed by the filter
selection and the collection snapshots. Each rerun re-derives from the
full collections; identical inputs hit the cache.
"""
from typing import List, Optional

import pandas as pd
import streamlit as st

from proanaliz.config import config
from proanaliz.data.models import parse_period
from proanaliz.metrics.dashboard import (
    Overview,
    PeriodSummary,
    compute_overview,
    compute_period_summary,
)
from proanaliz.metrics.project_allocation import (
    ProjectAllocation,
    ProjectReport,
    compute_project_report,
    compute_team_project_allocations,
)
from proanaliz.metrics.team_period import (
    TeamPeriodStats,
    compute_team_comparison,
    compute_team_period_stats,
)
from proanaliz.metrics.yearly import YearlyReport, compute_yearly_report


@st.cache_data(ttl=config.cache_ttl_seconds, show_spinner=False)
def team_period_stats(team_id: str, year: int, period_label: str,
                      entries: pd.DataFrame, budgets: pd.DataFrame,
                      teams: pd.DataFrame) -> TeamPeriodStats:
    return compute_team_period_stats(team_id, year, parse_period(period_label),
                                     entries, budgets, teams)


@st.cache_data(ttl=config.cache_ttl_seconds, show_spinner=False)
def team_comparison(year: int, period_label: str,
                    entries: pd.DataFrame, budgets: pd.DataFrame,
                    teams: pd.DataFrame) -> List[TeamPeriodStats]:
    return compute_team_comparison(year, parse_period(period_label), entries, budgets, teams)


@st.cache_data(ttl=config.cache_ttl_seconds, show_spinner=False)
def team_project_allocations(team_id: str, year: int, period_label: str,
                             entries: pd.DataFrame, budgets: pd.DataFrame,
                             teams: pd.DataFrame, projects: pd.DataFrame) -> List[ProjectAllocation]:
    return compute_team_project_allocations(team_id, year, parse_period(period_label),
                                            entries, budgets, teams, projects)


@st.cache_data(ttl=config.cache_ttl_seconds, show_spinner=False)
def project_report(project_id: Optional[str], year: int, period_label: str,
                   entries: pd.DataFrame, budgets: pd.DataFrame,
                   teams: pd.DataFrame, projects: pd.DataFrame) -> ProjectReport:
    return compute_project_report(project_id, year, parse_period(period_label),
                                  entries, budgets, teams, projects)


@st.cache_data(ttl=config.cache_ttl_seconds, show_spinner=False)
def yearly_report(year: int, entries: pd.DataFrame, budgets: pd.DataFrame,
                  teams: pd.DataFrame) -> YearlyReport:
    return compute_yearly_report(year, entries, budgets, teams)


@st.cache_data(ttl=config.cache_ttl_seconds, show_spinner=False)
def overview(entries: pd.DataFrame, budgets: pd.DataFrame,
             year: Optional[int] = None) -> Overview:
    return compute_overview(entries, budgets, year=year)


@st.cache_data(ttl=config.cache_ttl_seconds, show_spinner=False)
def period_summary(year: int, period_label: str,
                   entries: pd.DataFrame, budgets: pd.DataFrame) -> PeriodSummary:
    return compute_period_summary(year, parse_period(period_label), entries, budgets)

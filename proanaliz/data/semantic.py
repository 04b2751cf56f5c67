"""
Semantic layer: period filtering, safe ratios, and lookup helpers.

CRITICAL: All aggregations must use these helpers to ensure consistency.
"""
from typing import Dict, List, Optional

import pandas as pd

from proanaliz.config import UNKNOWN_TEAM_LABEL, UNKNOWN_PROJECT_LABEL
from proanaliz.data.models import (
    AllMonths,
    Period,
    ProductionType,
    PRODUCTION_TYPES,
    SpecificMonth,
)


# =============================================================================
# SAFE RATIOS
# =============================================================================

def safe_divide(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0 when the denominator is zero or missing."""
    if denominator is None or pd.isna(denominator) or denominator == 0:
        return 0.0
    if numerator is None or pd.isna(numerator):
        return 0.0
    return float(numerator) / float(denominator)


# =============================================================================
# PERIOD FILTERS
# =============================================================================

def period_mask(df: pd.DataFrame, year: int, period: Period) -> pd.Series:
    """
    Boolean mask for rows inside (year, period).

    AllMonths keeps the whole year.
    """
    if len(df) == 0:
        return pd.Series(False, index=df.index, dtype=bool)
    mask = df["year"] == int(year)
    if isinstance(period, SpecificMonth):
        mask &= df["month"] == period.month.value
    elif not isinstance(period, AllMonths):
        raise TypeError(f"Unsupported period: {period!r}")
    return mask


def filter_entries(entries: pd.DataFrame,
                   year: Optional[int] = None,
                   period: Optional[Period] = None,
                   team_id: Optional[str] = None,
                   project_id: Optional[str] = None) -> pd.DataFrame:
    """Filter production entries; original row order is preserved."""
    df = entries
    if year is not None:
        df = df[period_mask(df, year, period if period is not None else AllMonths())]
    if team_id is not None:
        df = df[df["team_id"] == team_id]
    if project_id is not None:
        df = df[df["project_id"] == project_id]
    return df


def filter_budgets(budgets: pd.DataFrame,
                   year: Optional[int] = None,
                   period: Optional[Period] = None,
                   team_id: Optional[str] = None) -> pd.DataFrame:
    """Filter budget rows; original row order is preserved."""
    df = budgets
    if year is not None:
        df = df[period_mask(df, year, period if period is not None else AllMonths())]
    if team_id is not None:
        df = df[df["team_id"] == team_id]
    return df


def first_budget(budgets: pd.DataFrame) -> Optional[pd.Series]:
    """
    The budget row for a single (team, year, month) slice.

    At most one is expected; if duplicates slipped in, the first stored wins.
    """
    if len(budgets) == 0:
        return None
    return budgets.iloc[0]


# =============================================================================
# PRODUCTION TYPE BREAKDOWN
# =============================================================================

def type_breakdown(entries: pd.DataFrame) -> Dict[ProductionType, float]:
    """
    Total kg per production type. Every type is present, 0 when absent.
    """
    result = {t: 0.0 for t in PRODUCTION_TYPES}
    if len(entries) == 0:
        return result
    sums = entries.groupby("type")["quantity_kg"].sum()
    for t in PRODUCTION_TYPES:
        if t.value in sums.index:
            result[t] = float(sums[t.value])
    return result


def total_kg(entries: pd.DataFrame) -> float:
    if len(entries) == 0:
        return 0.0
    return float(entries["quantity_kg"].sum())


# =============================================================================
# ORDERING & LOOKUPS
# =============================================================================

def first_appearance_order(df: pd.DataFrame, column: str) -> List[str]:
    """Distinct values of `column` in the order they first appear."""
    if len(df) == 0 or column not in df.columns:
        return []
    return list(dict.fromkeys(df[column].tolist()))


def name_lookup(df: pd.DataFrame) -> Dict[str, str]:
    """id -> name mapping for a teams or projects frame."""
    if len(df) == 0:
        return {}
    return dict(zip(df["id"], df["name"]))


def team_name(teams: pd.DataFrame, team_id: str) -> str:
    return name_lookup(teams).get(team_id, UNKNOWN_TEAM_LABEL)


def project_name(projects: pd.DataFrame, project_id: str) -> str:
    return name_lookup(projects).get(project_id, UNKNOWN_PROJECT_LABEL)

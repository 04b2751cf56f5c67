"""
Overview metrics pack.

Company-wide totals for the landing dashboard and the period summary page.
"""
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import pandas as pd

from proanaliz.data.models import AllMonths, Period, ProductionType
from proanaliz.data.semantic import (
    filter_budgets,
    filter_entries,
    safe_divide,
    total_kg,
    type_breakdown,
)
from proanaliz.metrics.man_hours import total_man_hours


@dataclass
class Overview:
    total_kg: float = 0.0
    total_cost: float = 0.0
    total_personnel: float = 0.0
    total_hours: float = 0.0
    kg_per_person: float = 0.0
    cost_per_kg: float = 0.0


def compute_overview(entries: pd.DataFrame,
                     budgets: pd.DataFrame,
                     year: Optional[int] = None) -> Overview:
    """
    Headline numbers across every team and project.

    Without a year the whole history is used.
    """
    df_entries = filter_entries(entries, year=year) if year is not None else entries
    df_budgets = filter_budgets(budgets, year=year) if year is not None else budgets

    kg = total_kg(df_entries)
    cost = float(df_budgets["amount_tl"].sum()) if len(df_budgets) else 0.0
    personnel = float(df_budgets["personnel_count"].sum()) if len(df_budgets) else 0.0

    return Overview(
        total_kg=kg,
        total_cost=cost,
        total_personnel=personnel,
        total_hours=total_man_hours(df_budgets),
        kg_per_person=safe_divide(kg, personnel),
        cost_per_kg=safe_divide(cost, kg),
    )


def compute_team_performance(entries: pd.DataFrame,
                             budgets: pd.DataFrame,
                             teams: pd.DataFrame,
                             year: Optional[int] = None) -> pd.DataFrame:
    """
    kg per person for every team.

    Returns DataFrame with:
    - team_id, team_name
    - kg: Σ quantity_kg
    - personnel: Σ personnel_count
    - perf: kg / personnel, one decimal (0 without personnel)
    """
    columns = ["team_id", "team_name", "kg", "personnel", "perf"]
    if len(teams) == 0:
        return pd.DataFrame(columns=columns)

    df_entries = filter_entries(entries, year=year) if year is not None else entries
    df_budgets = filter_budgets(budgets, year=year) if year is not None else budgets

    kg = df_entries.groupby("team_id")["quantity_kg"].sum() if len(df_entries) else pd.Series(dtype=float)
    personnel = df_budgets.groupby("team_id")["personnel_count"].sum() if len(df_budgets) else pd.Series(dtype=float)

    result = teams[["id", "name"]].rename(columns={"id": "team_id", "name": "team_name"}).copy()
    result["kg"] = result["team_id"].map(kg).fillna(0.0).astype(float)
    result["personnel"] = result["team_id"].map(personnel).fillna(0.0).astype(float)
    result["perf"] = np.where(
        result["personnel"] > 0,
        (result["kg"] / result["personnel"].where(result["personnel"] > 0, 1)).round(1),
        0.0,
    )
    return result[columns].reset_index(drop=True)


def compute_type_totals(entries: pd.DataFrame,
                        year: Optional[int] = None) -> pd.DataFrame:
    """
    Total kg per production type; every type is listed.
    """
    df_entries = filter_entries(entries, year=year) if year is not None else entries
    breakdown = type_breakdown(df_entries)
    return pd.DataFrame({
        "type": [t.value for t in breakdown],
        "kg": [kg for kg in breakdown.values()],
    })


@dataclass
class PeriodSummary:
    year: int
    period_label: str
    kg: float = 0.0
    budget: float = 0.0
    personnel: float = 0.0
    hours: float = 0.0
    cost_per_kg: float = 0.0
    kg_per_hour: float = 0.0


def compute_period_summary(year: int,
                           period: Period,
                           entries: pd.DataFrame,
                           budgets: pd.DataFrame) -> PeriodSummary:
    """
    All teams and projects together for one month or the whole year.

    Personnel is summed for a single month and averaged per month for the
    whole year, matching the team-period aggregator.
    """
    df_entries = filter_entries(entries, year=year, period=period)
    df_budgets = filter_budgets(budgets, year=year, period=period)

    kg = total_kg(df_entries)
    budget = float(df_budgets["amount_tl"].sum()) if len(df_budgets) else 0.0
    hours = total_man_hours(df_budgets)

    if len(df_budgets) == 0:
        personnel = 0.0
    elif isinstance(period, AllMonths):
        per_month = df_budgets.groupby("month")["personnel_count"].sum()
        personnel = round(float(per_month.mean()), 1)
    else:
        personnel = float(df_budgets["personnel_count"].sum())

    return PeriodSummary(
        year=int(year),
        period_label=period.label,
        kg=kg,
        budget=budget,
        personnel=personnel,
        hours=hours,
        cost_per_kg=safe_divide(budget, kg),
        kg_per_hour=safe_divide(kg, hours),
    )


def type_share(breakdown: Dict[ProductionType, float]) -> Dict[ProductionType, float]:
    """Percentage of total kg per type (0 when nothing was produced)."""
    total = sum(breakdown.values())
    return {t: safe_divide(kg, total) * 100 for t, kg in breakdown.items()}

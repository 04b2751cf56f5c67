"""
Yearly rollup metrics pack.

Single source of truth for: annual kg, hours, cost, efficiency (kg/hour)
and unit cost per team, with the fixed twelve-month breakdown behind them.
"""
from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from proanaliz.config import MONTHS
from proanaliz.data.models import Month
from proanaliz.data.semantic import filter_budgets, filter_entries, safe_divide, team_name, total_kg
from proanaliz.metrics.man_hours import total_man_hours
from proanaliz.metrics.project_allocation import compute_team_month


@dataclass
class MonthlyFigures:
    month: str
    kg: float = 0.0
    cost: float = 0.0
    personnel: float = 0.0
    hours: float = 0.0
    unit_cost: float = 0.0
    has_data: bool = False


@dataclass
class YearlyTeamRollup:
    team_id: str
    team_name: str
    year: int
    annual_kg: float = 0.0
    annual_hours: float = 0.0
    annual_cost: float = 0.0
    efficiency: float = 0.0
    unit_cost: float = 0.0
    monthly_data: List[MonthlyFigures] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.annual_kg > 0 or self.annual_hours > 0

    def monthly_frame(self) -> pd.DataFrame:
        return pd.DataFrame([vars(m) for m in self.monthly_data])


@dataclass
class YearlySummary:
    year: int
    total_kg: float = 0.0
    total_cost: float = 0.0
    total_hours: float = 0.0
    avg_efficiency: float = 0.0


@dataclass
class YearlyReport:
    summary: YearlySummary
    teams: List[YearlyTeamRollup] = field(default_factory=list)


def compute_yearly_rollup(team_id: str,
                          year: int,
                          entries: pd.DataFrame,
                          budgets: pd.DataFrame,
                          teams: pd.DataFrame) -> YearlyTeamRollup:
    """
    Roll a team's year up from its twelve months.

    Each month uses that month's own budget; months without a budget count
    zero personnel, hours and cost. The annual totals are the sums of the
    monthly figures, so annual_kg always equals Σ monthly kg.

    - efficiency: annual_kg / annual_hours
    - unit_cost: annual_cost / annual_kg
    """
    monthly_data = []
    for name in MONTHS:
        tm = compute_team_month(team_id, year, Month(name), entries, budgets)
        monthly_data.append(MonthlyFigures(
            month=name,
            kg=tm.total_kg,
            cost=tm.cost,
            personnel=tm.personnel,
            hours=tm.man_hours,
            unit_cost=safe_divide(tm.cost, tm.total_kg),
            has_data=tm.total_kg > 0 or tm.cost > 0 or tm.personnel > 0,
        ))

    annual_kg = sum(m.kg for m in monthly_data)
    annual_hours = sum(m.hours for m in monthly_data)
    annual_cost = sum(m.cost for m in monthly_data)

    return YearlyTeamRollup(
        team_id=team_id,
        team_name=team_name(teams, team_id),
        year=int(year),
        annual_kg=annual_kg,
        annual_hours=annual_hours,
        annual_cost=annual_cost,
        efficiency=safe_divide(annual_kg, annual_hours),
        unit_cost=safe_divide(annual_cost, annual_kg),
        monthly_data=monthly_data,
    )


def compute_yearly_summary(year: int,
                           entries: pd.DataFrame,
                           budgets: pd.DataFrame) -> YearlySummary:
    """Company-wide totals for a year."""
    year_entries = filter_entries(entries, year=year)
    year_budgets = filter_budgets(budgets, year=year)
    kg = total_kg(year_entries)
    hours = total_man_hours(year_budgets)
    cost = float(year_budgets["amount_tl"].sum()) if len(year_budgets) else 0.0
    return YearlySummary(
        year=int(year),
        total_kg=kg,
        total_cost=cost,
        total_hours=hours,
        avg_efficiency=safe_divide(kg, hours),
    )


def compute_yearly_report(year: int,
                          entries: pd.DataFrame,
                          budgets: pd.DataFrame,
                          teams: pd.DataFrame) -> YearlyReport:
    """
    Yearly rollups for every team that produced or had hours that year.
    """
    rollups = []
    if len(teams) > 0:
        for team_id in teams["id"].tolist():
            rollup = compute_yearly_rollup(team_id, year, entries, budgets, teams)
            if rollup.is_active:
                rollups.append(rollup)
    return YearlyReport(
        summary=compute_yearly_summary(year, entries, budgets),
        teams=rollups,
    )


def yearly_matrix(report: YearlyReport, metric: str = "kg") -> pd.DataFrame:
    """
    Team × month grid of one monthly metric, for the printable matrix.
    """
    rows: List[Dict[str, object]] = []
    for rollup in report.teams:
        row: Dict[str, object] = {"team_name": rollup.team_name}
        for m in rollup.monthly_data:
            row[m.month] = getattr(m, metric)
        rows.append(row)
    return pd.DataFrame(rows, columns=["team_name"] + MONTHS)

"""
Project allocation metrics pack.

Budgets are recorded per team per month, never per project. Project-level
hours and cost are therefore apportioned from the team's month by the
project's share of the team's production:

    ratio           = project_kg / team_total_kg
    allocated_hours = team_total_hours × ratio
    allocated_cost  = team_total_cost × ratio
    unit_cost       = allocated_cost / project_kg

This is an approximation, not a measurement: a team month with cost but no
production allocates nothing to any project. Every report that shows
project-level hours or cost goes through this module.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from proanaliz.config import MONTHS
from proanaliz.data.models import (
    AllMonths,
    Month,
    Period,
    ProductionType,
    PRODUCTION_TYPES,
    SpecificMonth,
)
from proanaliz.data.semantic import (
    filter_budgets,
    filter_entries,
    first_appearance_order,
    first_budget,
    project_name,
    safe_divide,
    team_name,
    total_kg,
    type_breakdown,
)
from proanaliz.metrics.man_hours import budget_man_hours


@dataclass
class AllocationShare:
    """Proportional share of a team month assigned to one project."""
    ratio: float = 0.0
    allocated_hours: float = 0.0
    allocated_cost: float = 0.0
    unit_cost: float = 0.0


def allocate_project_share(team_total_kg: float,
                           team_total_hours: float,
                           team_total_cost: float,
                           project_kg: float) -> AllocationShare:
    """Apply the production-share allocation rule to one project."""
    ratio = safe_divide(project_kg, team_total_kg)
    allocated_hours = team_total_hours * ratio
    allocated_cost = team_total_cost * ratio
    return AllocationShare(
        ratio=ratio,
        allocated_hours=allocated_hours,
        allocated_cost=allocated_cost,
        unit_cost=safe_divide(allocated_cost, project_kg),
    )


@dataclass
class TeamMonth:
    """A team's production and budget figures for one month."""
    team_id: str
    year: int
    month: str
    total_kg: float = 0.0
    man_hours: float = 0.0
    cost: float = 0.0
    personnel: float = 0.0


def compute_team_month(team_id: str, year: int, month: Month,
                       entries: pd.DataFrame, budgets: pd.DataFrame) -> TeamMonth:
    """Team totals for one month; zeros when there is no budget."""
    period = SpecificMonth(month)
    kg = total_kg(filter_entries(entries, year=year, period=period, team_id=team_id))
    budget = first_budget(filter_budgets(budgets, year=year, period=period, team_id=team_id))
    if budget is None:
        return TeamMonth(team_id, int(year), month.value, total_kg=kg)
    return TeamMonth(
        team_id=team_id,
        year=int(year),
        month=month.value,
        total_kg=kg,
        man_hours=budget_man_hours(budget),
        cost=float(budget["amount_tl"]),
        personnel=float(budget["personnel_count"]),
    )


def _period_months(period: Period) -> List[Month]:
    if isinstance(period, SpecificMonth):
        return [period.month]
    if isinstance(period, AllMonths):
        return [Month(m) for m in MONTHS]
    raise TypeError(f"Unsupported period: {period!r}")


@dataclass
class ProjectAllocation:
    """One (team, project) row with its allocated hours and cost."""
    team_id: str
    team_name: str
    project_id: str
    project_name: str
    year: int
    period_label: str
    project_kg: float = 0.0
    team_total_kg: float = 0.0
    ratio: float = 0.0
    allocated_hours: float = 0.0
    allocated_cost: float = 0.0
    unit_cost: float = 0.0
    personnel: float = 0.0
    type_breakdown: Dict[ProductionType, float] = field(
        default_factory=lambda: {t: 0.0 for t in PRODUCTION_TYPES}
    )

    def as_row(self) -> Dict[str, object]:
        row = {
            "team_id": self.team_id,
            "team_name": self.team_name,
            "project_id": self.project_id,
            "project_name": self.project_name,
            "project_kg": self.project_kg,
            "team_total_kg": self.team_total_kg,
            "ratio": self.ratio,
            "allocated_hours": self.allocated_hours,
            "allocated_cost": self.allocated_cost,
            "unit_cost": self.unit_cost,
            "personnel": self.personnel,
        }
        for t, kg in self.type_breakdown.items():
            row[t.value] = kg
        return row


def _allocate(team_id: str, project_id: str, year: int, period: Period,
              entries: pd.DataFrame, budgets: pd.DataFrame,
              teams: pd.DataFrame, projects: pd.DataFrame) -> ProjectAllocation:
    """
    Allocate month by month, then sum.

    For AllMonths each month is apportioned by its own production share;
    the effective ratio is project kg over team kg for the whole period.
    """
    allocated_hours = 0.0
    allocated_cost = 0.0
    team_kg = 0.0
    personnel = []

    for month in _period_months(period):
        team_month = compute_team_month(team_id, year, month, entries, budgets)
        month_project_kg = total_kg(filter_entries(
            entries, year=year, period=SpecificMonth(month),
            team_id=team_id, project_id=project_id,
        ))
        share = allocate_project_share(
            team_month.total_kg, team_month.man_hours, team_month.cost, month_project_kg
        )
        allocated_hours += share.allocated_hours
        allocated_cost += share.allocated_cost
        team_kg += team_month.total_kg
        if month_project_kg > 0 and team_month.personnel > 0:
            personnel.append(team_month.personnel)

    project_entries = filter_entries(entries, year=year, period=period,
                                     team_id=team_id, project_id=project_id)
    project_kg = total_kg(project_entries)

    if isinstance(period, AllMonths):
        shown_personnel = round(safe_divide(sum(personnel), len(personnel)), 1)
    else:
        shown_personnel = personnel[0] if personnel else 0.0

    return ProjectAllocation(
        team_id=team_id,
        team_name=team_name(teams, team_id),
        project_id=project_id,
        project_name=project_name(projects, project_id),
        year=int(year),
        period_label=period.label,
        project_kg=project_kg,
        team_total_kg=team_kg,
        ratio=safe_divide(project_kg, team_kg),
        allocated_hours=allocated_hours,
        allocated_cost=allocated_cost,
        unit_cost=safe_divide(allocated_cost, project_kg),
        personnel=shown_personnel,
        type_breakdown=type_breakdown(project_entries),
    )


def compute_team_project_allocations(team_id: str,
                                     year: int,
                                     period: Period,
                                     entries: pd.DataFrame,
                                     budgets: pd.DataFrame,
                                     teams: pd.DataFrame,
                                     projects: pd.DataFrame) -> List[ProjectAllocation]:
    """
    Allocate a team's hours and cost across the projects it produced for.

    Projects are listed in the order their first entry appears.
    """
    team_entries = filter_entries(entries, year=year, period=period, team_id=team_id)
    return [
        _allocate(team_id, project_id, year, period, entries, budgets, teams, projects)
        for project_id in first_appearance_order(team_entries, "project_id")
    ]


@dataclass
class ProjectReportSummary:
    project_id: str
    project_name: str
    project_total_kg: float = 0.0
    team_count: int = 0
    avg_per_team: float = 0.0
    total_allocated_hours: float = 0.0
    total_allocated_cost: float = 0.0
    unit_cost: float = 0.0


@dataclass
class ProjectReport:
    summary: ProjectReportSummary
    rows: List[ProjectAllocation] = field(default_factory=list)


def compute_project_report(project_id: Optional[str],
                           year: int,
                           period: Period,
                           entries: pd.DataFrame,
                           budgets: pd.DataFrame,
                           teams: pd.DataFrame,
                           projects: pd.DataFrame) -> ProjectReport:
    """
    Teams that worked on a project, each with its allocated share.

    Teams are listed in the order their first entry for the project appears.
    An empty report is returned when no project is selected.
    """
    if not project_id:
        return ProjectReport(summary=ProjectReportSummary(project_id="", project_name=project_name(projects, "")))

    project_entries = filter_entries(entries, year=year, period=period, project_id=project_id)
    rows = [
        _allocate(team_id, project_id, year, period, entries, budgets, teams, projects)
        for team_id in first_appearance_order(project_entries, "team_id")
    ]

    project_total = sum(r.project_kg for r in rows)
    total_hours = sum(r.allocated_hours for r in rows)
    total_cost = sum(r.allocated_cost for r in rows)
    summary = ProjectReportSummary(
        project_id=project_id,
        project_name=project_name(projects, project_id),
        project_total_kg=project_total,
        team_count=len(rows),
        avg_per_team=safe_divide(project_total, len(rows)),
        total_allocated_hours=total_hours,
        total_allocated_cost=total_cost,
        unit_cost=safe_divide(total_cost, project_total),
    )
    return ProjectReport(summary=summary, rows=rows)


def allocation_frame(rows: List[ProjectAllocation]) -> pd.DataFrame:
    """Flatten allocation records into a display frame."""
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame([r.as_row() for r in rows])

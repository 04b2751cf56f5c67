"""
Team-period metrics pack.

Single source of truth for: a team's kg, personnel, budget, man-hours,
kg/person and cost/kg over one month or a whole year.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from proanaliz.data.models import AllMonths, Period, ProductionType, PRODUCTION_TYPES
from proanaliz.data.semantic import (
    filter_budgets,
    filter_entries,
    safe_divide,
    team_name,
    total_kg,
    type_breakdown,
)
from proanaliz.metrics.man_hours import total_man_hours


@dataclass
class TeamPeriodStats:
    """Derived statistics for one team over one period."""
    team_id: str
    team_name: str
    year: int
    period_label: str
    total_kg: float = 0.0
    personnel: float = 0.0
    total_personnel: float = 0.0
    budget_amount: float = 0.0
    man_hours: float = 0.0
    kg_per_person: float = 0.0
    cost_per_kg: float = 0.0
    budget_count: int = 0
    type_breakdown: Dict[ProductionType, float] = field(
        default_factory=lambda: {t: 0.0 for t in PRODUCTION_TYPES}
    )

    @property
    def has_data(self) -> bool:
        return self.total_kg > 0 or self.budget_amount > 0 or self.total_personnel > 0

    def as_row(self) -> Dict[str, object]:
        row = {
            "team_id": self.team_id,
            "team_name": self.team_name,
            "total_kg": self.total_kg,
            "personnel": self.personnel,
            "budget_amount": self.budget_amount,
            "man_hours": self.man_hours,
            "kg_per_person": self.kg_per_person,
            "cost_per_kg": self.cost_per_kg,
        }
        for t, kg in self.type_breakdown.items():
            row[t.value] = kg
        return row


def compute_team_period_stats(team_id: str,
                              year: int,
                              period: Period,
                              entries: pd.DataFrame,
                              budgets: pd.DataFrame,
                              teams: pd.DataFrame,
                              project_id: Optional[str] = None) -> TeamPeriodStats:
    """
    Aggregate a team's production and budget over a period.

    Returns a zero-filled record when nothing matches.

    - total_kg: Σ quantity_kg (optionally limited to one project)
    - budget_amount: Σ amount_tl
    - man_hours: Σ man-hours per budget
    - personnel: Σ personnel_count for a single month; for AllMonths the
      average over the budgets found, rounded to one decimal (personnel is
      a monthly snapshot, not a cumulative quantity)
    - kg_per_person: total_kg / Σ personnel_count
    - cost_per_kg: budget_amount / total_kg
    """
    team_entries = filter_entries(entries, year=year, period=period,
                                  team_id=team_id, project_id=project_id)
    team_budgets = filter_budgets(budgets, year=year, period=period, team_id=team_id)

    kg = total_kg(team_entries)
    budget_count = len(team_budgets)
    summed_personnel = float(team_budgets["personnel_count"].sum()) if budget_count else 0.0
    budget_amount = float(team_budgets["amount_tl"].sum()) if budget_count else 0.0

    if isinstance(period, AllMonths):
        personnel = round(safe_divide(summed_personnel, budget_count), 1)
    else:
        personnel = summed_personnel

    return TeamPeriodStats(
        team_id=team_id,
        team_name=team_name(teams, team_id),
        year=int(year),
        period_label=period.label,
        total_kg=kg,
        personnel=personnel,
        total_personnel=summed_personnel,
        budget_amount=budget_amount,
        man_hours=total_man_hours(team_budgets),
        kg_per_person=safe_divide(kg, summed_personnel),
        cost_per_kg=safe_divide(budget_amount, kg),
        budget_count=budget_count,
        type_breakdown=type_breakdown(team_entries),
    )


def compute_team_comparison(year: int,
                            period: Period,
                            entries: pd.DataFrame,
                            budgets: pd.DataFrame,
                            teams: pd.DataFrame) -> List[TeamPeriodStats]:
    """
    One stats record per team, in team-list order.
    """
    if len(teams) == 0:
        return []
    return [
        compute_team_period_stats(team_id, year, period, entries, budgets, teams)
        for team_id in teams["id"].tolist()
    ]


def stats_frame(stats: List[TeamPeriodStats]) -> pd.DataFrame:
    """Flatten stats records into a display frame."""
    if not stats:
        return pd.DataFrame()
    return pd.DataFrame([s.as_row() for s in stats])

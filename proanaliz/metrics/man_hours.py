"""
Man-hours metrics pack.

Single source of truth for: man-hours = personnel × working days × daily hours.
Every report derives hours through these helpers.
"""
from typing import Any, Mapping, Optional

import pandas as pd

from proanaliz.config import config
from proanaliz.data.calendar_days import parse_working_days
from proanaliz.data.models import Budget, WorkingDays


def man_hours(personnel_count: float, working_days: WorkingDays,
              daily_hours: Optional[float] = None) -> float:
    """
    Total man-hours for one budget month.

    LegacyDefault calendars count as config.default_working_days.
    """
    if daily_hours is None:
        daily_hours = config.daily_working_hours
    return float(personnel_count or 0) * working_days.count * daily_hours


def budget_man_hours(budget: Any) -> float:
    """
    Man-hours for a Budget record or a budgets-frame row.
    """
    if isinstance(budget, Budget):
        return man_hours(budget.personnel_count, budget.working_days)
    if isinstance(budget, (pd.Series, Mapping)):
        return man_hours(
            budget.get("personnel_count", 0),
            parse_working_days(budget.get("working_days")),
        )
    raise TypeError(f"Unsupported budget type: {type(budget).__name__}")


def add_man_hours_column(budgets: pd.DataFrame) -> pd.DataFrame:
    """
    Return a copy of the budgets frame with a `man_hours` column.
    """
    df = budgets.copy()
    if len(df) == 0:
        df["man_hours"] = pd.Series(dtype=float)
        return df
    df["man_hours"] = df.apply(budget_man_hours, axis=1).astype(float)
    return df


def total_man_hours(budgets: pd.DataFrame) -> float:
    """Sum of man-hours over a budgets frame."""
    if len(budgets) == 0:
        return 0.0
    return float(add_man_hours_column(budgets)["man_hours"].sum())

"""
Working-day calendar resolution for budget records.

A budget stores the literal list of worked day numbers. The budget form can
build that list from either direction (mark the off days, or mark the
worked days); only the resulting day count feeds the man-hours model.
"""
import calendar
import json
import logging
from typing import Any, Iterable, List, Union

import pandas as pd

from proanaliz.data.models import (
    Month,
    ExplicitDays,
    LegacyDefault,
    WorkingDays,
    LEGACY_DEFAULT,
)

logger = logging.getLogger(__name__)


def days_in_month(year: int, month: Union[Month, str, int]) -> int:
    """Number of days in a month (proleptic Gregorian)."""
    return calendar.monthrange(int(year), Month.parse(month).number)[1]


def month_day_numbers(year: int, month: Union[Month, str, int]) -> List[int]:
    """All day numbers 1..daysInMonth."""
    return list(range(1, days_in_month(year, month) + 1))


def _clip_days(year: int, month: Union[Month, str, int], days: Iterable[int]) -> List[int]:
    last = days_in_month(year, month)
    return sorted({int(d) for d in days if 1 <= int(d) <= last})


def working_days_from_off_days(year: int,
                               month: Union[Month, str, int],
                               off_days: Iterable[int]) -> ExplicitDays:
    """
    Working days = every day of the month minus the marked off days.
    """
    off = set(_clip_days(year, month, off_days))
    return ExplicitDays(tuple(d for d in month_day_numbers(year, month) if d not in off))


def working_days_from_on_days(year: int,
                              month: Union[Month, str, int],
                              on_days: Iterable[int]) -> ExplicitDays:
    """
    Working days = exactly the marked on days (clipped to the month).
    """
    return ExplicitDays(tuple(_clip_days(year, month, on_days)))


def weekday_off_days(year: int, month: Union[Month, str, int],
                     weekdays: Iterable[int] = (5, 6)) -> List[int]:
    """Day numbers falling on the given weekdays (Mon=0); default weekends."""
    m = Month.parse(month).number
    wanted = set(weekdays)
    return [d for d in month_day_numbers(year, m) if calendar.weekday(int(year), m, d) in wanted]


# =============================================================================
# SERIALISATION
# =============================================================================

def parse_working_days(raw: Any) -> WorkingDays:
    """
    Read a stored working-day value.

    Missing, empty-string, NaN or unreadable values are legacy rows and map
    to LegacyDefault. An explicit empty list stays an explicit zero-day
    calendar.
    """
    if isinstance(raw, (ExplicitDays, LegacyDefault)):
        return raw
    if raw is None:
        return LEGACY_DEFAULT
    if isinstance(raw, float) and pd.isna(raw):
        return LEGACY_DEFAULT
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return LEGACY_DEFAULT
        try:
            raw = json.loads(text)
        except ValueError:
            logger.warning("Unreadable working_days value %r; using legacy default", text)
            return LEGACY_DEFAULT
        if raw is None:
            return LEGACY_DEFAULT
    if isinstance(raw, (list, tuple)):
        try:
            return ExplicitDays(tuple(sorted({int(d) for d in raw})))
        except (TypeError, ValueError):
            logger.warning("Non-numeric working_days list %r; using legacy default", raw)
            return LEGACY_DEFAULT
    logger.warning("Unexpected working_days type %s; using legacy default", type(raw).__name__)
    return LEGACY_DEFAULT


def dump_working_days(working_days: WorkingDays) -> str:
    """Encode for a CSV cell; legacy rows stay blank."""
    days = working_days.to_list()
    if days is None:
        return ""
    return json.dumps(days)

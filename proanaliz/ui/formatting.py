"""
Consistent number and display formatting.
"""
from typing import Union

import pandas as pd

from proanaliz.config import (
    FORMAT_CURRENCY,
    FORMAT_CURRENCY_DECIMAL,
    FORMAT_HOURS,
    FORMAT_KG,
    FORMAT_PERCENT,
    FORMAT_RATIO,
)


# =============================================================================
# NUMBER FORMATTERS
# =============================================================================

def _missing(value) -> bool:
    return value is None or pd.isna(value)


def fmt_currency(value: Union[float, int, None], decimals: int = 0) -> str:
    """Format as Turkish lira: ₺1,234 or ₺1,234.56"""
    if _missing(value):
        return "—"
    if decimals == 0:
        return FORMAT_CURRENCY.format(value)
    return FORMAT_CURRENCY_DECIMAL.format(value)


def fmt_kg(value: Union[float, int, None]) -> str:
    """Format weight: 1,234 kg"""
    if _missing(value):
        return "—"
    return FORMAT_KG.format(value)


def fmt_hours(value: Union[float, int, None]) -> str:
    """Format man-hours, rounded: 1,650"""
    if _missing(value):
        return "—"
    return FORMAT_HOURS.format(value)


def fmt_ratio(value: Union[float, int, None]) -> str:
    """Format a derived ratio (kg/person, TL/kg): 12.34"""
    if _missing(value):
        return "—"
    return FORMAT_RATIO.format(value)


def fmt_percent(value: Union[float, int, None]) -> str:
    if _missing(value):
        return "—"
    return FORMAT_PERCENT.format(value)


def fmt_count(value: Union[float, int, None]) -> str:
    """Format count; fractional averages keep one decimal."""
    if _missing(value):
        return "—"
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.1f}"


# =============================================================================
# DATAFRAME FORMATTERS
# =============================================================================

KG_COLS = [
    "total_kg", "kg", "project_kg", "team_total_kg", "annual_kg",
    "İmalat", "Kaynak", "Temizlik",
]
CURRENCY_COLS = ["budget_amount", "cost", "allocated_cost", "annual_cost", "amount_tl"]
HOURS_COLS = ["man_hours", "hours", "allocated_hours", "annual_hours"]
RATIO_COLS = ["kg_per_person", "cost_per_kg", "unit_cost", "efficiency", "perf"]
COUNT_COLS = ["personnel", "personnel_count", "working_day_count"]


def format_metric_df(df: pd.DataFrame) -> pd.DataFrame:
    """
    Format a metrics dataframe for display.

    Applies appropriate formatting to known column types.
    """
    df = df.copy()
    for col in df.columns:
        if col in KG_COLS:
            df[col] = df[col].apply(fmt_kg)
        elif col in CURRENCY_COLS:
            df[col] = df[col].apply(fmt_currency)
        elif col in HOURS_COLS:
            df[col] = df[col].apply(fmt_hours)
        elif col in RATIO_COLS:
            df[col] = df[col].apply(fmt_ratio)
        elif col == "ratio":
            df[col] = (df[col] * 100).apply(fmt_percent)
        elif col in COUNT_COLS:
            df[col] = df[col].apply(fmt_count)
    return df


COLUMN_LABELS = {
    "team_name": "Ekip",
    "project_name": "Proje",
    "total_kg": "Toplam (kg)",
    "kg": "Üretim (kg)",
    "project_kg": "Proje Üretimi (kg)",
    "team_total_kg": "Ekip Üretimi (kg)",
    "personnel": "Personel",
    "budget_amount": "Hakediş",
    "cost": "Maliyet",
    "man_hours": "Adam-Saat",
    "hours": "Saat",
    "kg_per_person": "kg/Kişi",
    "cost_per_kg": "TL/kg",
    "ratio": "Pay",
    "allocated_hours": "Dağıtılan Saat",
    "allocated_cost": "Dağıtılan Maliyet",
    "unit_cost": "Birim Maliyet",
    "month": "Ay",
    "perf": "Verim (kg/kişi)",
}


def label_columns(df: pd.DataFrame) -> pd.DataFrame:
    return df.rename(columns={k: v for k, v in COLUMN_LABELS.items() if k in df.columns})

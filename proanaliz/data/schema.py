"""
Schema validation and read-time sanitisation of stored tables.
"""
import logging
from typing import Dict, List, Tuple

import pandas as pd

from proanaliz.config import REQUIRED_COLUMNS, OPTIONAL_COLUMNS, TABLE_COLUMNS, MONTHS
from proanaliz.data.calendar_days import parse_working_days
from proanaliz.data.models import PRODUCTION_TYPES

logger = logging.getLogger(__name__)


class SchemaValidationError(Exception):
    """Raised when required columns are missing."""
    pass


def validate_required_columns(df: pd.DataFrame, table_name: str) -> Tuple[bool, List[str]]:
    """
    Validate that required columns exist in dataframe.
    Returns (is_valid, missing_columns).
    """
    if table_name not in REQUIRED_COLUMNS:
        return True, []

    required = REQUIRED_COLUMNS[table_name]
    missing = [col for col in required if col not in df.columns]

    return len(missing) == 0, missing


def check_optional_columns(df: pd.DataFrame, table_name: str) -> List[str]:
    """
    Check which optional columns are missing.
    Returns list of missing optional columns.
    """
    if table_name not in OPTIONAL_COLUMNS:
        return []

    optional = OPTIONAL_COLUMNS[table_name]
    return [col for col in optional if col not in df.columns]


def validate_schema(df: pd.DataFrame, table_name: str, strict: bool = True) -> Dict:
    """
    Full schema validation.

    Args:
        df: DataFrame to validate
        table_name: Name of table for column requirements lookup
        strict: If True, raise error on missing required columns

    Returns:
        Dict with validation results
    """
    is_valid, missing_required = validate_required_columns(df, table_name)
    missing_optional = check_optional_columns(df, table_name)

    result = {
        "is_valid": is_valid,
        "missing_required": missing_required,
        "missing_optional": missing_optional,
        "total_columns": len(df.columns),
        "total_rows": len(df),
    }

    if strict and not is_valid:
        raise SchemaValidationError(
            f"Missing required columns in {table_name}: {missing_required}"
        )

    return result


# =============================================================================
# SANITISATION
# =============================================================================

def empty_table(table_name: str) -> pd.DataFrame:
    """Zero-row frame with the canonical columns of a table."""
    return pd.DataFrame(columns=TABLE_COLUMNS[table_name])


def _ensure_columns(df: pd.DataFrame, table_name: str) -> pd.DataFrame:
    df = df.copy()
    for col in TABLE_COLUMNS[table_name]:
        if col not in df.columns:
            df[col] = None
    return df[TABLE_COLUMNS[table_name]]


def _to_str(series: pd.Series) -> pd.Series:
    return series.fillna("").astype(str).str.strip()


def _to_number(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series, errors="coerce").fillna(0).astype(float)


def _to_year(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series, errors="coerce").fillna(0).astype(int)


def sanitize_named(df: pd.DataFrame, table_name: str) -> pd.DataFrame:
    """Teams and projects: string ids and names."""
    df = _ensure_columns(df, table_name)
    df["id"] = _to_str(df["id"])
    df["name"] = _to_str(df["name"])
    return df.reset_index(drop=True)


def sanitize_entries(df: pd.DataFrame) -> pd.DataFrame:
    """
    Production entries: numeric year and quantity, trimmed labels.

    Non-positive quantities are kept; the positive-quantity rule applies
    when an entry is created, not retroactively.
    """
    df = _ensure_columns(df, "entries")
    for col in ("id", "month", "project_id", "team_id", "type"):
        df[col] = _to_str(df[col])
    df["year"] = _to_year(df["year"])
    df["quantity_kg"] = _to_number(df["quantity_kg"])

    unknown_types = sorted(set(df["type"]) - {t.value for t in PRODUCTION_TYPES})
    if unknown_types:
        logger.warning("Entries with unknown production types: %s", unknown_types)
    unknown_months = sorted(set(df["month"]) - set(MONTHS))
    if unknown_months:
        logger.warning("Entries with unknown months: %s", unknown_months)

    return df.reset_index(drop=True)


def sanitize_budgets(df: pd.DataFrame) -> pd.DataFrame:
    """
    Budgets: numeric amounts and the working-day calendar as a WorkingDays
    value (legacy rows without a calendar become LegacyDefault).
    """
    df = _ensure_columns(df, "budgets")
    for col in ("id", "team_id", "month"):
        df[col] = _to_str(df[col])
    df["year"] = _to_year(df["year"])
    df["personnel_count"] = _to_number(df["personnel_count"])
    df["amount_tl"] = _to_number(df["amount_tl"])
    df["working_days"] = pd.Series(
        [parse_working_days(v) for v in df["working_days"].tolist()],
        index=df.index,
        dtype=object,
    )

    duplicated = df.duplicated(subset=["team_id", "year", "month"], keep="first")
    if duplicated.any():
        logger.warning(
            "Found %d duplicate budget rows for the same team-month; the first stored row is used",
            int(duplicated.sum()),
        )
        df = df[~duplicated]

    return df.reset_index(drop=True)


def sanitize_settings(df: pd.DataFrame) -> pd.DataFrame:
    df = _ensure_columns(df, "settings")
    df["key"] = _to_str(df["key"])
    df["value"] = df["value"].where(df["value"].notna(), "").astype(str)
    return df.reset_index(drop=True)


def sanitize_table(df: pd.DataFrame, table_name: str) -> pd.DataFrame:
    """Dispatch to the table's sanitiser."""
    if table_name in ("teams", "projects"):
        return sanitize_named(df, table_name)
    if table_name == "entries":
        return sanitize_entries(df)
    if table_name == "budgets":
        return sanitize_budgets(df)
    if table_name == "settings":
        return sanitize_settings(df)
    raise KeyError(f"Unknown table: {table_name}")


def find_orphans(entries: pd.DataFrame, budgets: pd.DataFrame,
                 teams: pd.DataFrame, projects: pd.DataFrame) -> Dict[str, int]:
    """
    Count rows pointing at deleted teams or projects.

    Team and project deletion does not cascade, so these are expected and
    render with placeholder labels.
    """
    team_ids = set(teams["id"]) if len(teams) else set()
    project_ids = set(projects["id"]) if len(projects) else set()
    return {
        "entries_missing_team": int((~entries["team_id"].isin(team_ids)).sum()) if len(entries) else 0,
        "entries_missing_project": int((~entries["project_id"].isin(project_ids)).sum()) if len(entries) else 0,
        "budgets_missing_team": int((~budgets["team_id"].isin(team_ids)).sum()) if len(budgets) else 0,
    }

"""
Shared frame builders for the metrics tests.
"""
import pandas as pd
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data.schema import sanitize_table
from proanaliz.data.store import RecordStore


def make_teams(*rows):
    """rows: (id, name) tuples."""
    return sanitize_table(pd.DataFrame(list(rows), columns=["id", "name"]), "teams")


def make_projects(*rows):
    return sanitize_table(pd.DataFrame(list(rows), columns=["id", "name"]), "projects")


def make_entries(*rows):
    """rows: (year, month, project_id, team_id, type, quantity_kg) tuples."""
    df = pd.DataFrame(
        list(rows),
        columns=["year", "month", "project_id", "team_id", "type", "quantity_kg"],
    )
    df.insert(0, "id", [f"e{i}" for i in range(len(df))])
    return sanitize_table(df, "entries")


def make_budgets(*rows):
    """rows: (team_id, year, month, personnel_count, amount_tl, working_days) tuples."""
    df = pd.DataFrame(
        list(rows),
        columns=["team_id", "year", "month", "personnel_count", "amount_tl", "working_days"],
    )
    df.insert(0, "id", [f"b{i}" for i in range(len(df))])
    return sanitize_table(df, "budgets")


@pytest.fixture
def store(tmp_path):
    return RecordStore(tmp_path / "store")

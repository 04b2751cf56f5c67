"""
Tests for schema validation and table sanitisation.
"""
import pytest
import pandas as pd
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data.schema import (
    validate_required_columns,
    check_optional_columns,
    validate_schema,
    sanitize_table,
    find_orphans,
    SchemaValidationError
)
from proanaliz.data.models import ExplicitDays, LegacyDefault

from conftest import make_budgets, make_entries, make_projects, make_teams


class TestValidateRequiredColumns:
    """Tests for required column validation."""

    def test_all_columns_present(self):
        """All required columns present should return valid."""
        df = pd.DataFrame({
            "id": ["e1"],
            "year": [2025],
            "month": ["Ocak"],
            "project_id": ["p1"],
            "team_id": ["t1"],
            "type": ["İmalat"],
            "quantity_kg": [100.0],
        })

        is_valid, missing = validate_required_columns(df, "entries")

        assert is_valid is True
        assert missing == []

    def test_missing_columns(self):
        """Missing columns should be detected."""
        df = pd.DataFrame({
            "id": ["b1"],
            "team_id": ["t1"],
            # Missing other columns
        })

        is_valid, missing = validate_required_columns(df, "budgets")

        assert is_valid is False
        assert "personnel_count" in missing
        assert "amount_tl" in missing

    def test_unknown_table(self):
        """Unknown table name should pass (no requirements)."""
        df = pd.DataFrame({"any_col": [1, 2, 3]})

        is_valid, missing = validate_required_columns(df, "unknown_table")

        assert is_valid is True
        assert missing == []


class TestValidateSchema:
    """Tests for full schema validation."""

    def test_strict_mode_raises(self):
        """Strict mode should raise on missing columns."""
        df = pd.DataFrame({"id": ["t1"]})

        with pytest.raises(SchemaValidationError):
            validate_schema(df, "teams", strict=True)

    def test_non_strict_returns_result(self):
        """Non-strict mode should return result dict."""
        df = pd.DataFrame({"id": ["t1"]})

        result = validate_schema(df, "teams", strict=False)

        assert result["is_valid"] is False
        assert result["missing_required"] == ["name"]
        assert result["total_rows"] == 1
        assert result["total_columns"] == 1


class TestCheckOptionalColumns:
    """Tests for optional column checking."""

    def test_working_days_is_optional(self):
        """Budgets written before calendars existed lack working_days."""
        df = pd.DataFrame({"id": ["b1"], "team_id": ["t1"]})

        assert check_optional_columns(df, "budgets") == ["working_days"]

    def test_empty_for_unknown_table(self):
        """Unknown table should return empty list."""
        df = pd.DataFrame({"col": [1]})

        missing = check_optional_columns(df, "unknown")

        assert missing == []


class TestSanitize:
    """Tests for read-time sanitisation."""

    def test_budgets_from_strings(self):
        """CSV values arrive as strings."""
        raw = pd.DataFrame({
            "id": ["b1", "b2"],
            "team_id": ["t1", "t1"],
            "year": ["2025", "2025"],
            "month": ["Ocak", "Şubat"],
            "personnel_count": ["10", "bad"],
            "amount_tl": ["50000.5", ""],
            "working_days": ["[1, 2, 3]", ""],
        })

        df = sanitize_table(raw, "budgets")

        assert df["year"].tolist() == [2025, 2025]
        assert df["personnel_count"].tolist() == [10.0, 0.0]
        assert df["amount_tl"].tolist() == [50000.5, 0.0]
        assert df.loc[0, "working_days"] == ExplicitDays((1, 2, 3))
        assert isinstance(df.loc[1, "working_days"], LegacyDefault)

    def test_budgets_without_working_days_column(self):
        raw = pd.DataFrame({
            "id": ["b1"], "team_id": ["t1"], "year": ["2025"], "month": ["Ocak"],
            "personnel_count": ["4"], "amount_tl": ["100"],
        })

        df = sanitize_table(raw, "budgets")

        assert isinstance(df.loc[0, "working_days"], LegacyDefault)

    def test_budgets_keep_first_row_per_team_month(self):
        """A repeated team-month keeps only the first stored budget."""
        df = make_budgets(
            ("t1", 2025, "Ocak", 10, 50000, [1, 2, 3]),
            ("t1", 2025, "Ocak", 99, 1, [1]),
            ("t1", 2025, "Şubat", 5, 2000, [1]),
        )

        assert df["id"].tolist() == ["b0", "b2"]
        assert df.loc[0, "personnel_count"] == 10.0

    def test_entries_keep_non_positive_quantities(self):
        df = make_entries(
            (2025, "Ocak", "p1", "t1", "İmalat", -5),
            (2025, "Ocak", "p1", "t1", "İmalat", np.nan),
        )

        assert df["quantity_kg"].tolist() == [-5.0, 0.0]

    def test_entries_trim_labels(self):
        df = make_entries((2025, " Ocak ", "p1", "t1", "Kaynak ", 5))

        assert df.loc[0, "month"] == "Ocak"
        assert df.loc[0, "type"] == "Kaynak"

    def test_unknown_table(self):
        with pytest.raises(KeyError):
            sanitize_table(pd.DataFrame(), "nope")


class TestFindOrphans:
    """Tests for references to deleted teams and projects."""

    def test_counts(self):
        teams = make_teams(("t1", "A"))
        projects = make_projects(("p1", "X"))
        entries = make_entries(
            (2025, "Ocak", "p1", "t1", "İmalat", 1),
            (2025, "Ocak", "p9", "t1", "İmalat", 1),
            (2025, "Ocak", "p1", "t9", "İmalat", 1),
        )
        budgets = make_budgets(("t9", 2025, "Ocak", 1, 1, None))

        orphans = find_orphans(entries, budgets, teams, projects)

        assert orphans == {
            "entries_missing_team": 1,
            "entries_missing_project": 1,
            "budgets_missing_team": 1,
        }

    def test_empty_tables(self):
        orphans = find_orphans(make_entries(), make_budgets(), make_teams(), make_projects())

        assert all(v == 0 for v in orphans.values())

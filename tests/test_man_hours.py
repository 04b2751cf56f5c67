"""
Tests for the man-hours model.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data.models import Budget, ExplicitDays, LEGACY_DEFAULT
from proanaliz.metrics.man_hours import (
    add_man_hours_column,
    budget_man_hours,
    man_hours,
    total_man_hours,
)

from conftest import make_budgets


class TestManHours:
    """Tests for personnel × days × 7.5."""

    def test_explicit_calendar(self):
        """10 people × 22 days × 7.5 = 1650."""
        assert man_hours(10, ExplicitDays(tuple(range(1, 23)))) == pytest.approx(1650.0)

    def test_legacy_calendar_uses_thirty_days(self):
        assert man_hours(4, LEGACY_DEFAULT) == pytest.approx(900.0)

    def test_zero_day_calendar(self):
        assert man_hours(10, ExplicitDays(())) == 0.0

    def test_custom_daily_hours(self):
        assert man_hours(2, ExplicitDays((1, 2)), daily_hours=8) == 32.0

    def test_budget_record(self):
        budget = Budget(id="b1", team_id="t1", year=2025, month="Ocak",
                        personnel_count=3, amount_tl=1000.0)

        assert budget_man_hours(budget) == pytest.approx(3 * 30 * 7.5)

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            budget_man_hours(42)


class TestFrameHelpers:
    """Tests for the DataFrame helpers."""

    def test_adds_column_per_row(self):
        budgets = make_budgets(
            ("t1", 2025, "Ocak", 10, 50000, list(range(1, 23))),
            ("t1", 2025, "Şubat", 2, 1000, None),
        )

        result = add_man_hours_column(budgets)

        assert result["man_hours"].tolist() == pytest.approx([1650.0, 450.0])
        assert "man_hours" not in budgets.columns

    def test_total(self):
        budgets = make_budgets(
            ("t1", 2025, "Ocak", 10, 50000, list(range(1, 23))),
            ("t2", 2025, "Ocak", 2, 1000, None),
        )

        assert total_man_hours(budgets) == pytest.approx(2100.0)

    def test_empty_frame(self):
        assert total_man_hours(make_budgets()) == 0.0

"""
Tests for the team-period aggregator.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data.models import AllMonths, Month, ProductionType, SpecificMonth
from proanaliz.metrics.team_period import (
    compute_team_comparison,
    compute_team_period_stats,
    stats_frame,
)

from conftest import make_budgets, make_entries, make_teams


JANUARY = SpecificMonth(Month.OCAK)


@pytest.fixture
def teams():
    return make_teams(("t1", "Kaynak Ekibi"), ("t2", "Montaj Ekibi"))


class TestSingleMonth:
    """Tests for one team in one month."""

    def test_basic_figures(self, teams):
        entries = make_entries(
            (2025, "Ocak", "p1", "t1", "İmalat", 600),
            (2025, "Ocak", "p2", "t1", "Kaynak", 400),
            (2025, "Şubat", "p1", "t1", "İmalat", 999),
            (2025, "Ocak", "p1", "t2", "İmalat", 50),
        )
        budgets = make_budgets(("t1", 2025, "Ocak", 10, 50000, list(range(1, 23))))

        stats = compute_team_period_stats("t1", 2025, JANUARY, entries, budgets, teams)

        assert stats.team_name == "Kaynak Ekibi"
        assert stats.total_kg == 1000
        assert stats.personnel == 10
        assert stats.budget_amount == 50000
        assert stats.man_hours == pytest.approx(1650.0)
        assert stats.kg_per_person == pytest.approx(100.0)
        assert stats.cost_per_kg == pytest.approx(50.0)

    def test_production_without_budget(self, teams):
        """kg recorded but no budget: ratios fall back to zero."""
        entries = make_entries((2025, "Ocak", "p1", "t1", "İmalat", 500))

        stats = compute_team_period_stats("t1", 2025, JANUARY, entries, make_budgets(), teams)

        assert stats.total_kg == 500
        assert stats.personnel == 0
        assert stats.budget_amount == 0
        assert stats.man_hours == 0
        assert stats.kg_per_person == 0
        assert stats.cost_per_kg == 0
        assert stats.has_data is True

    def test_budget_without_production(self, teams):
        budgets = make_budgets(("t1", 2025, "Ocak", 5, 20000, None))

        stats = compute_team_period_stats("t1", 2025, JANUARY, make_entries(), budgets, teams)

        assert stats.total_kg == 0
        assert stats.cost_per_kg == 0
        assert stats.man_hours == pytest.approx(5 * 30 * 7.5)

    def test_breakdown_lists_every_type(self, teams):
        entries = make_entries((2025, "Ocak", "p1", "t1", "Kaynak", 120))

        stats = compute_team_period_stats("t1", 2025, JANUARY, entries, make_budgets(), teams)

        assert stats.type_breakdown == {
            ProductionType.IMALAT: 0.0,
            ProductionType.KAYNAK: 120.0,
            ProductionType.TEMIZLIK: 0.0,
        }

    def test_project_filter(self, teams):
        entries = make_entries(
            (2025, "Ocak", "p1", "t1", "İmalat", 600),
            (2025, "Ocak", "p2", "t1", "İmalat", 400),
        )

        stats = compute_team_period_stats("t1", 2025, JANUARY, entries, make_budgets(), teams,
                                          project_id="p2")

        assert stats.total_kg == 400

    def test_unknown_team_placeholder(self, teams):
        stats = compute_team_period_stats("gone", 2025, JANUARY, make_entries(), make_budgets(), teams)

        assert stats.team_name == "Ekip"
        assert stats.has_data is False

    def test_idempotent(self, teams):
        entries = make_entries((2025, "Ocak", "p1", "t1", "İmalat", 600))
        budgets = make_budgets(("t1", 2025, "Ocak", 10, 50000, None))

        first = compute_team_period_stats("t1", 2025, JANUARY, entries, budgets, teams)
        second = compute_team_period_stats("t1", 2025, JANUARY, entries, budgets, teams)

        assert first == second


class TestAllMonths:
    """Tests for the whole-year period."""

    def test_personnel_is_averaged(self, teams):
        """Monthly snapshots 5, 7, 9 display as 7.0, not 21."""
        budgets = make_budgets(
            ("t1", 2025, "Ocak", 5, 1000, None),
            ("t1", 2025, "Şubat", 7, 1000, None),
            ("t1", 2025, "Mart", 9, 1000, None),
        )
        entries = make_entries((2025, "Ocak", "p1", "t1", "İmalat", 2100))

        stats = compute_team_period_stats("t1", 2025, AllMonths(), entries, budgets, teams)

        assert stats.personnel == 7.0
        assert stats.total_personnel == 21
        assert stats.budget_amount == 3000
        assert stats.kg_per_person == pytest.approx(100.0)

    def test_average_rounded_to_one_decimal(self, teams):
        budgets = make_budgets(
            ("t1", 2025, "Ocak", 5, 1000, None),
            ("t1", 2025, "Şubat", 5, 1000, None),
            ("t1", 2025, "Mart", 6, 1000, None),
        )

        stats = compute_team_period_stats("t1", 2025, AllMonths(), make_entries(), budgets, teams)

        assert stats.personnel == 5.3

    def test_other_years_excluded(self, teams):
        entries = make_entries(
            (2025, "Ocak", "p1", "t1", "İmalat", 100),
            (2026, "Ocak", "p1", "t1", "İmalat", 900),
        )

        stats = compute_team_period_stats("t1", 2025, AllMonths(), entries, make_budgets(), teams)

        assert stats.total_kg == 100
        assert stats.period_label == "Tüm Aylar"


class TestTeamComparison:
    """Tests for the side-by-side view."""

    def test_one_record_per_team_in_list_order(self, teams):
        entries = make_entries((2025, "Ocak", "p1", "t2", "İmalat", 50))

        stats = compute_team_comparison(2025, JANUARY, entries, make_budgets(), teams)

        assert [s.team_id for s in stats] == ["t1", "t2"]
        assert stats[1].total_kg == 50

    def test_no_teams(self):
        assert compute_team_comparison(2025, JANUARY, make_entries(), make_budgets(), make_teams()) == []

    def test_stats_frame_has_type_columns(self, teams):
        stats = compute_team_comparison(2025, JANUARY, make_entries(), make_budgets(), teams)

        df = stats_frame(stats)

        assert {"İmalat", "Kaynak", "Temizlik", "kg_per_person"} <= set(df.columns)
        assert len(df) == 2

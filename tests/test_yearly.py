"""
Tests for the yearly rollup.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.config import MONTHS
from proanaliz.metrics.yearly import (
    compute_yearly_report,
    compute_yearly_rollup,
    compute_yearly_summary,
    yearly_matrix,
)

from conftest import make_budgets, make_entries, make_teams


@pytest.fixture
def teams():
    return make_teams(("t1", "Kaynak Ekibi"), ("t2", "Boş Ekip"))


@pytest.fixture
def year_data():
    entries = make_entries(
        (2025, "Ocak", "p1", "t1", "İmalat", 1000),
        (2025, "Mart", "p1", "t1", "Kaynak", 500),
        (2025, "Mart", "p2", "t1", "İmalat", 250),
        (2024, "Mart", "p2", "t1", "İmalat", 9999),
    )
    budgets = make_budgets(
        ("t1", 2025, "Ocak", 10, 50000, list(range(1, 23))),
        ("t1", 2025, "Şubat", 4, 8000, None),
    )
    return entries, budgets


class TestYearlyRollup:
    """Tests for one team's twelve-month grid."""

    def test_twelve_months_in_order(self, teams, year_data):
        entries, budgets = year_data

        rollup = compute_yearly_rollup("t1", 2025, entries, budgets, teams)

        assert [m.month for m in rollup.monthly_data] == MONTHS

    def test_annual_equals_monthly_sum(self, teams, year_data):
        entries, budgets = year_data

        rollup = compute_yearly_rollup("t1", 2025, entries, budgets, teams)

        assert rollup.annual_kg == sum(m.kg for m in rollup.monthly_data) == 1750
        assert rollup.annual_cost == pytest.approx(58000)
        assert rollup.annual_hours == pytest.approx(1650 + 4 * 30 * 7.5)

    def test_has_data_flags(self, teams, year_data):
        entries, budgets = year_data

        rollup = compute_yearly_rollup("t1", 2025, entries, budgets, teams)
        flags = {m.month: m.has_data for m in rollup.monthly_data}

        assert flags["Ocak"] is True
        assert flags["Şubat"] is True   # budget only
        assert flags["Mart"] is True    # production only
        assert flags["Nisan"] is False

    def test_month_without_budget(self, teams, year_data):
        entries, budgets = year_data

        march = compute_yearly_rollup("t1", 2025, entries, budgets, teams).monthly_data[2]

        assert march.kg == 750
        assert march.cost == 0
        assert march.hours == 0
        assert march.unit_cost == 0

    def test_ratios(self, teams, year_data):
        entries, budgets = year_data

        rollup = compute_yearly_rollup("t1", 2025, entries, budgets, teams)

        assert rollup.efficiency == pytest.approx(1750 / rollup.annual_hours)
        assert rollup.unit_cost == pytest.approx(58000 / 1750)


class TestYearlyReport:
    """Tests for the all-teams report."""

    def test_only_active_teams(self, teams, year_data):
        entries, budgets = year_data

        report = compute_yearly_report(2025, entries, budgets, teams)

        assert [r.team_id for r in report.teams] == ["t1"]

    def test_summary_totals(self, year_data):
        entries, budgets = year_data

        summary = compute_yearly_summary(2025, entries, budgets)

        assert summary.total_kg == 1750
        assert summary.total_cost == pytest.approx(58000)
        assert summary.avg_efficiency == pytest.approx(1750 / summary.total_hours)

    def test_empty_year(self, teams):
        report = compute_yearly_report(2030, make_entries(), make_budgets(), teams)

        assert report.teams == []
        assert report.summary.total_kg == 0
        assert report.summary.avg_efficiency == 0

    def test_matrix(self, teams, year_data):
        entries, budgets = year_data
        report = compute_yearly_report(2025, entries, budgets, teams)

        matrix = yearly_matrix(report, metric="kg")

        assert list(matrix.columns) == ["team_name"] + MONTHS
        assert matrix.loc[0, "Ocak"] == 1000
        assert matrix.loc[0, "Aralık"] == 0

"""
Tests for the admin write actions.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.auth import AuthService, AuthenticationError, ROLE_ADMIN, ROLE_VIEWER
from proanaliz.config import config
from proanaliz.data.actions import (
    add_budget,
    add_entry,
    add_project,
    add_team,
    change_viewer_password,
    delete_entry,
    delete_team,
    factory_reset,
    save_templates,
)
from proanaliz.data.loader import read_table, read_templates
from proanaliz.data.models import ExplicitDays, default_template
from proanaliz.data.templates import update_header_title
from proanaliz.data.validation import ValidationError


@pytest.fixture
def seeded(store):
    team = add_team("Kaynak Ekibi", store=store)
    project = add_project("Köprü", store=store)
    return store, team["id"], project["id"]


@pytest.fixture
def auth(store, monkeypatch):
    monkeypatch.setattr(config, "admin_password", "admin-secret")
    monkeypatch.setattr(config, "default_viewer_password", "viewer-secret")
    return AuthService(store)


class TestEntries:
    """Tests for production entry writes."""

    def test_add_and_delete(self, seeded):
        store, team_id, project_id = seeded

        saved = add_entry({
            "year": 2025, "month": "Ocak", "project_id": project_id,
            "team_id": team_id, "type": "İmalat", "quantity_kg": 250,
        }, store=store)

        entries = read_table("entries", store)
        assert entries["quantity_kg"].tolist() == [250.0]
        assert entries["type"].tolist() == ["İmalat"]

        assert delete_entry(saved["id"], store=store) is True
        assert len(read_table("entries", store)) == 0

    def test_rejected_entry_is_not_written(self, seeded):
        store, team_id, project_id = seeded

        with pytest.raises(ValidationError):
            add_entry({
                "year": 2025, "month": "Ocak", "project_id": project_id,
                "team_id": team_id, "type": "İmalat", "quantity_kg": 0,
            }, store=store)

        assert store.exists("entries") is False

    def test_unknown_team(self, seeded):
        store, _, project_id = seeded

        with pytest.raises(ValidationError):
            add_entry({
                "year": 2025, "month": "Ocak", "project_id": project_id,
                "team_id": "missing", "type": "İmalat", "quantity_kg": 5,
            }, store=store)


class TestBudgets:
    """Tests for budget writes."""

    def _budget(self, team_id, **overrides):
        data = {
            "team_id": team_id, "year": 2025, "month": "Ocak",
            "personnel_count": 10, "amount_tl": 50000,
            "working_days": ExplicitDays(tuple(range(1, 23))),
        }
        data.update(overrides)
        return data

    def test_add(self, seeded):
        store, team_id, _ = seeded

        add_budget(self._budget(team_id), store=store)

        budgets = read_table("budgets", store)
        assert budgets.loc[0, "working_days"].count == 22

    def test_duplicate_team_month_refused(self, seeded):
        store, team_id, _ = seeded
        add_budget(self._budget(team_id), store=store)

        with pytest.raises(ValidationError):
            add_budget(self._budget(team_id, amount_tl=1), store=store)

        assert len(read_table("budgets", store)) == 1

    def test_other_month_allowed(self, seeded):
        store, team_id, _ = seeded
        add_budget(self._budget(team_id), store=store)

        add_budget(self._budget(team_id, month="Şubat", working_days=None), store=store)

        assert len(read_table("budgets", store)) == 2


class TestTeamsAndProjects:
    """Tests for reference data writes."""

    def test_blank_name(self, store):
        with pytest.raises(ValidationError):
            add_team("  ", store=store)

    def test_delete_team_keeps_entries(self, seeded):
        store, team_id, project_id = seeded
        add_entry({
            "year": 2025, "month": "Ocak", "project_id": project_id,
            "team_id": team_id, "type": "Kaynak", "quantity_kg": 5,
        }, store=store)

        assert delete_team(team_id, store=store) is True

        assert len(read_table("teams", store)) == 0
        assert len(read_table("entries", store)) == 1


class TestSettings:
    """Tests for template, password and reset actions."""

    def test_save_templates(self, store):
        edited = update_header_title([default_template()], "YENİ BAŞLIK")

        assert save_templates(edited, store=store) is True
        assert read_templates(store)[0].header_title == "YENİ BAŞLIK"

    def test_change_viewer_password_requires_admin(self, auth):
        viewer = auth.login(ROLE_VIEWER, "viewer-secret")

        with pytest.raises(AuthenticationError):
            change_viewer_password(auth, viewer.token, "new-pass")

    def test_change_viewer_password(self, auth):
        admin = auth.login(ROLE_ADMIN, "admin-secret")

        assert change_viewer_password(auth, admin.token, "new-pass") is True
        assert auth.verify_password(ROLE_VIEWER, "new-pass") is True

    def test_change_viewer_password_too_short(self, auth):
        admin = auth.login(ROLE_ADMIN, "admin-secret")

        with pytest.raises(ValidationError):
            change_viewer_password(auth, admin.token, "12")

    def test_factory_reset(self, seeded, auth):
        store, team_id, project_id = seeded
        add_entry({
            "year": 2025, "month": "Ocak", "project_id": project_id,
            "team_id": team_id, "type": "Kaynak", "quantity_kg": 5,
        }, store=store)
        save_templates([default_template()], store=store)
        admin = auth.login(ROLE_ADMIN, "admin-secret")

        removed = factory_reset(auth, admin.token, "admin-secret", store=store)

        assert removed == {"entries": 1, "budgets": 0, "teams": 1, "projects": 1}
        for table in ("entries", "budgets", "teams", "projects"):
            assert len(read_table(table, store)) == 0
        assert store.get_setting("report_template") is not None

    def test_factory_reset_wrong_password(self, seeded, auth):
        store, _, _ = seeded
        admin = auth.login(ROLE_ADMIN, "admin-secret")

        with pytest.raises(AuthenticationError):
            factory_reset(auth, admin.token, "nope", store=store)

        assert len(read_table("teams", store)) == 1

    def test_factory_reset_viewer_refused(self, seeded, auth):
        store, _, _ = seeded
        viewer = auth.login(ROLE_VIEWER, "viewer-secret")

        with pytest.raises(AuthenticationError):
            factory_reset(auth, viewer.token, "admin-secret", store=store)

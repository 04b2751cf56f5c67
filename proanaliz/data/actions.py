"""
Write actions behind the admin pages.

Each action validates first (ValidationError propagates to the page), then
writes through the store. Store failures are logged and reported as a
None/False result; the cached tables are cleared after every write.
"""
import logging
from typing import Any, Dict, List, Optional

from proanaliz.auth import AuthService, AuthenticationError
from proanaliz.config import SETTING_REPORT_TEMPLATE
from proanaliz.data.loader import clear_caches, read_table
from proanaliz.data.models import ReportTemplate
from proanaliz.data.store import RecordStore, StoreError, get_store
from proanaliz.data.templates import dump_templates
from proanaliz.data.validation import (
    validate_budget,
    validate_entry,
    validate_name,
    validate_password,
    ValidationError,
)

logger = logging.getLogger(__name__)

RESETTABLE_TABLES = ["entries", "budgets", "teams", "projects"]


def _ids(table: str, store: RecordStore) -> List[str]:
    return read_table(table, store)["id"].tolist()


def _insert(table: str, record: Dict[str, Any], store: RecordStore) -> Optional[Dict[str, Any]]:
    try:
        row = store.insert(table, record)
    except StoreError as e:
        logger.error("Insert into %s failed: %s", table, e, extra={"table": table})
        return None
    clear_caches()
    return row


def _delete(table: str, row_id: str, store: RecordStore) -> bool:
    try:
        deleted = store.delete(table, row_id)
    except StoreError as e:
        logger.error("Delete from %s failed: %s", table, e, extra={"table": table})
        return False
    clear_caches()
    return deleted


# =============================================================================
# PRODUCTION ENTRIES
# =============================================================================

def add_entry(data: Dict[str, Any], store: Optional[RecordStore] = None) -> Optional[Dict[str, Any]]:
    store = store or get_store()
    record = validate_entry(
        data,
        team_ids=_ids("teams", store),
        project_ids=_ids("projects", store),
    )
    return _insert("entries", record, store)


def delete_entry(entry_id: str, store: Optional[RecordStore] = None) -> bool:
    return _delete("entries", entry_id, store or get_store())


# =============================================================================
# BUDGETS
# =============================================================================

def add_budget(data: Dict[str, Any], store: Optional[RecordStore] = None) -> Optional[Dict[str, Any]]:
    """
    Store a team's budget month.

    A second budget for the same team-month is refused.
    """
    store = store or get_store()
    record = validate_budget(data, team_ids=_ids("teams", store))

    budgets = read_table("budgets", store)
    clash = budgets[
        (budgets["team_id"] == record["team_id"])
        & (budgets["year"] == record["year"])
        & (budgets["month"] == record["month"])
    ]
    if len(clash) > 0:
        raise ValidationError("Bu ekip için seçilen aya ait bütçe zaten kayıtlı.")

    return _insert("budgets", record, store)


def delete_budget(budget_id: str, store: Optional[RecordStore] = None) -> bool:
    return _delete("budgets", budget_id, store or get_store())


# =============================================================================
# TEAMS & PROJECTS
# =============================================================================

def add_team(name: str, store: Optional[RecordStore] = None) -> Optional[Dict[str, Any]]:
    return _insert("teams", {"name": validate_name(name, "Ekip adı")}, store or get_store())


def delete_team(team_id: str, store: Optional[RecordStore] = None) -> bool:
    """Delete a team; its budgets and entries are left in place."""
    return _delete("teams", team_id, store or get_store())


def add_project(name: str, store: Optional[RecordStore] = None) -> Optional[Dict[str, Any]]:
    return _insert("projects", {"name": validate_name(name, "Proje adı")}, store or get_store())


def delete_project(project_id: str, store: Optional[RecordStore] = None) -> bool:
    """Delete a project; its entries are left in place."""
    return _delete("projects", project_id, store or get_store())


# =============================================================================
# SETTINGS
# =============================================================================

def save_templates(templates: List[ReportTemplate], store: Optional[RecordStore] = None) -> bool:
    store = store or get_store()
    try:
        store.set_setting(SETTING_REPORT_TEMPLATE, dump_templates(templates))
    except StoreError as e:
        logger.error("Saving report template failed: %s", e)
        return False
    clear_caches()
    return True


def change_viewer_password(auth: AuthService, token: Optional[str], new_password: str) -> bool:
    auth.require_admin(token)
    password = validate_password(new_password)
    try:
        auth.change_password("viewer", password)
    except StoreError as e:
        logger.error("Saving viewer password failed: %s", e)
        return False
    return True


def factory_reset(auth: AuthService, token: Optional[str], admin_password: str,
                  store: Optional[RecordStore] = None) -> Dict[str, int]:
    """
    Permanently delete entries, budgets, teams and projects.

    Requires an admin session and the admin password again. Settings are
    kept. Tables are cleared one by one; a failure part-way is logged and
    the remaining tables are left untouched.
    """
    auth.require_admin(token)
    if not auth.verify_password("admin", admin_password):
        raise AuthenticationError("Hatalı şifre! Sıfırlama iptal edildi.")

    store = store or get_store()
    removed: Dict[str, int] = {}
    for table in RESETTABLE_TABLES:
        try:
            removed[table] = store.delete_all(table)
        except StoreError as e:
            logger.error("Factory reset stopped at %s: %s", table, e, extra={"table": table})
            break
    clear_caches()
    return removed

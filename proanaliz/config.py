"""
Application configuration management.

Every report reads its shared constants from here so that hours, fallbacks
and labels stay identical across pages.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field


def _default_data_dir() -> Path:
    env_dir = os.getenv("DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path("./data")


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppConfig:
    """Application configuration with environment overrides."""

    # Paths
    data_dir: Path = field(default_factory=_default_data_dir)

    # Environment
    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "dev"))

    # Cache settings
    cache_ttl_seconds: int = field(default_factory=lambda: int(os.getenv("CACHE_TTL_SECONDS", "3600")))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_json: bool = field(default_factory=lambda: _env_flag("LOG_JSON"))

    # Credentials (bootstrap values, hashed before they are stored)
    admin_password: str = field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", "142536789"))
    default_viewer_password: str = field(default_factory=lambda: os.getenv("VIEWER_PASSWORD", "123456"))
    session_ttl_minutes: int = field(default_factory=lambda: int(os.getenv("SESSION_TTL_MINUTES", "480")))

    # Man-hours model
    daily_working_hours: float = 7.5
    default_working_days: int = 30  # budgets saved before the day calendar existed

    # Filters
    default_year: int = 2025

    @property
    def store_dir(self) -> Path:
        return self.data_dir / "store"

    @property
    def is_prod(self) -> bool:
        return self.app_env.lower() == "prod"


# Global config instance
config = AppConfig()


# =============================================================================
# CALENDAR
# =============================================================================

MONTHS = [
    "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
    "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
]

YEARS = list(range(2025, 2051))

ALL_MONTHS_LABEL = "Tüm Aylar"


# =============================================================================
# PLACEHOLDERS
# =============================================================================

UNKNOWN_TEAM_LABEL = "Ekip"
UNKNOWN_PROJECT_LABEL = "Proje"
ACTIVE_TEMPLATE_ID = "team"


# =============================================================================
# STORAGE
# =============================================================================

TABLE_FILES = {
    "teams": "teams",
    "projects": "projects",
    "budgets": "budgets",
    "entries": "entries",
    "settings": "settings",
}

TABLE_COLUMNS = {
    "teams": ["id", "name"],
    "projects": ["id", "name"],
    "budgets": [
        "id",
        "team_id",
        "year",
        "month",
        "personnel_count",
        "amount_tl",
        "working_days",
    ],
    "entries": [
        "id",
        "year",
        "month",
        "project_id",
        "team_id",
        "type",
        "quantity_kg",
    ],
    "settings": ["key", "value"],
}

# Required columns (hard fail if missing)
REQUIRED_COLUMNS = {
    "teams": ["id", "name"],
    "projects": ["id", "name"],
    "budgets": ["id", "team_id", "year", "month", "personnel_count", "amount_tl"],
    "entries": ["id", "year", "month", "project_id", "team_id", "type", "quantity_kg"],
    "settings": ["key", "value"],
}

# Optional columns (filled with defaults if missing)
OPTIONAL_COLUMNS = {
    "budgets": ["working_days"],
}

SETTING_VIEWER_PASSWORD = "viewer_password"
SETTING_ADMIN_PASSWORD = "admin_password"
SETTING_REPORT_TEMPLATE = "report_template"


# Formatting constants
FORMAT_CURRENCY = "₺{:,.0f}"
FORMAT_CURRENCY_DECIMAL = "₺{:,.2f}"
FORMAT_KG = "{:,.0f} kg"
FORMAT_HOURS = "{:,.0f}"
FORMAT_RATIO = "{:,.2f}"
FORMAT_PERCENT = "{:.1f}%"

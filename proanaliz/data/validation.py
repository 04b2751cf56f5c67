"""
Input validation for records created from the admin forms.

Validation runs before anything is written; a rejected record is never
partially stored.
"""
import math
from typing import Any, Dict, Iterable, Optional

from proanaliz.config import MONTHS, YEARS
from proanaliz.data.calendar_days import days_in_month
from proanaliz.data.models import ExplicitDays, LegacyDefault, ProductionType


class ValidationError(ValueError):
    """Raised when form input is incomplete or out of range."""
    pass


def _require(value: Any, label: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{label} zorunludur.")


def _check_period(year: Any, month: Any) -> None:
    try:
        year = int(year)
    except (TypeError, ValueError):
        raise ValidationError(f"Geçersiz yıl: {year}")
    if year not in YEARS:
        raise ValidationError(f"Geçersiz yıl: {year}")
    if month not in MONTHS:
        raise ValidationError(f"Geçersiz ay: {month}")


def validate_name(name: Optional[str], label: str = "Ad") -> str:
    """Trimmed, non-empty team or project name."""
    _require(name, label)
    return name.strip()


def validate_entry(data: Dict[str, Any],
                   team_ids: Optional[Iterable[str]] = None,
                   project_ids: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """
    Validate a production entry form.

    Returns the cleaned record; raises ValidationError otherwise.
    """
    _require(data.get("project_id"), "Proje")
    _require(data.get("team_id"), "Ekip")
    _check_period(data.get("year"), data.get("month"))

    if team_ids is not None and data["team_id"] not in set(team_ids):
        raise ValidationError("Seçilen ekip bulunamadı.")
    if project_ids is not None and data["project_id"] not in set(project_ids):
        raise ValidationError("Seçilen proje bulunamadı.")

    try:
        production_type = ProductionType(data.get("type"))
    except ValueError:
        raise ValidationError(f"Geçersiz üretim türü: {data.get('type')}")

    try:
        quantity = float(data.get("quantity_kg"))
    except (TypeError, ValueError):
        raise ValidationError("Miktar sayısal olmalıdır.")
    if not math.isfinite(quantity):
        raise ValidationError("Miktar geçerli bir sayı olmalıdır.")
    if not quantity > 0:
        raise ValidationError("Miktar sıfırdan büyük olmalıdır.")

    return {
        "year": int(data["year"]),
        "month": data["month"],
        "project_id": data["project_id"],
        "team_id": data["team_id"],
        "type": production_type.value,
        "quantity_kg": quantity,
    }


def validate_budget(data: Dict[str, Any],
                    team_ids: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """
    Validate a budget form.

    Personnel count and amount must be positive. An explicit calendar must
    lie inside the month.
    """
    _require(data.get("team_id"), "Ekip")
    _check_period(data.get("year"), data.get("month"))

    if team_ids is not None and data["team_id"] not in set(team_ids):
        raise ValidationError("Seçilen ekip bulunamadı.")

    try:
        personnel = float(data.get("personnel_count"))
        amount = float(data.get("amount_tl"))
    except (TypeError, ValueError):
        raise ValidationError("Personel sayısı ve tutar sayısal olmalıdır.")
    if not (math.isfinite(personnel) and math.isfinite(amount)):
        raise ValidationError("Personel sayısı ve tutar geçerli bir sayı olmalıdır.")
    if personnel <= 0 or amount <= 0:
        raise ValidationError("Personel sayısı ve tutar sıfırdan büyük olmalıdır.")

    working_days = data.get("working_days")
    if working_days is None:
        working_days = LegacyDefault()
    if not isinstance(working_days, (ExplicitDays, LegacyDefault)):
        raise ValidationError("Çalışma günleri geçersiz.")
    if isinstance(working_days, ExplicitDays):
        last = days_in_month(int(data["year"]), data["month"])
        if any(d < 1 or d > last for d in working_days.days):
            raise ValidationError("Çalışma günleri ayın dışında.")

    return {
        "team_id": data["team_id"],
        "year": int(data["year"]),
        "month": data["month"],
        "personnel_count": personnel,
        "amount_tl": amount,
        "working_days": working_days,
    }


def validate_password(password: Optional[str], min_length: int = 4) -> str:
    _require(password, "Şifre")
    if len(password) < min_length:
        raise ValidationError(f"Şifre en az {min_length} karakter olmalıdır.")
    return password

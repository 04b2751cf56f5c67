"""
Record types shared by the store, the metrics packs and the pages.

Collections travel as DataFrames; these types describe single records,
filter selections and report configuration.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple, Union

from proanaliz.config import config, MONTHS, ALL_MONTHS_LABEL


class ProductionType(str, Enum):
    """Fixed production output types."""
    IMALAT = "İmalat"      # manufacturing
    KAYNAK = "Kaynak"      # welding
    TEMIZLIK = "Temizlik"  # cleaning


PRODUCTION_TYPES: List[ProductionType] = list(ProductionType)


class Month(str, Enum):
    OCAK = "Ocak"
    SUBAT = "Şubat"
    MART = "Mart"
    NISAN = "Nisan"
    MAYIS = "Mayıs"
    HAZIRAN = "Haziran"
    TEMMUZ = "Temmuz"
    AGUSTOS = "Ağustos"
    EYLUL = "Eylül"
    EKIM = "Ekim"
    KASIM = "Kasım"
    ARALIK = "Aralık"

    @property
    def number(self) -> int:
        """1-based calendar month number."""
        return MONTHS.index(self.value) + 1

    @classmethod
    def parse(cls, value: Union["Month", str, int]) -> "Month":
        """Accept a Month, a month name, or a 1-based month number."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            if not 1 <= value <= 12:
                raise ValueError(f"Month number out of range: {value}")
            return cls(MONTHS[value - 1])
        return cls(str(value).strip())


# =============================================================================
# WORKING DAYS
# =============================================================================

@dataclass(frozen=True)
class ExplicitDays:
    """Calendar day numbers explicitly marked as worked."""
    days: Tuple[int, ...]

    @property
    def count(self) -> int:
        return len(self.days)

    def to_list(self) -> List[int]:
        return list(self.days)


@dataclass(frozen=True)
class LegacyDefault:
    """Budget saved without a day calendar; counts as the configured default."""

    @property
    def count(self) -> int:
        return config.default_working_days

    def to_list(self) -> Optional[List[int]]:
        return None


WorkingDays = Union[ExplicitDays, LegacyDefault]

LEGACY_DEFAULT = LegacyDefault()


# =============================================================================
# PERIOD SELECTION
# =============================================================================

@dataclass(frozen=True)
class SpecificMonth:
    month: Month

    @property
    def label(self) -> str:
        return self.month.value


@dataclass(frozen=True)
class AllMonths:

    @property
    def label(self) -> str:
        return ALL_MONTHS_LABEL


Period = Union[SpecificMonth, AllMonths]


def parse_period(value: Union[Period, Month, str]) -> Period:
    """Turn a filter selection (possibly the 'all months' label) into a Period."""
    if isinstance(value, (SpecificMonth, AllMonths)):
        return value
    if isinstance(value, Month):
        return SpecificMonth(value)
    if value == ALL_MONTHS_LABEL:
        return AllMonths()
    return SpecificMonth(Month.parse(value))


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class Budget:
    id: str
    team_id: str
    year: int
    month: str
    personnel_count: float
    amount_tl: float
    working_days: WorkingDays = LEGACY_DEFAULT


# =============================================================================
# REPORT TEMPLATE
# =============================================================================

@dataclass
class ReportField:
    id: str
    label: str
    visible: bool = True


@dataclass
class ReportTheme:
    primary: str
    secondary: str
    accent: str
    imalat: str
    kaynak: str
    temizlik: str

    def type_color(self, production_type: ProductionType) -> str:
        return {
            ProductionType.IMALAT: self.imalat,
            ProductionType.KAYNAK: self.kaynak,
            ProductionType.TEMIZLIK: self.temizlik,
        }[production_type]


DEFAULT_THEME = ReportTheme(
    primary="#2563eb",
    secondary="#0f172a",
    accent="#059669",
    imalat="#2563eb",
    kaynak="#059669",
    temizlik="#d97706",
)


@dataclass
class ReportTemplate:
    id: str
    name: str
    header_title: str
    show_charts: bool = True
    fields: List[ReportField] = field(default_factory=list)
    theme: ReportTheme = field(default_factory=lambda: replace(DEFAULT_THEME))


def default_fields() -> List[ReportField]:
    return [
        ReportField("personnel", "Aktif Personel"),
        ReportField("budget", "Toplam Hakediş"),
        ReportField("efficiency", "Birim Verim (kg/kişi)"),
        ReportField("costPerKg", "Birim Maliyet (TL/kg)"),
        ReportField("breakdown", "Üretim Detayları"),
        ReportField("manHours", "Çalışma Saati"),
    ]


def default_template() -> ReportTemplate:
    return ReportTemplate(
        id="team",
        name="Standart ERP Şablonu",
        header_title="PERSONEL VE ÜRETİM ANALİZ RAPORU",
        show_charts=True,
        fields=default_fields(),
        theme=replace(DEFAULT_THEME),
    )

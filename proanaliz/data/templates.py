"""
Report template settings: JSON (de)serialisation with defaults, and the
small edits the settings page makes.

Templates are stored as one JSON document under the `report_template`
setting. Missing or malformed parts fall back to defaults at read time.
"""
import json
import logging
from dataclasses import asdict, replace
from typing import Any, Dict, List, Optional

from proanaliz.config import ACTIVE_TEMPLATE_ID
from proanaliz.data.models import (
    DEFAULT_THEME,
    ReportField,
    ReportTemplate,
    ReportTheme,
    default_template,
)

logger = logging.getLogger(__name__)

THEME_KEYS = ["primary", "secondary", "accent", "imalat", "kaynak", "temizlik"]


def _parse_theme(raw: Any) -> ReportTheme:
    if not isinstance(raw, dict):
        return replace(DEFAULT_THEME)
    values = {k: raw.get(k) or getattr(DEFAULT_THEME, k) for k in THEME_KEYS}
    return ReportTheme(**values)


def _parse_fields(raw: Any) -> List[ReportField]:
    if not isinstance(raw, list):
        return default_template().fields
    fields = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("id"):
            continue
        fields.append(ReportField(
            id=str(item["id"]),
            label=str(item.get("label") or item["id"]),
            visible=bool(item.get("visible", True)),
        ))
    return fields


def _parse_template(raw: Dict[str, Any]) -> ReportTemplate:
    base = default_template()
    return ReportTemplate(
        id=str(raw.get("id") or base.id),
        name=str(raw.get("name") or base.name),
        header_title=str(raw.get("headerTitle") or raw.get("header_title") or base.header_title),
        show_charts=bool(raw.get("showCharts", raw.get("show_charts", base.show_charts))),
        fields=_parse_fields(raw.get("fields")),
        theme=_parse_theme(raw.get("theme")),
    )


def parse_templates(value: Optional[str]) -> List[ReportTemplate]:
    """
    Read the stored template JSON.

    Accepts a list of templates or a single template object; returns the
    default template when nothing usable is stored.
    """
    if not value:
        return [default_template()]
    try:
        raw = json.loads(value)
    except ValueError:
        logger.warning("Stored report template is not valid JSON; using default")
        return [default_template()]

    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        logger.warning("Stored report template has unexpected shape; using default")
        return [default_template()]

    templates = [_parse_template(item) for item in raw if isinstance(item, dict)]
    return templates or [default_template()]


def dump_templates(templates: List[ReportTemplate]) -> str:
    """Serialise templates using the stored camelCase keys."""
    payload = []
    for t in templates:
        payload.append({
            "id": t.id,
            "name": t.name,
            "headerTitle": t.header_title,
            "showCharts": t.show_charts,
            "fields": [asdict(f) for f in t.fields],
            "theme": asdict(t.theme),
        })
    return json.dumps(payload, ensure_ascii=False)


def active_template(templates: List[ReportTemplate]) -> ReportTemplate:
    """The template with the active id, or the first one."""
    for t in templates:
        if t.id == ACTIVE_TEMPLATE_ID:
            return t
    return templates[0] if templates else default_template()


# =============================================================================
# FIELD LOOKUPS
# =============================================================================

def is_field_visible(template: ReportTemplate, field_id: str) -> bool:
    """Fields not listed in the template are shown."""
    for f in template.fields:
        if f.id == field_id:
            return f.visible
    return True


def field_label(template: ReportTemplate, field_id: str, default: str) -> str:
    for f in template.fields:
        if f.id == field_id and f.label:
            return f.label
    return default


# =============================================================================
# EDITS (return new lists; the input is left untouched)
# =============================================================================

def _edit_active(templates: List[ReportTemplate], edit) -> List[ReportTemplate]:
    updated = []
    for t in templates:
        if t.id == ACTIVE_TEMPLATE_ID:
            t = edit(replace(t, fields=[replace(f) for f in t.fields], theme=replace(t.theme)))
        updated.append(t)
    return updated


def toggle_field_visibility(templates: List[ReportTemplate], field_id: str) -> List[ReportTemplate]:
    def edit(t: ReportTemplate) -> ReportTemplate:
        for f in t.fields:
            if f.id == field_id:
                f.visible = not f.visible
        return t
    return _edit_active(templates, edit)


def update_field_label(templates: List[ReportTemplate], field_id: str, label: str) -> List[ReportTemplate]:
    def edit(t: ReportTemplate) -> ReportTemplate:
        for f in t.fields:
            if f.id == field_id:
                f.label = label
        return t
    return _edit_active(templates, edit)


def update_header_title(templates: List[ReportTemplate], title: str) -> List[ReportTemplate]:
    return _edit_active(templates, lambda t: replace(t, header_title=title))


def update_show_charts(templates: List[ReportTemplate], show: bool) -> List[ReportTemplate]:
    return _edit_active(templates, lambda t: replace(t, show_charts=bool(show)))


def update_theme(templates: List[ReportTemplate], **colors: str) -> List[ReportTemplate]:
    """Replace theme colours on the active template; unknown keys are ignored."""
    known = {k: v for k, v in colors.items() if k in THEME_KEYS and v}
    return _edit_active(templates, lambda t: replace(t, theme=replace(t.theme, **known)))

"""
Tests for report template settings.
"""
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data.models import DEFAULT_THEME, default_template
from proanaliz.data.templates import (
    active_template,
    dump_templates,
    field_label,
    is_field_visible,
    parse_templates,
    toggle_field_visibility,
    update_field_label,
    update_header_title,
    update_theme,
)


class TestParseTemplates:
    """Tests for reading the stored JSON."""

    def test_nothing_stored(self):
        templates = parse_templates(None)

        assert templates == [default_template()]

    def test_invalid_json(self):
        assert parse_templates("{not json") == [default_template()]

    def test_single_object(self):
        value = json.dumps({"id": "team", "name": "Özel", "headerTitle": "RAPOR"})

        templates = parse_templates(value)

        assert len(templates) == 1
        assert templates[0].name == "Özel"
        assert templates[0].header_title == "RAPOR"

    def test_missing_theme_uses_default(self):
        value = json.dumps([{"id": "team", "fields": []}])

        template = parse_templates(value)[0]

        assert template.theme == DEFAULT_THEME
        assert template.fields == []

    def test_partial_theme(self):
        value = json.dumps([{"id": "team", "theme": {"primary": "#ff0000"}}])

        theme = parse_templates(value)[0].theme

        assert theme.primary == "#ff0000"
        assert theme.kaynak == DEFAULT_THEME.kaynak

    def test_stored_shape_is_read_back(self):
        original = update_header_title([default_template()], "BAŞLIK")

        assert parse_templates(dump_templates(original)) == original

    def test_camel_case_keys_written(self):
        payload = json.loads(dump_templates([default_template()]))

        assert "headerTitle" in payload[0]
        assert "showCharts" in payload[0]


class TestFieldLookups:
    """Tests for visibility and labels."""

    def test_unlisted_field_is_visible(self):
        template = default_template()

        assert is_field_visible(template, "somethingNew") is True

    def test_label_fallback(self):
        template = default_template()

        assert field_label(template, "budget", "x") == "Toplam Hakediş"
        assert field_label(template, "missing", "x") == "x"

    def test_active_template_fallback(self):
        other = default_template()
        other.id = "other"

        assert active_template([other]).id == "other"
        assert active_template([]).id == "team"


class TestEdits:
    """Tests for settings-page edits."""

    def test_toggle_does_not_mutate_input(self):
        templates = [default_template()]

        edited = toggle_field_visibility(templates, "budget")

        assert is_field_visible(edited[0], "budget") is False
        assert is_field_visible(templates[0], "budget") is True

    def test_update_label(self):
        edited = update_field_label([default_template()], "manHours", "Saat")

        assert field_label(edited[0], "manHours", "") == "Saat"

    def test_update_theme_ignores_unknown_keys(self):
        edited = update_theme([default_template()], primary="#000000", bogus="#111111")

        assert edited[0].theme.primary == "#000000"
        assert not hasattr(edited[0].theme, "bogus")

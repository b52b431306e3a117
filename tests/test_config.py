"""Tests for display configuration loading and saving."""

from pathlib import Path

import pytest

from simple_gmap.config import ConfigError, DisplayConfig
from simple_gmap.models import FormatterSettings, MapType, PageLanguage, UseAddress


class TestLoad:
    def test_load_display(self, display_file: Path):
        display = DisplayConfig.load(display_file)
        assert display.id == "node.place.default"
        assert set(display.content) == {"field_address", "title"}
        assert display.hidden == {"links": True}

    def test_map_fields(self, display_file: Path):
        display = DisplayConfig.load(display_file)
        assert list(display.map_fields()) == ["field_address"]

    def test_field_settings_are_resolved(self, display_file: Path):
        settings = DisplayConfig.load(display_file).field_settings("field_address")
        assert settings.include_map is True
        assert settings.include_static_map is False
        assert settings.iframe_width == 400
        assert settings.iframe_height == 300
        assert settings.zoom_level == 10
        assert settings.information_bubble is False
        assert settings.link_text == UseAddress()
        assert settings.map_type is MapType.SATELLITE
        assert settings.langcode == PageLanguage()

    def test_field_settings_missing_field(self, display_file: Path):
        with pytest.raises(ConfigError, match="not found"):
            DisplayConfig.load(display_file).field_settings("field_other")

    def test_field_settings_other_formatter(self, display_file: Path):
        with pytest.raises(ConfigError, match="string"):
            DisplayConfig.load(display_file).field_settings("title")

    def test_get_field(self, display_file: Path):
        display = DisplayConfig.load(display_file)
        assert display.get_field("title").type == "string"
        assert display.get_field("nope") is None

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert DisplayConfig.load(path).content == {}

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "broken.yml"
        path.write_text("content: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            DisplayConfig.load(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            DisplayConfig.load(path)

    def test_component_without_type(self, tmp_path: Path):
        path = tmp_path / "bad.yml"
        path.write_text("content:\n  field_address:\n    label: above\n")
        with pytest.raises(ConfigError, match="Invalid display configuration"):
            DisplayConfig.load(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Cannot read"):
            DisplayConfig.load(tmp_path / "missing.yml")


class TestSave:
    def test_round_trip(self, display_file: Path, tmp_path: Path):
        display = DisplayConfig.load(display_file)
        out = tmp_path / "saved.yml"
        display.save(out)

        reloaded = DisplayConfig.load(out)
        assert reloaded.field_settings("field_address") == display.field_settings("field_address")
        assert reloaded.get_field("title").settings == {"link_to_entity": False}
        assert reloaded.model_extra["targetEntityType"] == "node"

    def test_set_field_settings(self, display_file: Path, tmp_path: Path):
        display = DisplayConfig.load(display_file)
        settings = FormatterSettings.with_defaults({"zoom_level": 3, "langcode": "de"})
        display.set_field_settings("field_address", settings)
        display.set_field_settings("field_second_address", FormatterSettings())

        out = tmp_path / "saved.yml"
        display.save(out)
        reloaded = DisplayConfig.load(out)

        assert reloaded.field_settings("field_address") == settings
        assert reloaded.get_field("field_address").settings["langcode"] == "de"
        assert list(reloaded.map_fields()) == ["field_address", "field_second_address"]

"""Tests for the settings form."""

import pytest

from simple_gmap.form import (
    SettingsFormError,
    map_type_options,
    settings_form,
    validate_settings_form,
    zoom_options,
)
from simple_gmap.models import FormatterSettings, MapType, PageLanguage, UseAddress


class TestSettingsForm:
    def test_element_order(self):
        names = [element.name for element in settings_form()]
        assert names == [
            "embedded_label",
            "include_map",
            "include_static_map",
            "iframe_width",
            "iframe_height",
            "link_label",
            "include_link",
            "link_text",
            "generic_label",
            "zoom_level",
            "information_bubble",
            "include_text",
            "map_type",
            "langcode",
        ]

    def test_defaults_prefilled(self):
        elements = {element.name: element for element in settings_form()}
        assert elements["include_map"].default_value is True
        assert elements["iframe_width"].default_value == 200
        assert elements["iframe_width"].min == 1
        assert elements["zoom_level"].default_value == "14"
        assert elements["link_text"].default_value == "View larger map"
        assert elements["langcode"].default_value == "en"

    def test_current_settings_prefilled(self):
        settings = FormatterSettings.with_defaults({"link_text": "use_address", "langcode": "page"})
        elements = {element.name: element for element in settings_form(settings)}
        assert elements["link_text"].default_value == "use_address"
        assert elements["langcode"].default_value == "page"

    def test_zoom_options(self):
        options = zoom_options()
        assert list(options) == [str(level) for level in range(1, 21)]
        assert options["1"] == "1 - Minimum"
        assert options["14"] == "14 - Default"
        assert options["20"] == "20 - Maximum"
        assert options["7"] == "7"

    def test_map_type_options_match_labels(self):
        assert map_type_options() == {"m": "Map", "k": "Satellite", "h": "Hybrid", "p": "Terrain"}


class TestValidateSettingsForm:
    def test_valid_submission(self):
        settings = validate_settings_form({
            "include_map": "1",
            "include_link": 1,
            "iframe_width": "640",
            "iframe_height": 480,
            "zoom_level": "20",
            "link_text": "use_address",
            "map_type": "k",
            "langcode": "page",
        })
        assert settings.include_link is True
        assert settings.iframe_width == 640
        assert settings.zoom_level == 20
        assert settings.link_text == UseAddress()
        assert settings.map_type is MapType.SATELLITE
        assert settings.langcode == PageLanguage()

    def test_empty_submission_gives_defaults(self):
        assert validate_settings_form({}) == FormatterSettings()

    @pytest.mark.parametrize(
        "values,field",
        [
            ({"iframe_width": 0}, "iframe_width"),
            ({"iframe_height": "tall"}, "iframe_height"),
            ({"zoom_level": 21}, "zoom_level"),
            ({"zoom_level": "0"}, "zoom_level"),
            ({"map_type": "x"}, "map_type"),
            ({"langcode": "english"}, "langcode"),
            ({"colour": "red"}, "colour"),
            ({"include_map": "maybe"}, "include_map"),
            ({"include_link": 2}, "include_link"),
            ({"information_bubble": "yes"}, "information_bubble"),
        ],
    )
    def test_invalid_value(self, values, field):
        with pytest.raises(SettingsFormError) as exc_info:
            validate_settings_form(values)
        assert [issue["field"] for issue in exc_info.value.issues] == [field]

    def test_reports_every_issue(self):
        with pytest.raises(SettingsFormError) as exc_info:
            validate_settings_form({"iframe_width": -1, "zoom_level": 99, "map_type": "z"})
        fields = {issue["field"] for issue in exc_info.value.issues}
        assert fields == {"iframe_width", "zoom_level", "map_type"}
        assert "iframe_width" in str(exc_info.value)

    @pytest.mark.parametrize("flag", [True, False, 0, 1, "0", "1", ""])
    def test_accepted_flags(self, flag):
        validate_settings_form({"include_text": flag})

    def test_integral_float_dimensions(self):
        assert validate_settings_form({"iframe_width": 400.0}).iframe_width == 400

    @pytest.mark.parametrize("langcode", ["", "de", "pt-br", "zh-TW", "page"])
    def test_accepted_langcodes(self, langcode):
        validate_settings_form({"langcode": langcode})

"""Admin settings form for the map formatter."""

import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field

from .models import (
    MAX_ZOOM,
    MIN_ZOOM,
    PAGE_LANGUAGE,
    FormatterSettings,
    MapType,
    parse_int,
)

FLAG_FIELDS = (
    "include_map",
    "include_static_map",
    "include_link",
    "include_text",
    "information_bubble",
)
DIMENSION_FIELDS = ("iframe_width", "iframe_height")

# Values a checkbox can submit
_FLAG_VALUES = {"0", "1", ""}

_LANGCODE_PATTERN = re.compile(r"^[a-zA-Z]{2}(-[a-zA-Z]{2,4})?$")


class SettingsFormError(Exception):
    """Raised when submitted settings fail validation."""

    def __init__(self, issues: list[dict[str, str]]) -> None:
        self.issues = issues
        messages = "; ".join(issue["message"] for issue in issues)
        super().__init__(f"Invalid formatter settings: {messages}")


class FormElement(BaseModel):
    """One element of the settings form."""

    name: str
    type: Literal["markup", "checkbox", "number", "textfield", "select"]
    title: str = ""
    default_value: Any = None
    description: str | None = None
    options: dict[str, str] = Field(default_factory=dict)
    min: int | None = None
    step: int | None = None


def zoom_options() -> dict[str, str]:
    """Zoom level choices, with the extremes and default labelled."""
    labels = {MIN_ZOOM: "1 - Minimum", 14: "14 - Default", MAX_ZOOM: "20 - Maximum"}
    return {str(level): labels.get(level, str(level)) for level in range(MIN_ZOOM, MAX_ZOOM + 1)}


def map_type_options() -> dict[str, str]:
    return {member.value: member.label for member in MapType}


def settings_form(settings: FormatterSettings | None = None) -> list[FormElement]:
    """Describe the settings form, pre-filled from the given settings."""
    values = (settings or FormatterSettings()).to_config()
    dimension_note = "Note that static maps only accept sizes in pixels"

    return [
        FormElement(name="embedded_label", type="markup", title="Embedded map"),
        FormElement(
            name="include_map",
            type="checkbox",
            title="Include embedded dynamic map",
            default_value=values["include_map"],
        ),
        FormElement(
            name="include_static_map",
            type="checkbox",
            title="Include embedded static map",
            default_value=values["include_static_map"],
        ),
        FormElement(
            name="iframe_width",
            type="number",
            title="Width of embedded map",
            default_value=values["iframe_width"],
            description=dimension_note,
            min=1,
            step=1,
        ),
        FormElement(
            name="iframe_height",
            type="number",
            title="Height of embedded map",
            default_value=values["iframe_height"],
            description=dimension_note,
            min=1,
            step=1,
        ),
        FormElement(name="link_label", type="markup", title="Link to map"),
        FormElement(
            name="include_link",
            type="checkbox",
            title="Include link to map",
            default_value=values["include_link"],
        ),
        FormElement(
            name="link_text",
            type="textfield",
            title="Link text",
            default_value=values["link_text"],
            description=(
                "Enter the text to use for the link to the map, or enter 'use_address' "
                "(without the quotes) to use the entered address text as the link text"
            ),
        ),
        FormElement(name="generic_label", type="markup", title="General settings"),
        FormElement(
            name="zoom_level",
            type="select",
            title="Zoom level",
            default_value=str(values["zoom_level"]),
            options=zoom_options(),
        ),
        FormElement(
            name="information_bubble",
            type="checkbox",
            title="Show information bubble",
            default_value=values["information_bubble"],
            description=(
                "If checked, the information bubble for the marker will be displayed "
                "when the embedded or linked map loads."
            ),
        ),
        FormElement(
            name="include_text",
            type="checkbox",
            title="Include original address text",
            default_value=values["include_text"],
        ),
        FormElement(
            name="map_type",
            type="select",
            title="Map type",
            default_value=values["map_type"],
            description="Choose a default map type for embedded and linked maps",
            options=map_type_options(),
        ),
        FormElement(
            name="langcode",
            type="textfield",
            title="Language",
            default_value=values["langcode"],
            description=(
                "Enter a two-letter language code that Google Maps can recognize, or enter "
                "'page' (without the quotes) to use the current page's language code"
            ),
        ),
    ]


def _is_flag_value(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return True
    if isinstance(value, int):
        return value in (0, 1)
    if isinstance(value, str):
        return value.strip() in _FLAG_VALUES
    return False


def validate_settings_form(values: Mapping[str, Any]) -> FormatterSettings:
    """Validate submitted form values strictly and return resolved settings.

    Raises:
        SettingsFormError: listing every invalid value found.
    """
    issues: list[dict[str, str]] = []
    known = set(FormatterSettings.model_fields)

    for name in sorted(set(values) - known):
        issues.append({
            "field": name,
            "issue": "unknown_setting",
            "message": f"Unknown setting: {name}",
        })

    for name in FLAG_FIELDS:
        if name in values and not _is_flag_value(values[name]):
            issues.append({
                "field": name,
                "issue": "invalid_flag",
                "message": f"{name} must be a boolean, 0 or 1, got {values[name]!r}",
            })

    for name in DIMENSION_FIELDS:
        if name not in values:
            continue
        number = parse_int(values[name])
        if number is None or number < 1:
            issues.append({
                "field": name,
                "issue": "invalid_number",
                "message": f"{name} must be a whole number of at least 1, got {values[name]!r}",
            })

    if "zoom_level" in values:
        zoom = parse_int(values["zoom_level"])
        if zoom is None or not MIN_ZOOM <= zoom <= MAX_ZOOM:
            issues.append({
                "field": "zoom_level",
                "issue": "invalid_option",
                "message": f"zoom_level must be between {MIN_ZOOM} and {MAX_ZOOM}, got {values['zoom_level']!r}",
            })

    map_type = values.get("map_type", MapType.MAP)
    if isinstance(map_type, MapType):
        map_type = map_type.value
    if not isinstance(map_type, str) or map_type not in map_type_options():
        issues.append({
            "field": "map_type",
            "issue": "invalid_option",
            "message": f"map_type must be one of {', '.join(map_type_options())}, got {values['map_type']!r}",
        })

    if "langcode" in values:
        langcode = str(values["langcode"] or "").strip()
        if langcode and langcode != PAGE_LANGUAGE and not _LANGCODE_PATTERN.match(langcode):
            issues.append({
                "field": "langcode",
                "issue": "invalid_langcode",
                "message": f"langcode must be a two-letter code or 'page', got {values['langcode']!r}",
            })

    if issues:
        raise SettingsFormError(issues)

    return FormatterSettings.with_defaults({name: value for name, value in values.items() if name in known})

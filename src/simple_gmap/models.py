"""Data models for map formatter settings and view models using Pydantic."""

import html
import logging
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

logger = logging.getLogger(__name__)

FORMATTER_ID = "simple_gmap"

USE_ADDRESS = "use_address"
PAGE_LANGUAGE = "page"

DEFAULT_LINK_TEXT = "View larger map"
DEFAULT_LANGCODE = "en"
DEFAULT_DIMENSION = 200
DEFAULT_ZOOM = 14
MIN_ZOOM = 1
MAX_ZOOM = 20

# code -> (display label, static map API type)
_MAP_TYPE_PROJECTIONS = {
    "m": ("Map", "roadmap"),
    "k": ("Satellite", "satellite"),
    "h": ("Hybrid", "hybrid"),
    "p": ("Terrain", "terrain"),
}


def check_plain(text: str) -> str:
    """Escape text for safe embedding in HTML."""
    return html.escape(text, quote=True)


def coerce_flag(value: Any) -> bool:
    """Normalize a stored checkbox value to a strict boolean.

    Stored settings frequently hold "1"/"0" strings rather than booleans.
    Values follow an integer cast: numbers and numeric strings are
    truncated toward zero, any other string is false.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    if isinstance(value, (int, float)):
        return int(value) != 0
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text) != 0
        except ValueError:
            pass
        try:
            return int(float(text)) != 0
        except (ValueError, OverflowError):
            return False
    return bool(value)


def parse_int(value: Any) -> int | None:
    """Parse an integer, integral float or integer string, returning None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class MapType(str, Enum):
    """Map rendering style, keyed by the provider's short code."""

    MAP = "m"
    SATELLITE = "k"
    HYBRID = "h"
    TERRAIN = "p"

    @property
    def label(self) -> str:
        """Human-readable name used in the summary and the settings form."""
        return _MAP_TYPE_PROJECTIONS[self.value][0]

    @property
    def static_type(self) -> str:
        """Map type name accepted by the static map API."""
        return _MAP_TYPE_PROJECTIONS[self.value][1]

    @classmethod
    def resolve(cls, value: Any) -> "MapType":
        """Return the member for a code, falling back to MAP."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value in _MAP_TYPE_PROJECTIONS:
            return cls(value)
        if value:
            logger.debug("Unknown map type %r, using %r", value, cls.MAP.value)
        return cls.MAP


class FixedLinkText(BaseModel):
    """Literal text for the map link."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed"] = "fixed"
    text: str

    def __str__(self) -> str:
        return self.text


class UseAddress(BaseModel):
    """Use each item's own address as its link text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["use_address"] = "use_address"

    def __str__(self) -> str:
        return USE_ADDRESS


class FixedLanguage(BaseModel):
    """A language code passed straight to the map provider."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed"] = "fixed"
    code: str

    def resolve(self, ambient: str) -> str:
        """Escaped code, or the ambient language when the code is empty."""
        return check_plain(self.code) or ambient

    def summary_label(self) -> str:
        return check_plain(self.code) or DEFAULT_LANGCODE

    def __str__(self) -> str:
        return self.code


class PageLanguage(BaseModel):
    """Use the language of the page being rendered."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["page"] = "page"

    def resolve(self, ambient: str) -> str:
        return ambient

    def summary_label(self) -> str:
        return PAGE_LANGUAGE

    def __str__(self) -> str:
        return PAGE_LANGUAGE


LinkText = FixedLinkText | UseAddress
Language = FixedLanguage | PageLanguage


class FormatterSettings(BaseModel):
    """Resolved settings for the map formatter.

    Construct through ``with_defaults`` when starting from stored
    configuration; every loosely-typed stored value is normalized here so
    that rendering never has to guess.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    include_map: bool = True
    include_static_map: bool = False
    include_link: bool = False
    include_text: bool = False
    iframe_height: int = DEFAULT_DIMENSION
    iframe_width: int = DEFAULT_DIMENSION
    zoom_level: int = DEFAULT_ZOOM
    information_bubble: bool = True
    link_text: LinkText = FixedLinkText(text=DEFAULT_LINK_TEXT)
    map_type: MapType = MapType.MAP
    langcode: Language = FixedLanguage(code=DEFAULT_LANGCODE)

    @field_validator(
        "include_map",
        "include_static_map",
        "include_link",
        "include_text",
        "information_bubble",
        mode="before",
    )
    @classmethod
    def parse_flag(cls, value: Any) -> bool:
        return coerce_flag(value)

    @field_validator("iframe_height", "iframe_width", mode="before")
    @classmethod
    def parse_dimension(cls, value: Any) -> int:
        number = parse_int(value)
        if number is None or number < 1:
            logger.debug("Invalid map dimension %r, using %d", value, DEFAULT_DIMENSION)
            return DEFAULT_DIMENSION
        return number

    @field_validator("zoom_level", mode="before")
    @classmethod
    def parse_zoom(cls, value: Any) -> int:
        number = parse_int(value)
        if number is None:
            logger.debug("Invalid zoom level %r, using %d", value, DEFAULT_ZOOM)
            return DEFAULT_ZOOM
        return min(max(number, MIN_ZOOM), MAX_ZOOM)

    @field_validator("link_text", mode="before")
    @classmethod
    def parse_link_text(cls, value: Any) -> Any:
        """Parse the 'use_address' sentinel."""
        if isinstance(value, (FixedLinkText, UseAddress, dict)):
            return value
        if value is None:
            return FixedLinkText(text="")
        text = str(value)
        if text == USE_ADDRESS:
            return UseAddress()
        return FixedLinkText(text=text)

    @field_validator("map_type", mode="before")
    @classmethod
    def parse_map_type(cls, value: Any) -> MapType:
        return MapType.resolve(value)

    @field_validator("langcode", mode="before")
    @classmethod
    def parse_langcode(cls, value: Any) -> Any:
        """Parse the 'page' sentinel."""
        if isinstance(value, (FixedLanguage, PageLanguage, dict)):
            return value
        if value is None:
            return FixedLanguage(code="")
        code = str(value).strip()
        if code == PAGE_LANGUAGE:
            return PageLanguage()
        return FixedLanguage(code=code)

    @field_serializer("link_text", "langcode")
    def serialize_sentinel(self, value: FixedLinkText | UseAddress | FixedLanguage | PageLanguage) -> str:
        return str(value)

    @field_serializer("map_type")
    def serialize_map_type(self, value: MapType) -> str:
        return value.value

    @classmethod
    def with_defaults(cls, overrides: Mapping[str, Any] | None = None) -> "FormatterSettings":
        """Merge stored overrides over the defaults and normalize them."""
        data = {k: v for k, v in (overrides or {}).items() if v is not None}
        unknown = set(data) - set(cls.model_fields)
        if unknown:
            logger.debug("Ignoring unknown formatter settings: %s", ", ".join(sorted(unknown)))
        return cls.model_validate(data)

    def to_config(self) -> dict[str, Any]:
        """Return settings in their stored form, sentinels as strings."""
        return self.model_dump()

    @property
    def has_map_output(self) -> bool:
        """Whether any map (embedded, static or link) is rendered."""
        return self.include_map or self.include_static_map or self.include_link


class AddressItem(BaseModel):
    """One value of a multi-value address field."""

    model_config = ConfigDict(frozen=True)

    value: str
    delta: int = 0


class MapViewModel(BaseModel):
    """Template-ready data for rendering one address."""

    model_config = ConfigDict(frozen=True)

    delta: int
    include_map: bool
    include_static_map: bool
    include_link: bool
    include_text: bool
    width: int
    height: int
    url_suffix: str
    zoom: int
    information_bubble: bool
    link_text: str
    address_text: str
    map_type: str
    static_map_type: str
    langcode: str

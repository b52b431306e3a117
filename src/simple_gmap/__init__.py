"""Render one-line address fields as embedded maps."""

from .formatter import default_settings, settings_summary, view_elements
from .models import AddressItem, FormatterSettings, MapType, MapViewModel

__all__ = [
    "AddressItem",
    "FormatterSettings",
    "MapType",
    "MapViewModel",
    "default_settings",
    "settings_summary",
    "view_elements",
]

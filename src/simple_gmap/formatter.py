"""Map field formatter: defaults, settings summary and per-item view models."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any
from urllib.parse import quote_plus

from .models import (
    AddressItem,
    FormatterSettings,
    MapViewModel,
    UseAddress,
    check_plain,
)

logger = logging.getLogger(__name__)


def default_settings() -> dict[str, Any]:
    """Return the canonical default settings in stored form."""
    return FormatterSettings().to_config()


def resolve_settings(settings: FormatterSettings | Mapping[str, Any] | None) -> FormatterSettings:
    """Accept either resolved settings or a stored mapping of overrides."""
    if isinstance(settings, FormatterSettings):
        return settings
    return FormatterSettings.with_defaults(settings)


def settings_summary(settings: FormatterSettings | Mapping[str, Any] | None) -> list[str]:
    """Describe the active configuration for the admin display overview."""
    settings = resolve_settings(settings)
    summary: list[str] = []

    if settings.include_map:
        summary.append(f"Dynamic map: {settings.iframe_width} x {settings.iframe_height}")
    if settings.include_static_map:
        summary.append(f"Static map: {settings.iframe_width} x {settings.iframe_height}")
    if settings.include_link:
        summary.append(f"Map link: {check_plain(str(settings.link_text))}")

    if settings.has_map_output:
        bubble = "Yes" if settings.information_bubble else "No"
        summary.append(f"Map Type: {settings.map_type.label}")
        summary.append(f"Zoom Level: {settings.zoom_level}")
        summary.append(f"Information Bubble: {bubble}")
        summary.append(f"Language: {settings.langcode.summary_label()}")

    if settings.include_text:
        summary.append("Original text displayed")

    return summary


def _clean_text(text: str) -> str:
    """Replace lone surrogates, which cannot be URL-encoded, with '?'."""
    return text.encode("utf-8", errors="replace").decode("utf-8")


def _as_items(items: Iterable[AddressItem | str | None]) -> tuple[AddressItem, ...]:
    result = []
    for delta, item in enumerate(items):
        if isinstance(item, AddressItem):
            value = _clean_text(item.value)
            result.append(item if value == item.value else item.model_copy(update={"value": value}))
        else:
            result.append(AddressItem(value=_clean_text(item or ""), delta=delta))
    return tuple(result)


class MapElements:
    """View models for one field render.

    Iterating yields one ``MapViewModel`` per address item in input order.
    Models are built on demand and the sequence can be iterated again.
    """

    def __init__(
        self,
        settings: FormatterSettings,
        items: Iterable[AddressItem | str | None],
        langcode: str,
    ) -> None:
        self.settings = settings
        self.items = _as_items(items)
        self.langcode = langcode

        # Values shared by every item
        self._link_text = check_plain(str(settings.link_text)) if settings.include_link else ""
        self.resolved_langcode = settings.langcode.resolve(langcode)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[MapViewModel]:
        for item in self.items:
            yield self.build(item)

    def build(self, item: AddressItem) -> MapViewModel:
        """Build the view model for a single address item."""
        settings = self.settings
        url_value = quote_plus(item.value)
        address_value = check_plain(item.value)

        link_text = self._link_text
        if settings.include_link and isinstance(settings.link_text, UseAddress):
            link_text = address_value

        return MapViewModel(
            delta=item.delta,
            include_map=settings.include_map,
            include_static_map=settings.include_static_map,
            include_link=settings.include_link,
            include_text=settings.include_text,
            width=settings.iframe_width,
            height=settings.iframe_height,
            url_suffix=url_value,
            zoom=settings.zoom_level,
            information_bubble=settings.information_bubble,
            link_text=link_text,
            address_text=address_value if settings.include_text else "",
            map_type=settings.map_type.value,
            static_map_type=settings.map_type.static_type,
            langcode=self.resolved_langcode,
        )


def view_elements(
    settings: FormatterSettings | Mapping[str, Any] | None,
    items: Iterable[AddressItem | str | None],
    langcode: str,
) -> MapElements:
    """Build the view models for every address in a field."""
    settings = resolve_settings(settings)
    elements = MapElements(settings, items, langcode)
    logger.debug(
        "Rendering %d address item(s) with map type %r, language %r",
        len(elements),
        settings.map_type.value,
        elements.resolved_langcode,
    )
    return elements

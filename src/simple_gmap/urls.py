"""Map provider URL builders for rendered view models.

These mirror the URLs the output template embeds: an iframe for the
dynamic map, an image source for the static map and a plain link to a
larger map. ``url_suffix`` is already percent-encoded by the formatter.
"""

from .models import MapViewModel

MAPS_URL = "https://maps.google.com/maps"
STATIC_MAP_URL = "https://maps.googleapis.com/maps/api/staticmap"

# Opens the marker's information bubble on load
_BUBBLE_PARAM = "&iwloc=A"


def embed_url(vm: MapViewModel) -> str:
    """Return the iframe source for the embedded dynamic map."""
    url = (
        f"{MAPS_URL}?q={vm.url_suffix}&output=embed"
        f"&z={vm.zoom}&t={vm.map_type}&hl={vm.langcode}"
    )
    if vm.information_bubble:
        url += _BUBBLE_PARAM
    return url


def static_map_url(vm: MapViewModel) -> str:
    """Return the image source for the static map."""
    return (
        f"{STATIC_MAP_URL}?size={vm.width}x{vm.height}&zoom={vm.zoom}"
        f"&language={vm.langcode}&maptype={vm.static_map_type}"
        f"&markers=color:red|{vm.url_suffix}"
    )


def link_url(vm: MapViewModel) -> str:
    """Return the target of the 'larger map' link."""
    url = f"{MAPS_URL}?q={vm.url_suffix}&hl={vm.langcode}&t={vm.map_type}&z={vm.zoom}"
    if vm.information_bubble:
        url += _BUBBLE_PARAM
    return url


def element_urls(vm: MapViewModel) -> dict[str, str]:
    """Return the URLs for every output the view model enables."""
    urls: dict[str, str] = {}
    if vm.include_map:
        urls["embed"] = embed_url(vm)
    if vm.include_static_map:
        urls["static"] = static_map_url(vm)
    if vm.include_link:
        urls["link"] = link_url(vm)
    return urls

"""Pytest configuration and fixtures for simple-gmap tests."""

from pathlib import Path

import pytest


@pytest.fixture
def sample_display() -> str:
    """Return a sample display configuration YAML content."""
    return """id: node.place.default
targetEntityType: node
bundle: place
mode: default
content:
  field_address:
    type: simple_gmap
    label: above
    weight: 1
    region: content
    settings:
      include_map: "1"
      include_static_map: "0"
      include_link: "1"
      include_text: "1"
      iframe_height: "300"
      iframe_width: "400"
      zoom_level: "10"
      information_bubble: "0"
      link_text: use_address
      map_type: k
      langcode: page
    third_party_settings: {}
  title:
    type: string
    label: hidden
    weight: 0
    settings:
      link_to_entity: false
hidden:
  links: true
"""


@pytest.fixture
def display_file(tmp_path: Path, sample_display: str) -> Path:
    """Write the sample display configuration to a temporary file."""
    path = tmp_path / "core.entity_view_display.node.place.default.yml"
    path.write_text(sample_display)
    return path


@pytest.fixture
def scenario_settings() -> dict:
    """Stored settings for the end-to-end rendering scenario."""
    return {
        "include_map": True,
        "include_static_map": False,
        "include_link": True,
        "include_text": True,
        "iframe_height": 300,
        "iframe_width": 400,
        "zoom_level": 10,
        "information_bubble": False,
        "link_text": "use_address",
        "map_type": "k",
        "langcode": "page",
    }

"""Display configuration: which fields render as maps, and with what settings."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import FORMATTER_ID, FormatterSettings

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a display configuration file cannot be used."""

    pass


class FieldDisplay(BaseModel):
    """Formatter configuration for one field of a display."""

    model_config = ConfigDict(extra="allow")

    type: str
    label: str = "above"
    weight: int = 0
    region: str | None = None
    settings: dict[str, Any] = Field(default_factory=dict)
    third_party_settings: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_map(self) -> bool:
        return self.type == FORMATTER_ID

    def resolved_settings(self) -> FormatterSettings:
        """Stored settings merged over the formatter defaults."""
        return FormatterSettings.with_defaults(self.settings)


class DisplayConfig(BaseModel):
    """An entity view display: field name to formatter configuration."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    content: dict[str, FieldDisplay] = Field(default_factory=dict)
    hidden: dict[str, bool] = Field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "DisplayConfig":
        """Load a display configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read display configuration {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Display configuration {path} must be a mapping")

        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid display configuration {path}: {e}") from e

        logger.debug(
            "Loaded %s with %d map field(s)", path, len(config.map_fields())
        )
        return config

    def save(self, path: Path) -> None:
        """Save the display configuration to a YAML file."""
        data = self.model_dump(exclude_none=True)
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    # --- Query methods ---

    def get_field(self, name: str) -> FieldDisplay | None:
        """Get the display configuration of a field."""
        return self.content.get(name)

    def map_fields(self) -> dict[str, FieldDisplay]:
        """Fields rendered with the map formatter, in display order."""
        return {name: display for name, display in self.content.items() if display.is_map}

    def field_settings(self, name: str) -> FormatterSettings:
        """Resolved map settings of a field, raising if it is not a map field."""
        display = self.get_field(name)
        if display is None:
            raise ConfigError(f"Field not found in display: {name}")
        if not display.is_map:
            raise ConfigError(f"Field {name} uses formatter '{display.type}', not '{FORMATTER_ID}'")
        return display.resolved_settings()

    # --- Mutation methods ---

    def set_field_settings(self, name: str, settings: FormatterSettings) -> None:
        """Store map settings for a field, adding the field if needed."""
        display = self.get_field(name)
        if display is None:
            self.content[name] = FieldDisplay(type=FORMATTER_ID, settings=settings.to_config())
            return
        display.type = FORMATTER_ID
        display.settings = settings.to_config()

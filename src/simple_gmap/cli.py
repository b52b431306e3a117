"""CLI for the simple-gmap map formatter."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable

import click
import yaml

from .config import ConfigError, DisplayConfig
from .form import SettingsFormError, settings_form, validate_settings_form
from .formatter import default_settings, settings_summary, view_elements
from .models import FormatterSettings
from .output import print_elements, print_form, print_form_issues, print_summary
from .urls import element_urls


def settings_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that needs formatter settings."""
    func = click.option(
        "--set", "overrides", multiple=True, metavar="KEY=VALUE",
        help="Override a setting (repeatable)",
    )(func)
    func = click.option("--field", help="Field name in the display configuration")(func)
    func = click.option(
        "--config", "-c", "config_path",
        type=click.Path(exists=True, path_type=Path),
        help="Path to a display configuration YAML file",
    )(func)
    return func


def parse_overrides(overrides: tuple[str, ...]) -> dict[str, str]:
    """Parse KEY=VALUE pairs from the command line."""
    parsed: dict[str, str] = {}
    for override in overrides:
        if "=" not in override:
            raise click.BadParameter(f"Expected KEY=VALUE, got '{override}'", param_hint="--set")
        key, value = override.split("=", 1)
        parsed[key.strip()] = value
    return parsed


def load_settings(
    config_path: Path | None,
    field: str | None,
    overrides: tuple[str, ...],
) -> FormatterSettings:
    """Resolve settings from a display file and command line overrides.

    Exits with code 2 if the configuration cannot be used.
    """
    stored: dict[str, Any] = {}

    if config_path:
        try:
            display = DisplayConfig.load(config_path)
            if not field:
                map_fields = list(display.map_fields())
                if len(map_fields) != 1:
                    click.echo(
                        f"Error: {config_path} has {len(map_fields)} map field(s), use --field",
                        err=True,
                    )
                    sys.exit(2)
                field = map_fields[0]
            stored = display.field_settings(field).to_config()
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(2)
    elif field:
        click.echo("Error: --field requires --config", err=True)
        sys.exit(2)

    stored.update(parse_overrides(overrides))
    return FormatterSettings.with_defaults(stored)


@click.group()
@click.version_option(package_name="simple-gmap")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Simple GMap - Render one-line addresses as embedded maps."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
def defaults() -> None:
    """Print the default formatter settings."""
    click.echo(yaml.dump(default_settings(), default_flow_style=False, sort_keys=False), nl=False)


@main.command()
@settings_options
def summary(config_path: Path | None, field: str | None, overrides: tuple[str, ...]) -> None:
    """Summarize the formatter settings."""
    settings = load_settings(config_path, field, overrides)
    print_summary(settings_summary(settings))


@main.command()
@click.argument("addresses", nargs=-1)
@click.option("--langcode", "-l", default="en", show_default=True, help="Language of the current page")
@click.option("--json", "output_json", is_flag=True, help="Output in JSON format")
@settings_options
def render(
    addresses: tuple[str, ...],
    langcode: str,
    output_json: bool,
    config_path: Path | None,
    field: str | None,
    overrides: tuple[str, ...],
) -> None:
    """Render view models for one or more addresses."""
    settings = load_settings(config_path, field, overrides)
    elements = view_elements(settings, addresses, langcode)

    if output_json:
        result = [{**vm.model_dump(), "urls": element_urls(vm)} for vm in elements]
        click.echo(json.dumps(result, indent=2))
    else:
        print_elements(elements)


@main.command()
@settings_options
def form(config_path: Path | None, field: str | None, overrides: tuple[str, ...]) -> None:
    """Show the settings form with its current values."""
    settings = load_settings(config_path, field, overrides)
    print_form(settings_form(settings))


@main.command()
@click.option(
    "--config", "-c", "config_path", required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Path to a display configuration YAML file",
)
def validate(config_path: Path) -> None:
    """Validate the stored settings of every map field."""
    try:
        display = DisplayConfig.load(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    map_fields = display.map_fields()
    if not map_fields:
        click.echo("No map fields found")
        sys.exit(0)

    failed = 0
    for name, field_display in map_fields.items():
        try:
            validate_settings_form(field_display.settings)
        except SettingsFormError as e:
            failed += 1
            print_form_issues(name, e.issues)

    if failed:
        click.echo(f"\n{failed} field(s) have invalid settings", err=True)
        sys.exit(1)

    click.echo(f"✓ {len(map_fields)} map field(s) valid")
    sys.exit(0)


if __name__ == "__main__":
    main()

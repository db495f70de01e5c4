"""Settings related commands: presets and the stored configuration."""

from __future__ import annotations

import tomli_w
import typer

from logalyzer.config import get_config_path, load_config, settings_to_dict
from logalyzer.presets import PresetName, describe, get_preset

settings_app = typer.Typer(help="Inspect log format presets and stored settings.")


@settings_app.command("presets")
def presets() -> None:
    """List the built-in log format presets."""
    for name in PresetName:
        pattern = get_preset(name).pattern or "(your own regex)"
        typer.echo(f"{name.value:<10} {describe(name):<34} {pattern}")


@settings_app.command("path")
def config_path() -> None:
    """Print where settings are stored."""
    typer.echo(str(get_config_path()))


@settings_app.command("show")
def config_show() -> None:
    """Print the effective settings as TOML."""
    typer.echo(tomli_w.dumps(settings_to_dict(load_config())))

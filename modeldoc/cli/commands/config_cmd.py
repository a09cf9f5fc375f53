"""Configuration management commands."""

import dataclasses
import json
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console

from modeldoc.core.config.loader import load_config
from modeldoc.core.exceptions import ConfigurationError, ResourceNotFoundError

app = typer.Typer(help="Configuration management commands")
console = Console()


@app.command("show")
def show_config(
    key: Annotated[str | None, typer.Argument(help="Show only this key")] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to TOML configuration file"),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output JSON instead of YAML")] = False,
) -> None:
    """Show the effective configuration or a specific key."""
    try:
        loaded = load_config(config)
    except (FileNotFoundError, ConfigurationError) as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1) from e

    data = dataclasses.asdict(loaded)
    data["settings"] = {
        **loaded.settings.model_dump(mode="json"),
        "record_time": loaded.settings.record_time,
    }
    data["modules"] = list(loaded.modules)

    if key is not None:
        if key not in data:
            error = ResourceNotFoundError("configuration key", key, list(data))
            console.print(f"[red]✗[/red] {error}")
            raise typer.Exit(1)
        data = {key: data[key]}

    if as_json:
        typer.echo(json.dumps(data, indent=2, default=str))
    else:
        typer.echo(yaml.safe_dump(data, sort_keys=False))

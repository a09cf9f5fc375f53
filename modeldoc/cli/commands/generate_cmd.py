"""Generate the model documentation file."""

import dataclasses
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from modeldoc.api.documentation import generate_from_config, write_document
from modeldoc.core.config.loader import load_config
from modeldoc.core.config.models import ModelDocConfig
from modeldoc.core.diagnostics import DiagnosticLog
from modeldoc.core.docs.models import DocumentSet
from modeldoc.core.exceptions import ConfigurationError, ModelDocError, TypeUniverseError
from modeldoc.core.logging import configure_logging

console = Console()


def generate(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to TOML configuration file (pyproject.toml or modeldoc.toml)",
        ),
    ] = None,
    module: Annotated[
        list[str] | None,
        typer.Option("--module", "-m", help="Module or package to scan (repeatable)"),
    ] = None,
    universe: Annotated[
        Path | None,
        typer.Option("--universe", "-u", help="JSON/YAML type universe description"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Where to write the document"),
    ] = None,
    no_record_time: Annotated[
        bool,
        typer.Option("--no-record-time", help="Write 0 instead of the capture time"),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", min=1, help="Threads used to resolve models"),
    ] = None,
) -> None:
    """Document every model of the project and write the JSON document.

    Problems with individual models are reported and the model is left out;
    only configuration errors and a broken type universe fail the command.

    Examples:
        modeldoc generate
        modeldoc generate --module myproject.models --output docs/models.json
        modeldoc generate --universe universe.yaml --no-record-time
    """
    options = ctx.obj or {}

    try:
        loaded = load_config(config)
    except FileNotFoundError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] Invalid configuration: {e}")
        raise typer.Exit(1) from e

    effective = _apply_overrides(loaded, module, universe, output, no_record_time, workers)

    if options.get("log_level") is None:
        configure_logging(
            level=effective.logging.level,
            format=effective.logging.format,
            output_file=effective.logging.output_file,
            use_color=effective.logging.use_color,
            include_timestamp=effective.logging.include_timestamp,
        )

    diagnostics = DiagnosticLog()
    try:
        document_set = generate_from_config(effective, diagnostics)
    except TypeUniverseError as e:
        console.print(f"[red]✗[/red] Could not build the type universe: {e}")
        raise typer.Exit(1) from e
    except ModelDocError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1) from e

    path = write_document(document_set, effective.output)

    if not options.get("quiet"):
        _print_summary(document_set, diagnostics)
    console.print(f"[green]✓[/green] Wrote {len(document_set.elements)} models to {path}")


def _apply_overrides(
    config: ModelDocConfig,
    module: list[str] | None,
    universe: Path | None,
    output: Path | None,
    no_record_time: bool,
    workers: int | None,
) -> ModelDocConfig:
    changes: dict = {}
    if module:
        changes["modules"] = tuple(module)
        changes["universe"] = None
    if universe is not None:
        changes["universe"] = str(universe)
    if output is not None:
        changes["output"] = str(output)
    if workers is not None:
        changes["workers"] = workers
    if no_record_time:
        changes["settings"] = config.settings.model_copy(update={"record_time": False})
    return dataclasses.replace(config, **changes) if changes else config


def _print_summary(document_set: DocumentSet, diagnostics: DiagnosticLog) -> None:
    table = Table(title="Documented Models", show_header=True, header_style="bold magenta")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Group", style="yellow")
    table.add_column("Parameters", justify="right")

    for element in document_set.elements:
        table.add_row(element.type, element.name, element.group, str(len(element.parameters)))
    console.print(table)

    if len(diagnostics):
        errors = sum(1 for entry in diagnostics if entry.severity == "error")
        console.print(
            f"[yellow]![/yellow] {len(diagnostics)} diagnostics ({errors} errors); "
            "see the log for details"
        )

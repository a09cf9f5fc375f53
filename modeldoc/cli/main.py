"""modeldoc CLI - Main entrypoint."""

import typer
from rich.console import Console

from modeldoc.cli.commands import config_cmd, generate_cmd
from modeldoc.core.logging import configure_logging

# Create the main Typer app
app = typer.Typer(
    name="modeldoc",
    help="modeldoc - Generate documentation for the models of a project.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

# Create console for rich output
console = Console()

# Add subcommands
app.command("generate", help="Generate the model documentation file")(generate_cmd.generate)
app.add_typer(config_cmd.app, name="config", help="Configuration management")


def _version() -> str:
    from modeldoc import __version__

    return __version__


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    *,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Suppress non-error output"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable verbose logging"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level: debug|info|warning|error"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
    ),
) -> None:
    """modeldoc CLI - Model documentation generator.

    Global flags are parsed here and stored on `ctx.obj` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    # Compute effective log level; None leaves it to the configuration file
    effective_level = log_level
    if quiet:
        effective_level = "error"
    elif verbose:
        effective_level = "debug"

    ctx.obj.update({
        "quiet": quiet,
        "verbose": verbose,
        "log_level": effective_level.upper() if effective_level else None,
    })

    if effective_level is not None:
        configure_logging(level=effective_level.upper(), format="console")  # type: ignore[arg-type]

    # Version short-circuit
    if version:
        console.print(f"[bold blue]modeldoc[/bold blue] version [green]{_version()}[/green]")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()

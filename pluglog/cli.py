# pluglog/cli.py
"""
pluglog CLI.

Commands:
    pluglog parse LEVEL                 Check a level name, print its canonical form
    pluglog levels [--spec] [--config]  Show effective module levels
    pluglog emit MODULE MESSAGE         Write one line through the built-in logger

Level specs use the PLUGLOG_LEVEL syntax, e.g. "info:svc=debug:db=warning".
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from pluglog.config import ConfigError, apply_config, load_logging_config, parse_level_spec
from pluglog.deflog import switch_output
from pluglog.levels import Level, LevelParseError, parse_level, parse_string
from pluglog.provider import LoggingContext

app = typer.Typer(
    name="pluglog",
    help="pluglog - per-module logging levels and caller info.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()


def _build_context(spec: Optional[str], config: Optional[Path]) -> LoggingContext:
    """Fresh context with the config file applied first, then the level spec."""
    context = LoggingContext()
    try:
        if config is not None:
            apply_config(load_logging_config(config), context)
        if spec:
            overrides = parse_level_spec(spec)
            if "default_level" not in overrides.model_fields_set:
                overrides = overrides.model_copy(
                    update={"default_level": context.registry.default_level}
                )
            apply_config(overrides, context)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    return context


@app.command("parse")
def parse(level: str = typer.Argument(..., help="Level name, any casing.")) -> None:
    """Print the canonical name of a level."""
    try:
        parsed = parse_level(level)
    except LevelParseError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    typer.echo(parse_string(parsed))


@app.command("levels")
def levels(
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help="Level spec to apply."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),
) -> None:
    """Show the default level and every configured module."""
    context = _build_context(spec, config)
    registry = context.registry

    configured = registry.get_all_levels()
    table = Table(title=f"Default level: {parse_string(registry.default_level)}")
    table.add_column("Module", style="cyan")
    table.add_column("Level")
    table.add_column("Caller info", style="dim")

    for module in sorted(configured):
        shown = [
            parse_string(level)
            for level in Level
            if registry.is_caller_info_enabled(module, level)
        ]
        table.add_row(module, parse_string(configured[module]), ", ".join(shown) or "-")

    console.print(table)


@app.command("emit")
def emit(
    module: str = typer.Argument(..., help="Module name."),
    message: str = typer.Argument(..., help="Message to log."),
    level: str = typer.Option("info", "--level", "-l", help="Level to log at."),
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help="Level spec to apply."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),
) -> None:
    """Log one message, filtered by the configured levels."""
    try:
        parsed = parse_level(level)
    except LevelParseError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    context = _build_context(spec, config)
    logger = context.new(module)
    switch_output(logger, sys.stdout)
    getattr(logger, parsed.name.lower())(message)

    if not context.registry.is_enabled_for(module, parsed):
        console.print(
            f"[dim]{parse_string(parsed)} is disabled for {module!r} "
            f"(level {parse_string(context.registry.get_level(module))})[/dim]"
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()

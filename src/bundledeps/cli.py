"""CLI interface for bundledeps using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from bundledeps import __description__, __version__
from bundledeps.config import BundleDepsConfig, LogLevel, OutputFormat, load_config
from bundledeps.exceptions import BundleDepsError
from bundledeps.graph import MermaidRenderer, build_dependency_map
from bundledeps.models import load_bundle
from bundledeps.validation import ValidationFramework, ValidationResult
from bundledeps.validation.checks import check_has_base_module

app = typer.Typer(
    name="bundledeps",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"bundledeps version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """bundledeps - Dependency graph validation for multi-module bundles."""


def _configure_logging(config: BundleDepsConfig, verbose: bool) -> None:
    level = LogLevel.DEBUG if verbose else config.logging.level
    logging.basicConfig(level=level.logging_level, format="%(levelname)s %(name)s: %(message)s")


def _load_config_or_exit(config: Optional[Path]) -> BundleDepsConfig:
    try:
        return load_config(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _print_markdown(result: ValidationResult) -> None:
    console.print("# Validation Report")
    console.print(f"**Status:** {result.status.value}")
    console.print(f"**Exit Code:** {result.exit_code}")
    console.print()

    if result.counters:
        console.print("## Counters")
        for key, value in result.counters.items():
            console.print(f"- {key}: {value}")
        console.print()

    if result.issues:
        console.print("## Issues")
        for issue in result.issues:
            console.print(f"- **{issue.severity.value.upper()}** {issue.rule} ({issue.kind}): {issue.message}")


def _print_table(result: ValidationResult) -> None:
    status_color = "green" if result.status.value == "pass" else "red"
    console.print(f"[{status_color}]Validation Status: {result.status.value.upper()}[/{status_color}]")
    console.print(f"Exit Code: {result.exit_code}")

    if result.counters:
        console.print("\n[blue]Counters:[/blue]")
        counter_table = Table()
        counter_table.add_column("Metric", style="cyan")
        counter_table.add_column("Count", style="white", justify="right")

        for key, value in sorted(result.counters.items()):
            counter_table.add_row(key.replace("_", " ").title(), str(value))

        console.print(counter_table)

    if result.issues:
        console.print("\n[blue]Issues Found:[/blue]")
        issues_table = Table()
        issues_table.add_column("Rule", style="cyan")
        issues_table.add_column("Kind", style="white")
        issues_table.add_column("Message", style="white")

        for issue in result.issues:
            issues_table.add_row(issue.rule, f"[red]{issue.kind}[/red]", issue.message)

        console.print(issues_table)
    else:
        console.print("\n[green]No issues found![/green]")


@app.command()
def validate(
    descriptor: Annotated[
        Path,
        typer.Argument(help="Path to the bundle descriptor (JSON)")
    ],
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: from config)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .bundledeps.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """Validate the module dependency graph of a bundle."""
    bundle_config = _load_config_or_exit(config)
    _configure_logging(bundle_config, verbose)

    valid_formats = [f.value for f in OutputFormat]
    output_format = format or bundle_config.output.format.value
    if output_format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{output_format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    try:
        bundle = load_bundle(descriptor)
    except BundleDepsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if output_format != OutputFormat.JSON.value:
        console.print(f"[green]Validating bundle:[/green] {bundle.bundle or descriptor}")

    framework = ValidationFramework(bundle_config)
    framework.create_default_rules()
    result = framework.validate(bundle.to_modules(bundle_config.validation.base_module_name))

    if output_format == OutputFormat.JSON.value:
        typer.echo(jsonlib.dumps(result.to_dict(), indent=2))
    elif output_format == OutputFormat.MARKDOWN.value:
        _print_markdown(result)
    else:
        _print_table(result)

    raise typer.Exit(result.exit_code)


@app.command()
def graph(
    descriptor: Annotated[
        Path,
        typer.Argument(help="Path to the bundle descriptor (JSON)")
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the diagram to this file instead of stdout")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .bundledeps.json)")
    ] = None,
) -> None:
    """Render the module dependency graph as a Mermaid diagram."""
    bundle_config = _load_config_or_exit(config)
    _configure_logging(bundle_config, verbose=False)
    base_module_name = bundle_config.validation.base_module_name

    try:
        bundle = load_bundle(descriptor)
        modules = bundle.to_modules(base_module_name)
        check_has_base_module(modules, base_module_name)
        dependency_map = build_dependency_map(modules)
    except BundleDepsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    diagram = MermaidRenderer().render(dependency_map, modules, title=bundle.bundle)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(diagram, encoding="utf-8")
        console.print(f"[green]Diagram written:[/green] {output}")
    else:
        typer.echo(diagram, nl=False)


if __name__ == "__main__":
    app()

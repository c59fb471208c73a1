"""
lambda-graphql command line interface.

Commands for generating the AppSync schema and resolver manifest from an IR
document, and for checking a document without writing anything.
"""

from __future__ import annotations

import logging
import os
import platform
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ._version import get_version
from .config import CONFIG_FILE_NAME, GeneratorConfig, load_generator_config
from .core import scalars
from .core.diagnostics import Diagnostic, DiagnosticBag, Severity
from .core.errors import LambdaGraphQLError
from .core.loader import ExtractionReport, load_schema_document
from .generators import GeneratedArtifacts, generate_artifacts
from .writer import write_artifacts

LOG_LEVEL_ENV = "LAMBDA_GRAPHQL_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

app = typer.Typer(
    name="lambda-graphql",
    help="Generate AppSync GraphQL schemas and resolver manifests",
    no_args_is_help=True,
)

console = Console()

_SEVERITY_STYLES = {
    Severity.INFO: "dim",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING")
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        console.print(f"lambda-graphql {get_version()}")
        console.print(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
) -> None:
    """lambda-graphql CLI main callback for global options."""
    pass


def _load_config(ir_file: Path, config_path: Path | None, strict: bool) -> GeneratorConfig:
    config = load_generator_config(config_path or ir_file.parent / CONFIG_FILE_NAME)
    if strict:
        config = config.model_copy(update={"strict_data_sources": True})
    return config


def _print_diagnostics(diagnostics: list[Diagnostic]) -> None:
    if not diagnostics:
        return

    table = Table(title="Diagnostics")
    table.add_column("Code", style="cyan")
    table.add_column("Severity")
    table.add_column("Problem")
    table.add_column("Location")
    table.add_column("Message")

    for d in diagnostics:
        style = _SEVERITY_STYLES[d.severity]
        table.add_row(
            d.code.value,
            f"[{style}]{d.severity.value}[/{style}]",
            d.title,
            escape(d.location or "-"),
            escape(d.message),
        )

    console.print(table)
    console.print()


def _print_summary(report: ExtractionReport) -> None:
    schema = report.schema
    console.print(f"  Types: {len(schema.types)}")
    console.print(f"  Operations: {len(schema.operations)}")
    if schema.root_types:
        console.print(f"  Roots: {', '.join(root.value for root in schema.root_types)}")
    if report.excluded_count:
        console.print(f"  [yellow]Excluded: {report.excluded_count}[/yellow]")
    console.print()


def _fail(error: LambdaGraphQLError) -> typer.Exit:
    console.print(f"\n[red]Error:[/red] {escape(str(error))}")
    return typer.Exit(1)


@app.command(name="generate")
def generate(
    ir_file: Annotated[
        Path,
        typer.Argument(
            help="IR document (YAML or JSON) describing types and operations",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory (defaults to output_directory from config)",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help=f"Config file (defaults to {CONFIG_FILE_NAME} next to the IR document)",
        ),
    ] = None,
    timestamp: Annotated[
        datetime | None,
        typer.Option(
            "--timestamp",
            help="Fixed generatedAt value for reproducible manifests",
            formats=["%Y-%m-%dT%H:%M:%SZ", "%Y-%m-%dT%H:%M:%S"],
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail when one data source name is backed by different functions",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Preview what would be generated without writing files",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """
    Generate schema.graphql and resolvers.json from an IR document.

    Example:
        lambda-graphql generate api.yaml -o build/graphql
    """
    _configure_logging(verbose)
    console.print("\n[bold]lambda-graphql[/bold] - Generating AppSync artifacts\n")

    try:
        config = _load_config(ir_file, config_path, strict)
        with console.status("Loading IR document..."):
            report = load_schema_document(ir_file)
        _print_summary(report)
        if report.schema.is_empty:
            console.print("[yellow]IR document declares no types or operations[/yellow]\n")

        with console.status("Generating schema and manifest..."):
            artifacts = generate_artifacts(report.schema, config, timestamp)
    except LambdaGraphQLError as e:
        raise _fail(e) from e

    _print_diagnostics(report.diagnostics + artifacts.diagnostics)

    output_dir = output or Path(config.output_directory)
    if dry_run:
        console.print("[yellow]DRY RUN - No files will be written[/yellow]\n")
        console.print("[bold]Would generate:[/bold]")
        for name, content in _named_outputs(artifacts, config):
            console.print(f"  - {output_dir / name} ({len(content)} bytes)")
        return

    try:
        result = write_artifacts(artifacts, output_dir, config)
    except LambdaGraphQLError as e:
        raise _fail(e) from e

    if not result.success:
        console.print("\n[red]Write failed:[/red]")
        for error in result.errors:
            console.print(f"  - {escape(error)}")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]Generated {len(result.files_created)} files[/green]\n\n"
            + "\n".join(f"[cyan]{escape(str(path))}[/cyan]" for path in result.files_created),
            title="Success",
        )
    )


def _named_outputs(artifacts: GeneratedArtifacts, config: GeneratorConfig) -> list[tuple[str, str]]:
    return [
        (config.schema_file_name, artifacts.sdl),
        (config.resolver_file_name, artifacts.manifest),
    ]


@app.command(name="check")
def check(
    ir_file: Annotated[
        Path,
        typer.Argument(
            help="IR document (YAML or JSON) describing types and operations",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """
    Load and generate without writing; report every diagnostic.

    Exits with status 1 when any warning or error was reported.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(ir_file, config_path, strict=False)
        report = load_schema_document(ir_file)
        artifacts = generate_artifacts(report.schema, config)
    except LambdaGraphQLError as e:
        raise _fail(e) from e

    _print_summary(report)
    bag = DiagnosticBag(report.diagnostics + artifacts.diagnostics)
    _print_diagnostics(bag.items)

    if bag.has_warnings:
        errors = len(bag.by_severity(Severity.ERROR))
        warnings = len(bag.by_severity(Severity.WARNING))
        console.print(
            f"[yellow]Check finished with {errors} error(s) and {warnings} warning(s)[/yellow]"
        )
        raise typer.Exit(1)
    console.print("[green]No problems found[/green]")


@app.command(name="scalars")
def list_scalars() -> None:
    """List the AppSync scalars and the source types mapped to them."""
    table = Table(title="AWS AppSync Scalars")
    table.add_column("Scalar", style="cyan")
    table.add_column("Source types")

    for scalar in scalars.SUPPORTED_AWS_SCALARS:
        sources = scalars.source_types_for(scalar)
        table.add_row(scalar, ", ".join(sources) if sources else "[dim]override only[/dim]")

    ids = scalars.source_types_for("ID")
    if ids:
        table.add_row("ID", ", ".join(ids))

    console.print(table)


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()

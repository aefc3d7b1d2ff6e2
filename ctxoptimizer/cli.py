"""CLI entry point for ctxoptimizer."""

from __future__ import annotations

import enum
import json
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from ctxoptimizer.catalog import build_catalog
from ctxoptimizer.discovery import discover_files
from ctxoptimizer.models import ConfigError, SelectionConfig
from ctxoptimizer.ranking import get_optimal_context
from ctxoptimizer.summary import export_context, generate_context_summary
from ctxoptimizer.toon import encode

DEFAULT_QUERY = "main function"
DEFAULT_OUTPUT = Path("context_output.json")
# The command line uses a tighter budget than the library default.
CLI_DEFAULT_MAX_TOKENS = 50_000


class OutputFormat(str, enum.Enum):
    JSON = "json"
    TOON = "toon"


def _load_config(config_path: Path | None) -> SelectionConfig:
    """Read a JSON configuration file on top of the CLI defaults."""
    defaults = SelectionConfig(max_tokens=CLI_DEFAULT_MAX_TOKENS)
    if config_path is None:
        return defaults
    try:
        data = json.loads(config_path.read_text("utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"could not read {config_path}: {exc}") from exc
    return SelectionConfig.from_mapping(data, defaults)


def _merge_options(config: SelectionConfig, **options: object) -> SelectionConfig:
    """Override config fields with the options given on the command line."""
    overrides = {name: value for name, value in options.items() if value is not None}
    return replace(config, **overrides)


app = typer.Typer(
    name="ctxoptimizer",
    help="Select the files of a repository most relevant to a query.",
    no_args_is_help=False,
)


@app.command()
def main(
    root: Annotated[
        Path,
        typer.Argument(
            help="Project root directory.",
            exists=True,
            file_okay=False,
            resolve_path=True,
        ),
    ] = Path("."),
    query: Annotated[
        str,
        typer.Argument(help="What you are working on, in free text."),
    ] = DEFAULT_QUERY,
    max_tokens: Annotated[
        int | None,
        typer.Option(
            "--max-tokens",
            "-t",
            min=0,
            help=f"Token budget for the selection (default: {CLI_DEFAULT_MAX_TOKENS}).",
        ),
    ] = None,
    min_files: Annotated[
        int | None,
        typer.Option(
            "--min-files",
            "-m",
            min=0,
            help="Always select at least this many files (default: 3).",
        ),
    ] = None,
    max_file_size: Annotated[
        int | None,
        typer.Option(
            "--max-file-size",
            min=1,
            help="Skip files larger than this many bytes (default: 1MB).",
        ),
    ] = None,
    context_files: Annotated[
        list[str] | None,
        typer.Option(
            "--context-file",
            "-c",
            help="Path (relative to root) already known to be relevant; repeatable.",
        ),
    ] = None,
    ignore: Annotated[
        list[str] | None,
        typer.Option(
            "--ignore",
            help="Additional gitignore-style pattern to exclude; repeatable.",
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="JSON file with maxTokens, minFiles, maxFileSize, contextFiles.",
        ),
    ] = None,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Where to write the exported context."),
    ] = DEFAULT_OUTPUT,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", help="Export format."),
    ] = OutputFormat.JSON,
    fast: Annotated[
        bool,
        typer.Option(
            "--fast",
            help="Experimental: read files in parallel for faster scanning.",
        ),
    ] = False,
) -> None:
    """Scan a project, select context for a query, and export it."""
    try:
        config = _load_config(config_file)
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    config = _merge_options(
        config,
        max_tokens=max_tokens,
        min_files=min_files,
        max_file_size=max_file_size,
        context_files=tuple(context_files) if context_files else None,
    )

    typer.echo(f'Analyzing project for query: "{query}"', err=True)
    typer.echo(f"Scanning project: {root}", err=True)

    files = discover_files(root, extra_ignores=ignore)
    if not files:
        typer.echo("No relevant files found.", err=True)
        raise typer.Exit(1)

    if fast:
        from ctxoptimizer.parallel import build_catalog_parallel

        catalog = build_catalog_parallel(files, max_file_size=config.max_file_size)
    else:
        catalog = build_catalog(files, max_file_size=config.max_file_size)

    typer.echo(f"Found {len(catalog)} relevant files", err=True)
    if not catalog:
        typer.echo("No files could be read.", err=True)
        raise typer.Exit(1)

    for path in config.context_files:
        if path not in catalog:
            typer.echo(f"Warning: context file {path} is not in the catalog", err=True)

    selected = get_optimal_context(catalog, query, config)

    rule = "=" * 60
    typer.echo(rule)
    typer.echo(generate_context_summary(selected))
    typer.echo(rule)

    export = export_context(query, selected)
    if output_format is OutputFormat.TOON:
        output.write_text(encode(export) + "\n", "utf-8")
    else:
        output.write_text(export.to_json(), "utf-8")
    typer.echo(f"Context saved to: {output}", err=True)

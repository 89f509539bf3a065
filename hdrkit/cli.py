#!/usr/bin/env python3
"""
Command line interface for C header analysis.

Usage:
    hdrkit analyze include/math.h
    hdrkit order include/a.h include/b.h -I third_party/include
    hdrkit graph include/a.h --all --json
"""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console as RichConsole
from rich.logging import RichHandler

from hdrkit.analyzer import EXTRACTORS
from hdrkit.config import AnalyzerConfig
from hdrkit.console import Console
from hdrkit.errors import AnalysisError

logger = logging.getLogger(__name__)

include_dir_option = click.option(
    "-I",
    "--include-dir",
    "include_dirs",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Additional directory to search for includes (repeatable)",
)
json_option = click.option("--json", "as_json", is_flag=True, help="Print JSON instead of tables")


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=RichConsole(stderr=True), show_path=False)],
        force=True,
    )


def load_config(config_path: Path | None, extractor: str | None) -> AnalyzerConfig:
    if config_path is not None:
        config = AnalyzerConfig.load_from_file(config_path)
    else:
        config = AnalyzerConfig.find_project_config(Path.cwd()) or AnalyzerConfig()
    if extractor:
        config = config.model_copy(update={"extractor": extractor})
    return config


def fail(message: str):
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to hdrkit_config.json (default: search upwards from the current directory)",
)
@click.option("--extractor", type=click.Choice(EXTRACTORS), help="Declaration extractor to use")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, extractor: str | None, verbose: bool):
    """Extract declarations from C headers and order them by include dependencies."""
    setup_logging(verbose)
    try:
        ctx.obj = load_config(config_path, extractor)
    except AnalysisError as e:
        fail(str(e))
    logger.debug("Project root %s, extractor %s", ctx.obj.project_root, ctx.obj.extractor)


def _search_paths(config: AnalyzerConfig, include_dirs: tuple[Path, ...]) -> list[Path]:
    return [*config.search_path_dirs(), *include_dirs]


def _headers(config: AnalyzerConfig, headers: tuple[Path, ...]) -> list[Path]:
    if headers:
        return list(headers)
    if not config.header_files:
        fail("No headers given and none configured")
    return config.header_paths()


@cli.command()
@click.argument("header", type=click.Path(path_type=Path))
@json_option
@click.pass_obj
def analyze(config: AnalyzerConfig, header: Path, as_json: bool):
    """Show functions, structures, constants and includes of HEADER."""
    try:
        result = config.analyzer().analyze(header)
    except AnalysisError as e:
        fail(str(e))

    if as_json:
        click.echo(result.model_dump_json(indent=2))
    else:
        Console().show_analysis(str(header), result)


@cli.command()
@click.argument("header", type=click.Path(path_type=Path))
@include_dir_option
@json_option
@click.pass_obj
def deps(config: AnalyzerConfig, header: Path, include_dirs: tuple[Path, ...], as_json: bool):
    """List every header HEADER depends on, directly or transitively."""
    try:
        dependencies = config.resolver().resolve_dependencies(
            header, _search_paths(config, include_dirs)
        )
    except AnalysisError as e:
        fail(str(e))

    if as_json:
        click.echo(json.dumps(dependencies, indent=2))
    else:
        Console().show_paths(f"Dependencies of {header}", dependencies)


@cli.command()
@click.argument("headers", nargs=-1, type=click.Path(path_type=Path))
@include_dir_option
@json_option
@click.pass_obj
def order(config: AnalyzerConfig, headers: tuple[Path, ...], include_dirs: tuple[Path, ...], as_json: bool):
    """Print HEADERS and their dependencies in compilation order."""
    try:
        compilation_order = config.resolver().create_compilation_order(
            _headers(config, headers), _search_paths(config, include_dirs)
        )
    except AnalysisError as e:
        fail(str(e))

    if as_json:
        click.echo(json.dumps(compilation_order, indent=2))
    else:
        Console().show_paths("Compilation order", compilation_order)


@cli.command()
@click.argument("headers", nargs=-1, type=click.Path(path_type=Path))
@include_dir_option
@click.option("--all", "include_discovered", is_flag=True, help="Include discovered headers as nodes")
@json_option
@click.pass_obj
def graph(
    config: AnalyzerConfig,
    headers: tuple[Path, ...],
    include_dirs: tuple[Path, ...],
    include_discovered: bool,
    as_json: bool,
):
    """Print the dependency graph of HEADERS."""
    try:
        dependency_graph = config.resolver().get_dependency_graph(
            _headers(config, headers), _search_paths(config, include_dirs), include_discovered
        )
    except AnalysisError as e:
        fail(str(e))

    if as_json:
        click.echo(json.dumps(dependency_graph, indent=2))
    else:
        Console().show_graph(dependency_graph)


if __name__ == "__main__":
    cli()

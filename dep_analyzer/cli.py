"""Click CLI with scan, analyze, graph and index subcommands."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path

import click

from dep_analyzer.config import load_config
from dep_analyzer.errors import DepAnalyzerError
from dep_analyzer.exporter import generate_report
from dep_analyzer.models import EDGE_KINDS, AnalysisResult, AnalyzerConfig
from dep_analyzer.pipeline import run_analysis
from dep_analyzer.resolver import class_id_from_path
from dep_analyzer.scanner import scan_directory

_KIND_COLORS = {
    "require": "yellow",
    "use": "green",
    "optional": "blue",
    "ignore": "white",
    "asset": "magenta",
    "cldr": "cyan",
    "lint": "bright_black",
}


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log every scanned class")
def cli(verbose: bool):
    """dep-analyzer: Compute class load order from source hints."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_alias(ctx, param, values: tuple[str, ...]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for value in values:
        alias, sep, namespace = value.partition("=")
        if not sep or not alias or not namespace:
            raise click.BadParameter(f"expected ALIAS=NAMESPACE, got {value!r}")
        mapping[alias] = namespace
    return mapping


def _analysis_options(func):
    @click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
                  help="YAML or JSON analyzer config")
    @click.option("--root", "-r", "roots", multiple=True, type=click.Path(file_okay=False, path_type=Path),
                  help="Class root directory, highest priority first (repeatable)")
    @click.option("--entry", "-e", "entries", multiple=True, help="Entry class id (repeatable)")
    @click.option("--namespace", "-n", "namespaces", multiple=True, callback=_parse_alias,
                  help="Namespace alias as ALIAS=NAMESPACE (repeatable)")
    @click.option("--edge-kind", type=click.Choice(EDGE_KINDS), default=None, help="Edges to sort by")
    @click.option("--extension", default=None, help="Source file extension (default .js)")
    @click.option("--lenient", is_flag=True, help="Skip malformed hint lines instead of failing")
    @click.option("--workers", "-w", type=click.IntRange(min=1), default=None, help="Parallel file readers")
    @functools.wraps(func)
    def wrapper(config_path, roots, entries, namespaces, edge_kind, extension, lenient, workers, **kwargs):
        try:
            config = load_config(config_path) if config_path else AnalyzerConfig()
            if roots:
                config.root_paths = list(roots)
            if entries:
                config.entry_ids = list(entries)
            config.namespace_map.update(namespaces)
            if edge_kind:
                config.edge_kind = edge_kind
            if extension:
                config.extension = extension
            if lenient:
                config.strict_hints = False
            if workers:
                config.workers = workers
            result = run_analysis(config)
        except DepAnalyzerError as e:
            raise click.ClickException(str(e))
        for warning in result.warnings:
            click.echo(click.style(f"warning: {warning}", fg="yellow"), err=True)
        for error in result.graph.skipped_hints:
            click.echo(click.style(f"skipped: {error}", fg="yellow"), err=True)
        return func(config=config, result=result, **kwargs)

    return wrapper


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Take extension and skip_dirs from a config file")
@click.option("--extension", default=None, help="Source file extension (default .js)")
@click.option("--skip", "skip", multiple=True, help="Directory glob to skip (repeatable, replaces the defaults)")
@click.option("--all", "show_all", is_flag=True, help="Also list classes without hints")
def scan(root: Path, config_path: Path | None, extension: str | None, skip: tuple[str, ...], show_all: bool):
    """List the hints of every class under ROOT."""
    try:
        config = load_config(config_path, validate=False) if config_path else AnalyzerConfig()
        extension = extension or config.extension
        skip_dirs = list(skip) or config.skip_dirs
        results = scan_directory(root, skip_dirs=skip_dirs, extension=extension)
    except DepAnalyzerError as e:
        raise click.ClickException(str(e))

    shown = 0
    for file_path, hints in results.items():
        if not hints and not show_all:
            continue
        shown += 1
        class_id = class_id_from_path(file_path.relative_to(root), extension)
        click.echo(click.style(class_id, fg="cyan") + click.style(f"  {file_path}", dim=True))
        for hint in hints:
            color = _KIND_COLORS.get(hint.kind.value, "white")
            click.echo(
                f"  {click.style(hint.kind.value, fg=color):>20}  "
                f"{hint.argument}  "
                f"{click.style(f'L{hint.line_number}', dim=True)}"
            )

    if not shown:
        click.echo("No hints found.")
        return

    by_kind: dict[str, int] = {}
    for hints in results.values():
        for hint in hints:
            by_kind[hint.kind.value] = by_kind.get(hint.kind.value, 0) + 1
    click.echo(f"\n{len(results)} class file(s) scanned:")
    for kind, count in sorted(by_kind.items()):
        click.echo(f"  {kind}: {count}")


@cli.command()
@_analysis_options
@click.option("-o", "--output", "output", type=click.Path(dir_okay=False, path_type=Path),
              help="Also write a JSON report")
@click.option("--paths", "show_paths", is_flag=True, help="Print file paths instead of class ids")
def analyze(config: AnalyzerConfig, result: AnalysisResult, output: Path | None, show_paths: bool):
    """Print the class load order."""
    items = result.paths if show_paths else result.load_order
    for item in items:
        click.echo(str(item))

    if output:
        generate_report(result, output, config)
        click.echo(f"\nReport written to {output}", err=True)


@cli.command()
@_analysis_options
def graph(config: AnalyzerConfig, result: AnalysisResult):
    """Print the dependency graph as JSON."""
    click.echo(json.dumps(result.graph.to_dict(), indent=2))


@cli.command()
@_analysis_options
def index(config: AnalyzerConfig, result: AnalysisResult):
    """Print the hint index as JSON."""
    click.echo(json.dumps({k: sorted(v) for k, v in sorted(result.hint_index.items())}, indent=2))


if __name__ == "__main__":
    cli()

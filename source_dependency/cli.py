"""Click CLI with graph, check, languages, formats, and serve subcommands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import click
from click.core import ParameterSource

from source_dependency.analysis.graph_models import DependencyData
from source_dependency.config import build_config, load_config_file, parse_options
from source_dependency.exporter import format_for_file, generate_output, get_all_generators
from source_dependency.models import GraphConfig
from source_dependency.pipeline import run_check, run_pipeline
from source_dependency.scanner import get_language_summary, get_supported_languages

# option name -> GraphConfig field
_CONFIG_FIELDS = {
    "target": "target",
    "language": "language",
    "input_filter": "input_filters",
    "path_mapping": "input_path_mapping",
    "keep_auxiliary_folders": "exclude_well_known_folders",
    "exclude_external": "exclude_external",
    "result_filter": "result_filters",
    "root_filter": "root_filters",
    "prefix": "prefix",
    "depth": "depth",
    "force_path_dependency": "force_path_dependency",
    "strict": "strict_matching",
    "option": "language_options",
    "cache": "cache_file",
    "debug": "debug",
    "output_format": "output_format",
    "output_file": "output_file",
}


def graph_options(func: Callable) -> Callable:
    """Options shared by every command that builds a graph."""
    decorators = [
        click.argument("target", type=click.Path(exists=True, path_type=Path), required=False),
        click.option("--language", "-l", type=click.Choice(get_supported_languages()), help="Source language"),
        click.option("--input-filter", "-i", multiple=True, help="Path filter regex; prefix '-' to exclude"),
        click.option("--path-mapping", multiple=True, metavar="FROM=TO", help="Rewrite import prefixes before resolving"),
        click.option("--keep-auxiliary-folders", is_flag=True, help="Also scan .git and node_modules"),
        click.option("--exclude-external", is_flag=True, help="Drop dependencies outside the scanned tree"),
        click.option("--result-filter", "-r", multiple=True, help="Entity filter regex; prefix '-' to exclude"),
        click.option("--root-filter", multiple=True, help="Keep only what is reachable from matching entities"),
        click.option("--prefix", "-p", help="Common prefix stripped from every entity"),
        click.option("--depth", metavar="N[,M]", help="Collapse internal (N) and external (M) names to N/M segments"),
        click.option("--force-path-dependency", is_flag=True, help="Graph files even when modules are known"),
        click.option("--strict", is_flag=True, help="Only resolve imports to exact relative paths"),
        click.option("--option", multiple=True, metavar="KEY=VALUE", help="Language service option"),
        click.option("--cache", type=click.Path(dir_okay=False, path_type=Path), help="Dependency cache file"),
        click.option("--config", "-c", "config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="JSON config file"),
        click.option("--debug", "-d", is_flag=True, help="Log debug information"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _load_config(ctx: click.Context, params: dict[str, Any]) -> GraphConfig:
    """Defaults < config file < options given on the command line."""
    file_values = load_config_file(params["config_file"]) if params.get("config_file") else {}
    overrides: dict[str, Any] = {}
    for name, field_name in _CONFIG_FIELDS.items():
        if name not in params or ctx.get_parameter_source(name) in (None, ParameterSource.DEFAULT):
            continue
        value = params[name]
        if name == "keep_auxiliary_folders":
            value = not value
        elif name == "option":
            value = {**file_values.get("language_options", {}), **parse_options(value)}
        overrides[field_name] = value
    return build_config(file_values, **overrides)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _progress(stage: str, current: int, total: int) -> None:
    click.echo(click.style(f"{stage}: {current}/{total}", fg="bright_blue"), err=True)


def _build(ctx: click.Context, params: dict[str, Any]) -> tuple[GraphConfig, DependencyData]:
    try:
        config = _load_config(ctx, params)
        _setup_logging(config.debug)
        logging.getLogger(__name__).debug("config: %s", config)
        return config, run_pipeline(config, progress=_progress)
    except ValueError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version="0.3.0")
def cli():
    """sd: Extract, normalize and render source dependency graphs."""


@cli.command()
@graph_options
@click.option("--format", "-f", "output_format", help="Output format (see `sd formats`)")
@click.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, path_type=Path), help="Output file")
@click.pass_context
def graph(ctx: click.Context, **params: Any):
    """Build the dependency graph of TARGET and render it."""
    config, data = _build(ctx, params)
    fmt = config.output_format
    if ctx.get_parameter_source("output_format") in (None, ParameterSource.DEFAULT) and config.output_file:
        fmt = format_for_file(config.output_file, default=fmt)

    try:
        result = generate_output(fmt, data)
    except ValueError as e:
        raise click.ClickException(str(e))

    if config.output_file:
        Path(config.output_file).write_text(result, encoding="utf-8")
        click.echo(f"Output written to: {config.output_file}", err=True)
    else:
        click.echo(result)


@cli.command()
@graph_options
@click.pass_context
def check(ctx: click.Context, **params: Any):
    """Report dependency cycles in TARGET; exit status 1 when any exist."""
    _, data = _build(ctx, params)
    cycles = run_check(data)
    if not cycles:
        click.echo("no cycles found")
        return
    click.echo("cycles found:")
    for cycle in cycles:
        click.echo(" -> ".join(cycle))
    ctx.exit(1)


@cli.command()
def languages():
    """List supported languages."""
    for name, description in get_language_summary():
        click.echo(f"{click.style(name.rjust(12), fg='green', bold=True)}  {description}")


@cli.command()
def formats():
    """List output formats."""
    for name, description in get_all_generators():
        click.echo(f"{click.style(name.rjust(8), fg='green', bold=True)}  {description}")


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the HTTP API. "
            "Install with: pip install 'source-dependency[web]'"
        )

    from source_dependency.web import create_app

    click.echo(f"Starting source-dependency API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()

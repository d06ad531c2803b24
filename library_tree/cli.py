"""CLI entry point for library-tree."""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path
from typing import Iterable, Optional

import click

from library_tree import __version__
from library_tree.config import TrackerConfig, load_config
from library_tree.errors import ModuleLoadError
from library_tree.registry import Registry, get_registry
from library_tree.reporter import render_json, render_text
from library_tree.utils.logging import configure_logging, get_logger
from library_tree.utils.result import ExitCode


class Context:
    """CLI context for sharing state between commands."""

    def __init__(self, config: TrackerConfig, registry: Registry) -> None:
        self.config = config
        self.registry = registry
        self.logger = get_logger("cli")


pass_context = click.make_pass_decorator(Context)


def output_json(data) -> None:
    """Output JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def load_modules(modules: Iterable[str]) -> list[str]:
    """
    Import modules so their classes register with the tracker.

    Args:
        modules: Dotted module paths

    Returns:
        The module paths, in import order, without duplicates

    Raises:
        ModuleLoadError: If any import fails
    """
    loaded: list[str] = []
    logger = get_logger("cli")
    importlib.invalidate_caches()
    for name in modules:
        if name in loaded:
            continue
        try:
            importlib.import_module(name)
        except Exception as e:
            raise ModuleLoadError(name, str(e)) from e
        logger.debug("module_loaded", module=name)
        loaded.append(name)
    return loaded


def _load_or_exit(ctx: Context, modules: tuple[str, ...]) -> None:
    try:
        load_modules([*ctx.config.modules, *modules])
    except ModuleLoadError as e:
        ctx.logger.error("module_load_failed", module=e.module, error=e.message)
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.MODULE_LOAD_FAILED)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to YAML config file (default: ./library-tree.yaml if present)",
)
@click.option(
    "--path",
    "paths",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to prepend to sys.path before importing (can be repeated)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "warning", "error"], case_sensitive=False),
    default=None,
    help="Logging level (overrides config)",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default=None,
    help="Log format (overrides config)",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    paths: tuple[Path, ...],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """
    library-tree - Inspect how mixins are composed.

    Imports the given modules, lets every class that inherits from
    library_tree.Watcher register itself, and prints the resulting forest
    of mixin compositions.
    """
    result = load_config(config_path)
    if result.is_err():
        click.echo(f"Error: {result.unwrap_err()}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)
    config = result.unwrap()

    configure_logging(
        level=log_level or config.logging.level,
        format_type=log_format or config.logging.format,
    )

    for path in reversed(paths):
        resolved = str(path.resolve())
        if resolved not in sys.path:
            sys.path.insert(0, resolved)

    ctx.obj = Context(config=config, registry=get_registry())


@cli.command()
@click.argument("modules", nargs=-1)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Output format (overrides config)",
)
@click.option(
    "--sort/--no-sort",
    default=None,
    help="Order roots by name",
)
@pass_context
def render(
    ctx: Context,
    modules: tuple[str, ...],
    output_format: Optional[str],
    sort: Optional[bool],
) -> None:
    """Print the composition forest."""
    _load_or_exit(ctx, modules)

    output_format = output_format or ctx.config.render.format
    sort = ctx.config.render.sort if sort is None else sort
    roots = ctx.registry.roots()

    ctx.logger.info("render_started", roots=len(roots), format=output_format)

    if output_format == "json":
        click.echo(render_json(roots, stats=ctx.registry.get_stats(), sort=sort))
    else:
        click.echo(render_text(roots, sort=sort), nl=False)


@cli.command()
@click.argument("modules", nargs=-1)
@pass_context
def nodes(ctx: Context, modules: tuple[str, ...]) -> None:
    """List every tracked unit with its parents and children."""
    _load_or_exit(ctx, modules)

    output_json([
        {
            "name": node.name,
            "root": node.is_root(),
            "parents": sorted(parent.name for parent in node.parents),
            "children": sorted(child.name for child in node.children),
        }
        for node in sorted(ctx.registry.all(), key=lambda n: n.name)
    ])


@cli.command()
@click.argument("modules", nargs=-1)
@pass_context
def stats(ctx: Context, modules: tuple[str, ...]) -> None:
    """Print node, root, leaf and edge counts."""
    _load_or_exit(ctx, modules)
    output_json(ctx.registry.get_stats().to_dict())


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        logger = get_logger("cli")
        logger.error("cli_error", error=str(e))
        sys.exit(ExitCode.GENERAL_ERROR)


if __name__ == "__main__":
    main()

"""CLI interface for Folio.

Command-line tool for building and serving a markdown blog.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from folio.config import Config
from folio.core.colors import color_for, string_hash
from folio.core.slugs import SlugError, derive_slug


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover folio.toml)",
)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Folio - a static blog and notes engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@config_option
@click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Content source directory (overrides config)",
)
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Cache directory (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
@click.pass_context
def serve(
    ctx: click.Context,
    config_path: Path | None,
    source_dir: Path | None,
    cache_dir: Path | None,
    host: str | None,
    port: int | None,
    live_reload: bool | None,
) -> None:
    """Start the development server."""
    from folio.server import run_server

    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        source_dir=source_dir,
        cache_dir=cache_dir,
        live_reload_enabled=live_reload,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Source directory: {config.content.source_dir}")
    click.echo(f"Cache directory: {config.content.cache_dir}")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config, verbose=ctx.obj["verbose"])


@cli.command()
@config_option
@click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Content source directory (overrides config)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Output directory (overrides config)",
)
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Cache directory (overrides config)",
)
@click.option(
    "--clean",
    is_flag=True,
    help="Remove the output directory before building",
)
def build(
    config_path: Path | None,
    source_dir: Path | None,
    output_dir: Path | None,
    cache_dir: Path | None,
    clean: bool,
) -> None:
    """Build the static site."""
    from folio.builder import build_site

    config = _load_config(config_path).with_overrides(
        source_dir=source_dir,
        output_dir=output_dir,
        cache_dir=cache_dir,
    )

    click.echo(f"Building {config.content.source_dir} into {config.content.output_dir}...")
    try:
        report = build_site(config, clean=clean)
    except (SlugError, ValueError, OSError) as e:
        _fail(str(e))

    click.echo(
        click.style(f"Built {report.page_count} pages.", fg="green", bold=True),
    )


@cli.command()
@config_option
@click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Content source directory (overrides config)",
)
def pages(config_path: Path | None, source_dir: Path | None) -> None:
    """List the pages the site would publish."""
    from folio.core.site import SiteLoader

    config = _load_config(config_path).with_overrides(source_dir=source_dir)
    try:
        site = SiteLoader(config.content.source_dir).load()
    except (SlugError, ValueError) as e:
        _fail(str(e))

    for page in site.pages:
        node = site.get_node(page.path)
        draft = " (draft)" if node is not None and not node.is_published else ""
        click.echo(f"{page.path}\t{page.template}{draft}")


@cli.command()
@click.argument("paths", nargs=-1, required=True)
def slug(paths: tuple[str, ...]) -> None:
    """Print the slug derived for each content file path."""
    failed = False
    for path in paths:
        try:
            click.echo(derive_slug(path))
        except SlugError as e:
            click.echo(click.style(f"Error: {e}", fg="red"), err=True)
            failed = True
    if failed:
        sys.exit(1)


@cli.command()
@click.argument("tags", nargs=-1, required=True)
@click.option(
    "--show-hash",
    is_flag=True,
    help="Also print the 32-bit hash of each tag",
)
def color(tags: tuple[str, ...], show_hash: bool) -> None:
    """Print the palette color for each tag."""
    for tag in tags:
        line = f"{tag}\t{color_for(tag)}"
        if show_hash:
            line += f"\t{string_hash(tag)}"
        click.echo(line)

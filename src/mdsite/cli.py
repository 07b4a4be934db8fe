"""CLI interface for mdsite.

Command-line tool for building a static site from markdown files.
"""

import logging
import sys
from pathlib import Path

import click

from mdsite.builder import build_site
from mdsite.config import Config


@click.group()
def cli() -> None:
    """mdsite - static HTML pages from a tree of markdown files."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover mdsite.toml)",
)
@click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Markdown source directory (overrides config)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Output directory, deleted and recreated on every build (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log every page)",
)
def build(
    config_path: Path | None,
    source_dir: Path | None,
    output_dir: Path | None,
    verbose: bool,
) -> None:
    """Build the site."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.load(config_path).with_overrides(
            source_dir=source_dir,
            output_dir=output_dir,
        )

        click.echo(f"Source directory: {config.build.source_dir}")
        click.echo(f"Output directory: {config.build.output_dir}")
        if config.build.static_dir is not None:
            click.echo(f"Static directory: {config.build.static_dir}")
        else:
            click.echo("Static assets: disabled")

        result = build_site(config)
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    for destination, sources in result.collisions.items():
        click.echo(
            click.style(f"Warning: {destination} generated from {', '.join(sources)}", fg="yellow"),
            err=True,
        )
    click.echo(
        click.style(
            f"\nBuilt {len(result.pages)} pages, copied {result.static_files} static files.",
            fg="green",
            bold=True,
        ),
    )

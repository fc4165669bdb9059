"""Command-line interface for Statue.

This module defines the CLI commands using Click framework.

Commands:
- build: Build the site into the output directory.
- serve: Run the development server, rebuilding on changes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from . import __version__

logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    level_str = (os.environ.get("STATUE_LOG_LEVEL") or level_name or "info").upper()
    if level_str.lower() not in LOG_LEVELS:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _development_mode() -> bool:
    return os.environ.get("STATUE_ENV", "").lower() == "development"


@click.group()
@click.version_option(version=__version__, prog_name="statue")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="info",
    show_default=True,
    help="Logging verbosity",
)
def cli(log_level: str):
    """Statue static site generator."""
    _configure_logging(log_level)


@cli.command()
def build():
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site
    from .config import ConfigError
    from .extractors import ContentError

    try:
        result = build_site(project_root, development=_development_mode())
    except (BuildError, ConfigError, ContentError) as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        if exc.source_path is not None:
            click.echo(click.style(f"  File: {exc.source_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    click.echo(
        f"Built {len(result.entries)} pages and {len(result.directories)} "
        f"directory listings into {result.output_dir}"
    )


@cli.command()
@click.option(
    "--port",
    type=int,
    required=False,
    help="Port to run the dev server (overrides statue.yaml)",
)
def serve(port: int | None):
    """Run the development server, rebuilding on changes."""
    project_root = Path.cwd()
    from .server import DevServer

    server = DevServer(project_root, http_port=port)
    server.start()


def main():
    """Entry point for the CLI application."""
    cli()

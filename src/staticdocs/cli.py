"""CLI interface for staticdocs.

Command-line tool for compiling a Markdown documentation tree into a static
site and previewing it.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from staticdocs.config import Config
from staticdocs.errors import StaticDocsError

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: configs/app.json)",
)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def cli(verbose: bool) -> None:
    """Staticdocs - compile Markdown documentation into a static site."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@config_option
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(path_type=Path),
    default=None,
    help="Output directory for the static site (default: dist)",
)
@click.option(
    "--docs-root",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Markdown source directory (overrides config)",
)
@click.option(
    "--template-root",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Template and asset directory (overrides config)",
)
def generate(
    config_path: Path | None,
    output_dir: Path | None,
    docs_root: Path | None,
    template_root: Path | None,
) -> None:
    """Generate the static site."""
    from staticdocs.site import DocsSite

    try:
        config = Config.load(config_path).with_overrides(
            docs_root=docs_root,
            template_root=template_root,
            output_dir=output_dir,
        )
        site = DocsSite(config)
        compiler = site.compiler()

        click.echo(f"Docs root: {config.docs_root}")
        click.echo(f"Output directory: {compiler.context.output_dir}")
        compiler.run()
    except (StaticDocsError, OSError, ValueError) as e:
        _fail(e)

    click.echo(click.style("Static site generated successfully!", fg="green", bold=True))


@cli.command()
@config_option
@click.argument("path", default="/")
def render(config_path: Path | None, path: str) -> None:
    """Render a single page to stdout without writing files."""
    from staticdocs.site import DocsSite

    try:
        site = DocsSite(Config.load(config_path))
        response = site.handle(path)
    except (StaticDocsError, OSError, ValueError) as e:
        _fail(e)

    click.echo(response.body)
    if not response.ok:
        click.echo(click.style(f"Status: {response.status}", fg="yellow"), err=True)
        sys.exit(1)


@cli.command()
@config_option
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
def serve(config_path: Path | None, host: str | None, port: int | None) -> None:
    """Start the development server."""
    from staticdocs.server import run_server

    try:
        config = Config.load(config_path).with_overrides(host=host, port=port)
    except (StaticDocsError, OSError, ValueError) as e:
        _fail(e)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Docs root: {config.docs_root}")
    run_server(config)


def _fail(error: Exception) -> NoReturn:
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(1)


def main() -> None:
    cli()

"""CLI interface for plainwiki.

Command-line tool for serving and inspecting a wiki.
"""

import logging
import sys
from pathlib import Path

import click

from plainwiki.config import Config
from plainwiki.core.pages import PageStore
from plainwiki.core.sessions import RedisSessionStore, SessionBackendUnavailableError


@click.group()
def cli() -> None:
    """plainwiki - a minimal wiki of plain-text pages."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover plainwiki.toml)",
)
@click.option(
    "--pages-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory holding page files (overrides config)",
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
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def serve(
    config_path: Path | None,
    pages_dir: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the wiki server."""
    from plainwiki.server import run_server

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        pages_dir=pages_dir,
    )

    config.wiki.pages_dir.mkdir(parents=True, exist_ok=True)

    session_store = None
    if config.sessions is not None:
        try:
            session_store = RedisSessionStore(
                config.sessions.address,
                db=config.sessions.db,
            )
        except SessionBackendUnavailableError as e:
            click.echo(click.style(f"Error: {e}", fg="red"), err=True)
            sys.exit(1)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Pages directory: {config.wiki.pages_dir}")
    if config.wiki.template_dir is not None:
        click.echo(f"Template directory: {config.wiki.template_dir}")
    if session_store is not None:
        click.echo(f"Sessions: redis at {session_store.address}")
    else:
        click.echo("Sessions: disabled")

    run_server(config, session_store=session_store)


@cli.command("list-pages")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover plainwiki.toml)",
)
@click.option(
    "--pages-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory holding page files (overrides config)",
)
def list_pages(config_path: Path | None, pages_dir: Path | None) -> None:
    """List stored page titles."""
    config = _load_config(config_path).with_overrides(pages_dir=pages_dir)
    store = PageStore(config.wiki.pages_dir)

    try:
        titles = store.list_titles()
    except OSError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    for title in titles:
        click.echo(title)


def _load_config(config_path: Path | None) -> Config:
    """Load configuration or exit with error.

    Raises:
        SystemExit: If the configuration file is invalid
    """
    try:
        return Config.load(config_path)
    except ValueError as e:
        click.echo(click.style(f"Error: invalid configuration: {e}", fg="red"), err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()

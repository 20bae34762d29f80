"""content-browse CLI.

Commands:
- serve: run the HTTP API with uvicorn
- sitemap / browse: print the view models as JSON
- seed: load categories and content from a YAML file
"""

import logging
from pathlib import Path

import typer
import uvicorn

from settings import BrowseSettings
from storage.manager import StorageManager
from storage.seed import seed_from_yaml
from utils.config import load_settings
from utils.logging_config import setup_logging
from utils.sitemap_data import build_browse_data, build_sitemap_data

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="content-browse",
    help="Browse and sitemap views over the content database",
    no_args_is_help=True,
)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="YAML file overriding the environment settings.",
)


def _prepare(config_path: Path | None) -> BrowseSettings:
    settings = load_settings(config_path)
    setup_logging(settings.log_file_prefix)
    return settings


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on."),
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Serve the browse, sitemap and category endpoints."""
    settings = _prepare(config_path)
    logger.info(f"Serving content from {settings.storage_path} on {host}:{port}")
    uvicorn.run("content_api:app", host=host, port=port)


@app.command()
def sitemap(
    indent: int = typer.Option(2, "--indent", help="JSON indentation."),
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Print the sitemap data (pruned category tree, uncategorized counts, stats)."""
    settings = _prepare(config_path)
    manager = StorageManager(settings.storage_path)
    data = build_sitemap_data(manager, order=settings.category_order)
    typer.echo(data.model_dump_json(indent=indent))


@app.command()
def browse(
    indent: int = typer.Option(2, "--indent", help="JSON indentation."),
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Print the browse data (every category with aggregate counts)."""
    settings = _prepare(config_path)
    manager = StorageManager(settings.storage_path)
    data = build_browse_data(manager, order=settings.category_order)
    typer.echo(data.model_dump_json(indent=indent))


@app.command()
def seed(
    seed_file: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Insert categories and content from a YAML file."""
    settings = _prepare(config_path)
    manager = StorageManager(settings.storage_path)
    try:
        inserted = seed_from_yaml(manager, seed_file)
    except ValueError as e:
        typer.echo(f"Invalid seed file: {e}", err=True)
        raise typer.Exit(1)

    for section, count in inserted.items():
        typer.echo(f"✓ {section}: {count}")


if __name__ == "__main__":
    app()

"""Command-line interface for DocLite.

This module provides the CLI commands for running and inspecting
the DocLite service.
"""

from typing import NoReturn

import click

from doclite import __version__
from doclite.core.config import get_settings
from doclite.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="DocLite")
def cli() -> None:
    """DocLite - schema-less JSON document store over HTTP.

    Settings are read from DOCLITE_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the DocLite server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and settings.database_url.startswith("sqlite"):
        raise click.UsageError("SQLite does not support multiple worker processes; use --workers 1")

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting DocLite server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "doclite.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
def info() -> None:
    """Display DocLite configuration."""
    settings = get_settings()

    click.echo(f"""
DocLite v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix or '/'}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Journal Mode: {settings.db_sqlite_journal_mode}

Documents:
  Page Limit:   {settings.default_page_limit} (max {settings.max_page_limit})
  Strict Names: {settings.strict_collection_names}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the `doclite` command and `python -m doclite`."""
    cli()


if __name__ == "__main__":
    main()

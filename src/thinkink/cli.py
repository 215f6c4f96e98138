"""Command-line interface for ThinkInk.

This module provides the CLI commands for running and managing
the ThinkInk application.
"""

import asyncio

import click

from thinkink import __version__
from thinkink.core.config import get_settings
from thinkink.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="ThinkInk")
def cli() -> None:
    """ThinkInk - blogging backend.

    Settings are read from THINKINK_* environment variables and .env.
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
    """Start the ThinkInk server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting ThinkInk server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "thinkink.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create all database tables.

    Use this only in development. In production, run `alembic upgrade head`.
    """
    from thinkink.infrastructure.persistence.database import get_db_manager
    from thinkink.infrastructure.persistence.models import PostModel, UserModel  # noqa: F401

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize():
        db = get_db_manager()
        try:
            await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
def check_media() -> None:
    """Check that the configured media store is reachable."""
    from thinkink.infrastructure.media import get_media_store

    settings = get_settings()
    configure_logging(settings)

    ok, message = asyncio.run(get_media_store().test_connection())
    click.echo(message)
    if not ok:
        raise SystemExit(1)


@cli.command()
def info() -> None:
    """Display ThinkInk configuration."""
    settings = get_settings()

    click.echo(f"""
ThinkInk v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}

Media:
  Provider:     {settings.media_provider}
  Folder:       {settings.media_folder}
  Max Upload:   {settings.max_upload_size} bytes

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Main entry point for the `thinkink` command and `python -m thinkink`."""
    cli()


if __name__ == "__main__":
    main()

"""Command-line interface for Gulita.

This module provides the CLI commands for running and managing
the Gulita application.
"""

import asyncio

import click

from gulita import __version__
from gulita.core.config import get_settings
from gulita.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="Gulita")
def cli() -> None:
    """Gulita - health tracking backend.

    Settings are read from GULITA_ prefixed environment variables and .env.
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
    "--reload/--no-reload",
    default=None,
    help="Auto-reload on code changes (default: on in development)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Server log level (overrides config)",
)
def serve(
    host: str | None,
    port: int | None,
    workers: int | None,
    reload: bool | None,
    log_level: str | None,
) -> None:
    """Start the Gulita server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers
    if reload is None:
        reload = settings.is_development
    level = (log_level or settings.log_level).lower()

    if bind_workers > 1 and settings.database_url.startswith("sqlite"):
        click.echo(
            "Error: SQLite does not support multiple worker processes. "
            "Use --workers 1 or switch to PostgreSQL.",
            err=True,
        )
        raise SystemExit(1)

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting Gulita server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "gulita.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=level,
        access_log=True,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create all database tables.

    Use this only in development. In production, run the Alembic migrations.
    """
    from gulita.infrastructure.persistence.database import close_database, init_database

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
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await close_database()

    asyncio.run(initialize())


@cli.command()
def purge_tokens() -> None:
    """Delete refresh tokens that are past their expiry."""
    from gulita.domain.services import AuthService
    from gulita.infrastructure.auth import JWTService
    from gulita.infrastructure.persistence.database import close_database, get_db_manager

    settings = get_settings()
    configure_logging(settings)

    async def purge() -> int:
        db = get_db_manager()
        try:
            return await AuthService(db.session, JWTService(settings)).purge_expired_refresh_tokens()
        finally:
            await close_database(db)

    purged = asyncio.run(purge())
    click.echo(f"Purged {purged} expired refresh token(s).")


@cli.command()
def info() -> None:
    """Display Gulita configuration."""
    settings = get_settings()

    click.echo(f"""
Gulita v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}

Security:
  Token Expire: {settings.access_token_expire_minutes} minutes
  Refresh Exp:  {settings.refresh_token_expire_days} days

Prediction:
  URL:          {settings.prediction_url or 'not configured'}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Main entry point for the `gulita` command and `python -m gulita`."""
    cli()


if __name__ == "__main__":
    main()

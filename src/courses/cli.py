#!/usr/bin/env python3
"""
Main CLI entry point for the Courses API server.
"""

import asyncio
import sys

import click
import uvicorn

from courses import __version__
from courses.config import settings
from courses.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="courses")
def cli() -> None:
    """Courses CLI - run the server and manage the database."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    show_default=True,
    help="Host to bind to",
)
@click.option(
    "--port",
    default=settings.port,
    type=int,
    show_default=True,
    help="Port to bind to",
)
@click.option(
    "--log-level",
    default=settings.log_level.lower(),
    type=click.Choice(["debug", "info", "warning", "error"]),
    show_default=True,
    help="Log level",
)
def serve(host: str, port: int, log_level: str) -> None:
    """Start the Courses API server.

    Exits with status 1 if the document store cannot be reached.
    """
    from courses.api.app import app
    from courses.shutdown import get_shutdown_coordinator

    configure_logging(debug=settings.debug or log_level == "debug", log_level=log_level)

    logger.info(
        "Starting Courses API server",
        host=host,
        port=port,
        log_level=log_level,
        environment=settings.environment,
    )

    server = uvicorn.Server(
        uvicorn.Config(app, host=host, port=port, log_level=log_level, access_log=True)
    )
    coordinator = get_shutdown_coordinator()
    coordinator.attach(server)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)
    finally:
        coordinator.detach()

    if coordinator.exit_requested:
        sys.exit(coordinator.exit_code)
    if not server.started:
        logger.error("Server failed to start")
        sys.exit(1)


@cli.group()
def db() -> None:
    """Inspect the document store."""
    pass


@db.command("ping")
def ping() -> None:
    """Connect to the document store and ping it."""
    from courses.database.connection import check_connection, close_connection

    configure_logging(debug=settings.debug, log_level=settings.log_level)

    async def do_ping() -> tuple[bool, str | None]:
        try:
            return await check_connection(connect=True)
        finally:
            await close_connection()

    ok, error = asyncio.run(do_ping())
    if not ok:
        click.echo(f"✗ {error}", err=True)
        sys.exit(1)
    click.echo(f"✓ Connected to database '{settings.db_name}'")


@cli.command()
@click.option(
    "--drop",
    is_flag=True,
    default=False,
    help="Drop existing courses and students first",
)
def seed(drop: bool) -> None:
    """Seed the database with sample courses and students."""
    from courses.database.connection import close_connection, get_connection
    from courses.database.exceptions import DatabaseConnectionError
    from courses.database.seed_data import seed_initial_data

    configure_logging(debug=settings.debug, log_level=settings.log_level)

    async def do_seed() -> dict[str, int]:
        try:
            handle = await get_connection()
            return await seed_initial_data(handle.database, drop=drop)
        finally:
            await close_connection()

    try:
        counts = asyncio.run(do_seed())
    except DatabaseConnectionError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.error("Failed to seed database", error=str(e))
        click.echo(f"✗ Error seeding database: {e}", err=True)
        sys.exit(1)

    click.echo("✓ Database seeded successfully")
    for collection, count in counts.items():
        click.echo(f"  {collection}: {count}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()

#!/usr/bin/env python3
"""
Main CLI entry point for the Bookshelf backend server.
"""

import os
import sys

import click
import uvicorn

from bookshelf import __version__
from bookshelf.config import settings
from bookshelf.database.cli import db
from bookshelf.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="bookshelf")
def cli() -> None:
    """Bookshelf CLI - run the GraphQL server and manage the database."""
    pass


cli.add_command(db)


@cli.command()
@click.option("--host", default=settings.api_host, show_default=True, help="Host to bind to")
@click.option("--port", default=settings.api_port, show_default=True, type=int, help="Port to bind to")
@click.option(
    "--reload", is_flag=True, default=settings.api_reload, help="Enable auto-reload for development"
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the Bookshelf API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info("Starting Bookshelf API server", host=host, port=port, reload=reload)

    # The app module reads settings at import time, so pass choices through the environment
    if log_level == "debug":
        os.environ["BOOKSHELF_DEBUG"] = "true"
    else:
        os.environ.setdefault("BOOKSHELF_DEBUG", "false")
    os.environ.setdefault("BOOKSHELF_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "bookshelf.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("schema")
def print_schema() -> None:
    """Print the GraphQL schema in SDL form."""
    from bookshelf.graphql.schema import create_schema

    click.echo(create_schema(log_resolvers=False).as_str())


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

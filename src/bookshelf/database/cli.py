"""
Database management commands (``bookshelf db ...``).
"""

import asyncio
import sys
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from bookshelf.logging import get_logger

logger = get_logger(__name__)

# alembic.ini sits at the project root, next to src/
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def get_alembic_config(database_url: str | None = None) -> Config:
    """Load the Alembic configuration, optionally overriding the database URL."""
    alembic_ini = PROJECT_ROOT / "alembic.ini"
    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    if database_url:
        config.attributes["database_url"] = database_url
    return config


def _run_alembic(action: str, func, *args, database_url: str | None = None) -> None:
    try:
        config = get_alembic_config(database_url)
        logger.info("Running migration command", action=action, args=list(args))
        func(config, *args)
    except Exception as e:
        logger.error("Migration command failed", action=action, error=str(e))
        click.echo(f"✗ {action} failed: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--database-url", default=None, help="Override BOOKSHELF_DATABASE_URL")
@click.pass_context
def db(ctx: click.Context, database_url: str | None) -> None:
    """Manage the Bookshelf database."""
    ctx.obj = {"database_url": database_url}


@db.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create the authors and books tables directly from the ORM models."""
    from .connection import create_tables, dispose_database, init_database

    async def do_init() -> None:
        init_database(ctx.obj["database_url"], force_reinit=True)
        try:
            await create_tables()
        finally:
            await dispose_database()

    try:
        asyncio.run(do_init())
    except Exception as e:
        logger.error("Failed to create tables", error=str(e))
        click.echo(f"✗ Error creating tables: {e}", err=True)
        sys.exit(1)
    click.echo("✓ Tables created")


@db.command()
@click.argument("revision", default="head")
@click.pass_context
def upgrade(ctx: click.Context, revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    _run_alembic("upgrade", command.upgrade, revision, database_url=ctx.obj["database_url"])


@db.command()
@click.argument("revision", default="-1")
@click.pass_context
def downgrade(ctx: click.Context, revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    _run_alembic("downgrade", command.downgrade, revision, database_url=ctx.obj["database_url"])


@db.command()
@click.pass_context
def current(ctx: click.Context) -> None:
    """Show current database revision."""
    _run_alembic("current", command.current, database_url=ctx.obj["database_url"])

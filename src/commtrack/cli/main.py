"""Main CLI entry point."""

import logging

import click
from commtrack.config import LOG_LEVELS
from commtrack.database.factories import create_database

# Import and register all commands at module level
from commtrack.cli.commands import (
    entity_type,
    entity,
    add,
    transaction,
    stats,
    serve,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides COMMTRACK_DB_PATH environment variable)",
    envvar="COMMTRACK_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL (overrides COMMTRACK_DATABASE_URL environment variable)",
    envvar="COMMTRACK_DATABASE_URL",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="COMMTRACK_LOG_LEVEL",
    help="Logging level",
)
@click.pass_context
def cli(ctx, db_path: str | None, database_url: str | None, log_level: str):
    """Commtrack - Commission tracking application.

    Record monthly commissions per partner and compare months, quarters and
    financial years (April to March) against earlier periods.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
entity_type.register_commands(cli)
entity.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
stats.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

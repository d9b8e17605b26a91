"""Main CLI entry point."""

import click

from tillbook import configure_logging
from tillbook.config import DB_PATH_ENV
from tillbook.database.factories import create_sqlite_database

# Import and register all commands at module level
from tillbook.cli.commands import (
    register,
    recharge,
    sale,
    expense,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.pass_context
def cli(ctx, db_path: str | None):
    """Tillbook - Daily cash register ledger.

    Open and close the day's till, record sales, expenses and recharge
    transactions, and keep the register balance up to date.
    """
    ctx.ensure_object(dict)
    configure_logging()

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
register.register_commands(cli)
recharge.register_commands(cli)
sale.register_commands(cli)
expense.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

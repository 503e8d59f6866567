"""Main CLI entry point."""

import click

from fintrack.database.factories import create_database
from fintrack.database.fixtures import load_fixtures
from fintrack.log import configure_logging

# Import and register all commands at module level
from fintrack.cli.commands import (
    account,
    budget,
    dashboard,
    goal,
    insights,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    help="SQLite file to use instead of the in-memory store",
    envvar="FINTRACK_DB_PATH",
)
@click.option(
    "--seed/--no-seed",
    default=True,
    show_default=True,
    help="Load the bundled demo records when the store is empty",
)
@click.option(
    "--latency-scale",
    type=click.FloatRange(min=0.0),
    default=0.0,
    show_default=True,
    envvar="FINTRACK_LATENCY_SCALE",
    help="Multiplier for the simulated round trip of each store call (1.0 = full delays)",
)
@click.option("--verbose", is_flag=True, help="Log store activity to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, seed: bool, latency_scale: float, verbose: bool):
    """Fintrack - personal finance tracking.

    Record transactions, keep accounts, budgets and savings goals, and view
    spending insights for the last 3, 6 or 12 months.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        if seed and db.is_empty():
            load_fixtures(db)
        ctx.obj["db"] = db
        ctx.obj["latency_scale"] = latency_scale
        ctx.call_on_close(db.disconnect)


# Register all commands
transaction.register_commands(cli)
account.register_commands(cli)
budget.register_commands(cli)
goal.register_commands(cli)
insights.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

"""Dashboard command."""

import click

from fintrack.cli.commands.transaction import format_transaction_line
from fintrack.cli.error_handling import run_or_exit
from fintrack.cli.parsing import date_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.dashboard import DashboardService
from fintrack.domain.goal import GoalService
from fintrack.domain.transaction import TransactionService


@click.command("dashboard")
@click.option("--as-of", help="Reference date for the current month (defaults to today)")
@click.pass_context
def dashboard(ctx, as_of: str | None):
    """Show balances, this month's spending and goal progress."""
    db = ctx.obj["db"]
    scale = ctx.obj["latency_scale"]
    service = DashboardService(
        AccountService(db, scale), TransactionService(db, scale), GoalService(db, scale)
    )
    summary = run_or_exit(ctx, service.summary(now=date_or_exit(ctx, as_of)))

    click.echo("\nDashboard")
    click.echo("=" * 60)
    click.echo(f"{'Total balance':<30} ${summary.total_balance:>14,.2f}")
    click.echo(f"{'Spent this month':<30} ${summary.monthly_spending:>14,.2f}")
    click.echo(f"{'Savings rate':<30} {summary.savings_rate:>14d}%")
    click.echo(f"{'Goals completed':<30} {summary.completed_goals:>10d}/{summary.goal_count}")

    if summary.recent_transactions:
        click.echo("\nRecent transactions:")
        for txn in summary.recent_transactions:
            click.echo(format_transaction_line(txn))


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)

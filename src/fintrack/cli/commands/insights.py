"""Spending insights command."""

import click

from fintrack.cli.error_handling import run_or_exit
from fintrack.cli.parsing import date_or_exit
from fintrack.domain.insights import DEFAULT_WINDOW, WINDOW_CHOICES, InsightsService
from fintrack.domain.transaction import TransactionService

BAR_WIDTH = 30


def _bar(amount: float, largest: float) -> str:
    if largest <= 0:
        return ""
    return "#" * round(amount / largest * BAR_WIDTH)


@click.command("insights")
@click.option(
    "--months",
    type=click.Choice([str(value) for value in WINDOW_CHOICES]),
    default=str(DEFAULT_WINDOW),
    show_default=True,
    help="Trailing window in months",
)
@click.option("--as-of", help="Anchor date for the window (defaults to today)")
@click.pass_context
def insights(ctx, months: str, as_of: str | None):
    """Show spending trends and category breakdown."""
    service = InsightsService(TransactionService(ctx.obj["db"], ctx.obj["latency_scale"]))
    report = run_or_exit(
        ctx, service.spending_insights(int(months), now=date_or_exit(ctx, as_of))
    )

    click.echo(f"\nSpending Insights ({report.start_date} to {report.end_date})")
    click.echo("=" * 60)
    click.echo(f"{'Total spent':<30} ${report.total_spent:>14,.2f}")
    click.echo(f"{'Average per month':<30} ${report.avg_monthly_spending:>14,.2f}")
    change_sign = "+" if report.spending_change >= 0 else ""
    click.echo(
        f"{'This month vs last':<30} {change_sign}{report.spending_change:.1f}%"
    )
    click.echo(f"{'Transactions':<30} {report.transaction_count:>15d}")

    if report.transaction_count == 0:
        click.echo("\nNo expenses found in this period.")
        return

    largest = max(bucket.amount for bucket in report.monthly_spending)
    click.echo("\nMonthly trend:")
    for bucket in report.monthly_spending:
        click.echo(
            f"  {bucket.label:<10} ${bucket.amount:>12,.2f} ({bucket.count:>3d}) "
            f"{_bar(bucket.amount, largest)}"
        )

    click.echo(f"\nTop categories ({len(report.category_breakdown)} categories):")
    for item in report.top_categories():
        click.echo(
            f"  {item.category:<20} ${item.amount:>12,.2f} {report.category_share(item):>6.1f}%"
        )


def register_commands(cli):
    """Register insights command with main CLI."""
    cli.add_command(insights)

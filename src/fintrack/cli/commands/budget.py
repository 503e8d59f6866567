"""Budget management commands."""

import click

from fintrack.cli.error_handling import run_or_exit
from fintrack.cli.parsing import amount_or_exit
from fintrack.domain.budget import BudgetService
from fintrack.domain.entities import BudgetPatch, BudgetPeriod

PERIODS = [period.value for period in BudgetPeriod]


def _service(ctx) -> BudgetService:
    return BudgetService(ctx.obj["db"], ctx.obj["latency_scale"])


@click.group()
def budget_group():
    """Manage budgets."""
    pass


@budget_group.command("list")
@click.pass_context
def list_budgets(ctx):
    """List all budgets."""
    budgets = run_or_exit(ctx, _service(ctx).get_all())
    if not budgets:
        click.echo("No budgets found.")
        return

    click.echo("\nBudgets:")
    click.echo("-" * 80)
    for budget in budgets:
        span = f"{budget.start_date:%Y-%m-%d} to {budget.end_date:%Y-%m-%d}"
        click.echo(
            f"ID: {budget.id} | {budget.name:20s} | ${budget.total_amount:>10,.2f} "
            f"{budget.period.value:8s} | {span} | {len(budget.categories)} categories"
        )


@budget_group.command("add")
@click.argument("name", metavar="BUDGET_NAME")
@click.option("--amount", required=True, help="Total amount for the period")
@click.option("--period", type=click.Choice(PERIODS), default="monthly", show_default=True)
@click.option("--category", "categories", multiple=True, help="Category covered (repeatable)")
@click.pass_context
def add_budget(ctx, name: str, amount: str, period: str, categories: tuple[str, ...]):
    """Create a budget starting now and running for 30 days.

    Examples:
        fintrack budget add "Groceries" --amount 400 --category "Food & Dining"
    """
    budget = run_or_exit(
        ctx,
        _service(ctx).create(
            name=name,
            total_amount=amount_or_exit(ctx, amount),
            period=period,
            categories=categories,
        ),
    )
    click.echo(f"Created budget '{budget.name}' (ID: {budget.id})")


@budget_group.command("update")
@click.argument("budget_id")
@click.option("--name", help="New budget name")
@click.option("--amount", help="New total amount")
@click.option("--period", type=click.Choice(PERIODS))
@click.option("--category", "categories", multiple=True, help="Replace covered categories")
@click.pass_context
def update_budget(
    ctx, budget_id: str, name: str | None, amount: str | None, period: str | None,
    categories: tuple[str, ...],
) -> None:
    """Update a budget."""
    patch = BudgetPatch(
        name=name,
        total_amount=amount_or_exit(ctx, amount),
        period=period,
        categories=categories or None,
    )
    if patch.is_empty():
        click.echo("Error: Nothing to update. Provide at least one option.", err=True)
        ctx.exit(1)

    budget = run_or_exit(ctx, _service(ctx).update(budget_id, patch))
    click.echo(f"Updated budget '{budget.name}'")


@budget_group.command("delete")
@click.argument("budget_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_budget(ctx, budget_id: str, yes: bool) -> None:
    """Delete a budget."""
    if not yes and not click.confirm(f"Are you sure you want to delete budget {budget_id}?"):
        click.echo("Deletion cancelled.")
        return

    budget = run_or_exit(ctx, _service(ctx).delete(budget_id))
    click.echo(f"Deleted budget '{budget.name}'")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")

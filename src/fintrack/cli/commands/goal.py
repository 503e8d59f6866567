"""Savings goal commands."""

import click

from fintrack.cli.error_handling import run_or_exit
from fintrack.cli.parsing import amount_or_exit, date_or_exit
from fintrack.domain.entities import GoalCategory, GoalPatch
from fintrack.domain.goal import GoalService

GOAL_CATEGORIES = [category.value for category in GoalCategory]


def _service(ctx) -> GoalService:
    return GoalService(ctx.obj["db"], ctx.obj["latency_scale"])


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List goals with their progress."""
    goals = run_or_exit(ctx, _service(ctx).get_all())
    if not goals:
        click.echo("No goals found.")
        return

    click.echo("\nGoals:")
    click.echo("-" * 80)
    for goal in goals:
        status = "complete" if goal.is_complete else f"{goal.progress:.1f}%"
        deadline = f" | due {goal.deadline}" if goal.deadline else ""
        click.echo(
            f"ID: {goal.id} | {goal.name:20s} | {goal.category.value:10s} | "
            f"${goal.current_amount:,.2f} of ${goal.target_amount:,.2f} | {status}{deadline}"
        )


@goal_group.command("add")
@click.argument("name", metavar="GOAL_NAME")
@click.option("--target", required=True, help="Target amount")
@click.option("--current", default=None, help="Amount saved so far (default 0)")
@click.option("--category", type=click.Choice(GOAL_CATEGORIES), default="savings", show_default=True)
@click.option("--deadline", help="Deadline (YYYY-MM-DD or relative like 'next year')")
@click.pass_context
def add_goal(
    ctx, name: str, target: str, current: str | None, category: str, deadline: str | None
):
    """Create a savings goal.

    Examples:
        fintrack goal add "New laptop" --target 1800 --category purchase --deadline 2027-03-01
    """
    goal = run_or_exit(
        ctx,
        _service(ctx).create(
            name=name,
            target_amount=amount_or_exit(ctx, target),
            current_amount=amount_or_exit(ctx, current),
            category=category,
            deadline=date_or_exit(ctx, deadline),
        ),
    )
    click.echo(f"Created goal '{goal.name}' (ID: {goal.id})")


@goal_group.command("update")
@click.argument("goal_id")
@click.option("--name", help="New goal name")
@click.option("--target", help="New target amount")
@click.option("--current", help="New amount saved")
@click.option("--category", type=click.Choice(GOAL_CATEGORIES))
@click.option("--deadline", help="New deadline")
@click.pass_context
def update_goal(
    ctx,
    goal_id: str,
    name: str | None,
    target: str | None,
    current: str | None,
    category: str | None,
    deadline: str | None,
) -> None:
    """Update a goal."""
    patch = GoalPatch(
        name=name,
        target_amount=amount_or_exit(ctx, target),
        current_amount=amount_or_exit(ctx, current),
        category=category,
        deadline=date_or_exit(ctx, deadline),
    )
    if patch.is_empty():
        click.echo("Error: Nothing to update. Provide at least one option.", err=True)
        ctx.exit(1)

    goal = run_or_exit(ctx, _service(ctx).update(goal_id, patch))
    click.echo(f"Updated goal '{goal.name}'")
    if goal.is_complete:
        click.echo("Goal reached!")


@goal_group.command("delete")
@click.argument("goal_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_goal(ctx, goal_id: str, yes: bool) -> None:
    """Delete a goal."""
    if not yes and not click.confirm(f"Are you sure you want to delete goal {goal_id}?"):
        click.echo("Deletion cancelled.")
        return

    goal = run_or_exit(ctx, _service(ctx).delete(goal_id))
    click.echo(f"Deleted goal '{goal.name}'")


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")

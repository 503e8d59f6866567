"""Account management commands."""

import click

from fintrack.cli.error_handling import run_or_exit
from fintrack.cli.parsing import amount_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.entities import AccountPatch


def _service(ctx) -> AccountService:
    return AccountService(ctx.obj["db"], ctx.obj["latency_scale"])


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    accounts = run_or_exit(ctx, _service(ctx).get_all())
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        synced = acc.last_sync.strftime("%Y-%m-%d %H:%M")
        click.echo(f"ID: {acc.id} | {acc.name:24s} | ${acc.balance:>12,.2f} | Synced: {synced}")


@account_group.command("add")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--balance", default="0", help="Opening balance")
@click.pass_context
def add_account(ctx, name: str, balance: str):
    """Create a new account.

    Examples:
        fintrack account add "Everyday Checking" --balance 1250.00
    """
    account = run_or_exit(
        ctx, _service(ctx).create(name=name, balance=amount_or_exit(ctx, balance))
    )
    click.echo(f"Created account '{account.name}' (ID: {account.id})")


@account_group.command("update")
@click.argument("account_id")
@click.option("--name", help="New account name")
@click.option("--balance", help="New balance")
@click.pass_context
def update_account(ctx, account_id: str, name: str | None, balance: str | None) -> None:
    """Update an account's name or balance."""
    patch = AccountPatch(name=name, balance=amount_or_exit(ctx, balance))
    if patch.is_empty():
        click.echo("Error: Nothing to update. Provide --name or --balance.", err=True)
        ctx.exit(1)

    account = run_or_exit(ctx, _service(ctx).update(account_id, patch))
    click.echo(f"Updated account '{account.name}'")


@account_group.command("delete")
@click.argument("account_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_account(ctx, account_id: str, yes: bool) -> None:
    """Delete an account.

    Transactions recorded against the account are kept.
    """
    if not yes and not click.confirm(f"Are you sure you want to delete account {account_id}?"):
        click.echo("Deletion cancelled.")
        return

    account = run_or_exit(ctx, _service(ctx).delete(account_id))
    click.echo(f"Deleted account '{account.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")

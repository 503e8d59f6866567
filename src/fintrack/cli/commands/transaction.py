"""Transaction management commands."""

import click

from fintrack.cli.account_resolution import resolve_account_or_exit
from fintrack.cli.error_handling import run_or_exit
from fintrack.cli.parsing import amount_or_exit, date_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.entities import TRANSACTION_CATEGORIES, TransactionPatch
from fintrack.domain.transaction import TYPE_FILTERS, TransactionService


def _services(ctx) -> tuple[TransactionService, AccountService]:
    db = ctx.obj["db"]
    scale = ctx.obj["latency_scale"]
    return TransactionService(db, scale), AccountService(db, scale)


def format_transaction_line(txn) -> str:
    sign = "+" if txn.type == "income" else "-"
    amount = f"{sign}${txn.absolute_amount:,.2f}"
    category = txn.category or "Other"
    return f"{txn.id:>12s} | {txn.date} | {txn.description[:28]:28s} | {category:18s} | {amount:>12s}"


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option(
    "--type", "type_filter", type=click.Choice(TYPE_FILTERS), default="all", show_default=True,
    help="Show only income or only expenses",
)
@click.option("--search", default="", help="Match text in description or category")
@click.pass_context
def list_transactions(ctx, type_filter: str, search: str):
    """List transactions, newest first."""
    service, _ = _services(ctx)
    transactions = run_or_exit(ctx, service.search(type_filter=type_filter, term=search))

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo("\nTransactions:")
    click.echo("-" * 90)
    for txn in transactions:
        click.echo(format_transaction_line(txn))


@transaction_group.command("add")
@click.option("--description", required=True, help="Transaction description")
@click.option("--amount", required=True, help="Amount (e.g., 45.20 or $1,200.00)")
@click.option(
    "--category",
    default="",
    help=f"Category label (e.g., {', '.join(TRANSACTION_CATEGORIES[:3])})",
)
@click.option(
    "--type", "txn_type", type=click.Choice(["income", "expense"]), default="expense",
    show_default=True,
)
@click.option("--account", help="Account name or ID (defaults to the first account)")
@click.option("--date", "txn_date", help="Date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.pass_context
def add_transaction(
    ctx,
    description: str,
    amount: str,
    category: str,
    txn_type: str,
    account: str | None,
    txn_date: str | None,
):
    """Add a transaction.

    Examples:
        fintrack transaction add --description "Groceries" --amount 54.10 --category "Food & Dining"
        fintrack transaction add --description "Salary" --amount 4200 --type income --date 2026-10-01
    """
    service, account_service = _services(ctx)
    account_id = resolve_account_or_exit(ctx, account_service, account)
    parsed_amount = amount_or_exit(ctx, amount)
    parsed_date = date_or_exit(ctx, txn_date)

    txn = run_or_exit(
        ctx,
        service.create(
            description=description,
            amount=parsed_amount,
            category=category,
            type=txn_type,
            account_id=account_id,
            date=parsed_date,
        ),
    )
    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: ${txn.absolute_amount:,.2f} ({txn.type.value})")
    if txn.category:
        click.echo(f"  Category: {txn.category}")


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--description", help="Transaction description")
@click.option("--amount", help="Amount")
@click.option("--category", help="Category label")
@click.option("--type", "txn_type", type=click.Choice(["income", "expense"]))
@click.option("--account", help="Account name or ID")
@click.option("--date", "txn_date", help="Date (YYYY-MM-DD or relative)")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    description: str | None,
    amount: str | None,
    category: str | None,
    txn_type: str | None,
    account: str | None,
    txn_date: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        fintrack transaction update 3 --amount 120.00
        fintrack transaction update 3 --category "Bills & Utilities"
    """
    service, account_service = _services(ctx)
    patch = TransactionPatch(
        description=description,
        amount=amount_or_exit(ctx, amount),
        category=category,
        type=txn_type,
        account_id=resolve_account_or_exit(ctx, account_service, account),
        date=date_or_exit(ctx, txn_date),
    )
    if patch.is_empty():
        click.echo("Error: Nothing to update. Provide at least one option.", err=True)
        ctx.exit(1)

    run_or_exit(ctx, service.update(transaction_id, patch))
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction."""
    service, _ = _services(ctx)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    deleted = run_or_exit(ctx, service.delete(transaction_id))
    click.echo(f"Deleted transaction {deleted.id} ({deleted.description})")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")

"""CLI helpers for parsing option values."""

from datetime import date

import click

from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.date_parser import parse_date


def amount_or_exit(ctx: click.Context, value: str | None) -> float | None:
    """Parse an amount option, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def date_or_exit(ctx: click.Context, value: str | None) -> date | None:
    """Parse a date option, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

"""CLI helpers for account resolution and error handling."""

from __future__ import annotations

import click

from fintrack.cli.error_handling import handle_domain_error, run_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.errors import NotFoundError
from fintrack.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | None
) -> str | None:
    """Resolve account name or ID, or exit with a CLI error.

    Returns None when no account was given.
    """
    if account is None:
        return None
    accounts = run_or_exit(ctx, account_service.get_all())
    try:
        return resolve_account(accounts, account)
    except NotFoundError as exc:
        handle_domain_error(ctx, exc)

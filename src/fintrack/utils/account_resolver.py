"""Utility for resolving account names to IDs."""

from typing import Sequence

from fintrack.domain.entities import Account
from fintrack.domain.errors import NotFoundError


def resolve_account(accounts: Sequence[Account], account: str) -> str:
    """Resolve account name or ID to account ID.

    IDs win over names when a value matches both.

    Args:
        accounts: Accounts to search
        account: Account ID or name (names compare case-insensitively)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    for acc in accounts:
        if acc.id == account:
            return acc.id

    wanted = account.strip().lower()
    for acc in accounts:
        if acc.name.lower() == wanted:
            return acc.id

    raise NotFoundError("account", account)

"""Account domain service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from fintrack.domain.entities import Account, AccountPatch
from fintrack.domain.validation import require_field, simulate_latency

if TYPE_CHECKING:
    from fintrack.database.base import Database


class AccountService:
    """Service for managing accounts."""

    DELAYS_MS = {"get_all": 250, "get_by_id": 200, "create": 400, "update": 350, "delete": 250}

    def __init__(self, db: Database, latency_scale: float = 0.0):
        """Initialize account service.

        Args:
            db: Record store
            latency_scale: Multiplier for the simulated round trip of each call
        """
        self.db = db
        self.latency_scale = latency_scale

    async def get_all(self) -> list[Account]:
        await simulate_latency(self.DELAYS_MS["get_all"], self.latency_scale)
        return self.db.list_accounts()

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        await simulate_latency(self.DELAYS_MS["get_by_id"], self.latency_scale)
        return self.db.get_account(account_id)

    async def create(self, name: Optional[str], balance: float = 0.0) -> Account:
        """Create an account. The store stamps ``last_sync``.

        Raises:
            MissingFieldError: If name is missing
        """
        require_field("account", "name", name)
        await simulate_latency(self.DELAYS_MS["create"], self.latency_scale)
        return self.db.create_account(name=name.strip(), balance=float(balance or 0.0))

    async def update(self, account_id: str, patch: AccountPatch) -> Account:
        """Apply a patch and refresh ``last_sync``.

        Raises:
            NotFoundError: If the account does not exist
        """
        if patch.name is not None:
            require_field("account", "name", patch.name)
        await simulate_latency(self.DELAYS_MS["update"], self.latency_scale)
        return self.db.update_account(account_id, patch)

    async def delete(self, account_id: str) -> Account:
        """Delete an account. Its transactions are kept.

        Raises:
            NotFoundError: If the account does not exist
        """
        await simulate_latency(self.DELAYS_MS["delete"], self.latency_scale)
        return self.db.delete_account(account_id)

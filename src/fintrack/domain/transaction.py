"""Transaction domain service."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING, Iterable, Optional

from fintrack.domain.entities import Transaction, TransactionPatch, TransactionType
from fintrack.domain.validation import (
    coerce_choice,
    coerce_optional_choice,
    require_field,
    simulate_latency,
)

if TYPE_CHECKING:
    from fintrack.database.base import Database

TYPE_FILTERS = ("all", "income", "expense")


def filter_transactions(
    transactions: Iterable[Transaction], type_filter: str = "all", term: str = ""
) -> list[Transaction]:
    """Filter by transaction type and a case-insensitive search term.

    The term matches against description and category.
    """
    needle = term.strip().lower()
    results = []
    for txn in transactions:
        if type_filter != "all" and txn.type != type_filter:
            continue
        if needle and needle not in (txn.description or "").lower() and needle not in (
            txn.category or ""
        ).lower():
            continue
        results.append(txn)
    return results


class TransactionService:
    """Service for managing transactions."""

    DELAYS_MS = {"get_all": 300, "get_by_id": 200, "create": 400, "update": 350, "delete": 250}

    def __init__(self, db: Database, latency_scale: float = 0.0):
        """Initialize transaction service.

        Args:
            db: Record store
            latency_scale: Multiplier for the simulated round trip of each call
        """
        self.db = db
        self.latency_scale = latency_scale

    async def get_all(self) -> list[Transaction]:
        """Return all transactions, newest first."""
        await simulate_latency(self.DELAYS_MS["get_all"], self.latency_scale)
        return self.db.list_transactions()

    async def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        await simulate_latency(self.DELAYS_MS["get_by_id"], self.latency_scale)
        return self.db.get_transaction(transaction_id)

    async def create(
        self,
        description: Optional[str],
        amount: Optional[float],
        category: str = "",
        type: TransactionType | str = TransactionType.EXPENSE,
        account_id: Optional[str] = None,
        date: Optional[date] = None,
    ) -> Transaction:
        """Create a transaction.

        Args:
            description: Transaction description (required)
            amount: Amount as entered (required)
            category: Category label, may be empty
            type: "income" or "expense"
            account_id: Owning account; defaults to the first account
            date: Transaction date; defaults to today

        Returns:
            The stored transaction

        Raises:
            MissingFieldError: If description or amount is missing
            ValidationError: If type is not a known transaction type
        """
        require_field("transaction", "description", description)
        require_field("transaction", "amount", amount)
        txn_type = coerce_choice(TransactionType, type, "type")

        await simulate_latency(self.DELAYS_MS["create"], self.latency_scale)
        if account_id is None:
            accounts = self.db.list_accounts()
            account_id = accounts[0].id if accounts else "default"

        return self.db.create_transaction(
            description=description.strip(),
            amount=float(amount),
            category=category or "",
            type=txn_type,
            account_id=account_id,
            date=date or _today(),
        )

    async def update(self, transaction_id: str, patch: TransactionPatch) -> Transaction:
        """Apply a patch to a transaction.

        Raises:
            NotFoundError: If the transaction does not exist
            MissingFieldError: If the patch blanks the description
        """
        if patch.description is not None:
            require_field("transaction", "description", patch.description)
        patch = replace(patch, type=coerce_optional_choice(TransactionType, patch.type, "type"))
        await simulate_latency(self.DELAYS_MS["update"], self.latency_scale)
        return self.db.update_transaction(transaction_id, patch)

    async def delete(self, transaction_id: str) -> Transaction:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction does not exist
        """
        await simulate_latency(self.DELAYS_MS["delete"], self.latency_scale)
        return self.db.delete_transaction(transaction_id)

    async def search(self, type_filter: str = "all", term: str = "") -> list[Transaction]:
        """Return transactions matching a type filter and search term."""
        return filter_transactions(await self.get_all(), type_filter, term)


def _today() -> date:
    return date.today()

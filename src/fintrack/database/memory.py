"""In-memory record store."""

import uuid
from dataclasses import replace
from datetime import UTC, date, datetime
from typing import Callable, Optional, Sequence, TypeVar

from fintrack.database.base import Database
from fintrack.domain.entities import (
    Account,
    AccountPatch,
    Budget,
    BudgetPatch,
    BudgetPeriod,
    Goal,
    GoalCategory,
    GoalPatch,
    Transaction,
    TransactionPatch,
    TransactionType,
)
from fintrack.domain.errors import NotFoundError
from fintrack.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T", Transaction, Account, Budget, Goal)


def generate_id() -> str:
    """Return a new random record identifier."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(UTC)


class MemoryDatabase(Database):
    """Record store keeping one list per entity type on the instance.

    Nothing is shared between instances, so every test or process builds its
    own store and passes it to the services that need it.
    """

    def __init__(
        self,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize an empty store.

        Args:
            id_factory: Callable returning a new identifier for each create
            clock: Callable returning the current timestamp
        """
        self.id_factory = id_factory
        self.clock = clock
        self._transactions: list[Transaction] = []
        self._accounts: list[Account] = []
        self._budgets: list[Budget] = []
        self._goals: list[Goal] = []

    def connect(self) -> None:
        """Connect to the store (no-op for memory)."""
        pass

    def disconnect(self) -> None:
        """Disconnect from the store (no-op for memory)."""
        pass

    def initialize_schema(self) -> None:
        """Nothing to create for memory."""
        pass

    def is_empty(self) -> bool:
        return not (self._transactions or self._accounts or self._budgets or self._goals)

    def _find_index(self, records: list[T], record_id: str, entity: str) -> int:
        for index, record in enumerate(records):
            if record.id == record_id:
                return index
        raise NotFoundError(entity, record_id)

    def _find(self, records: list[T], record_id: str) -> Optional[T]:
        for record in records:
            if record.id == record_id:
                return record
        return None

    def _update(self, records: list[T], record_id: str, entity: str, changes: dict) -> T:
        index = self._find_index(records, record_id, entity)
        updated = replace(records[index], **changes)
        records[index] = updated
        logger.debug(f"{entity}.updated", id=record_id, fields=sorted(changes))
        return updated

    def _delete(self, records: list[T], record_id: str, entity: str) -> T:
        index = self._find_index(records, record_id, entity)
        deleted = records.pop(index)
        logger.debug(f"{entity}.deleted", id=record_id)
        return deleted

    # Transaction operations
    def create_transaction(
        self,
        description: str,
        amount: float,
        category: str,
        type: TransactionType,
        account_id: str,
        date: date,
        transaction_id: Optional[str] = None,
    ) -> Transaction:
        """Create a transaction at the head of the list."""
        transaction = Transaction(
            id=transaction_id or self.id_factory(),
            description=description,
            amount=amount,
            category=category,
            type=TransactionType(type),
            account_id=account_id,
            date=date,
        )
        self._transactions.insert(0, transaction)
        logger.debug("transaction.created", id=transaction.id)
        return transaction

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self._find(self._transactions, transaction_id)

    def list_transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def update_transaction(self, transaction_id: str, patch: TransactionPatch) -> Transaction:
        return self._update(self._transactions, transaction_id, "transaction", patch.changes())

    def delete_transaction(self, transaction_id: str) -> Transaction:
        return self._delete(self._transactions, transaction_id, "transaction")

    # Account operations
    def create_account(
        self, name: str, balance: float = 0.0, account_id: Optional[str] = None,
        last_sync: Optional[datetime] = None,
    ) -> Account:
        account = Account(
            id=account_id or self.id_factory(),
            name=name,
            balance=balance,
            last_sync=last_sync or self.clock(),
        )
        self._accounts.append(account)
        logger.debug("account.created", id=account.id)
        return account

    def get_account(self, account_id: str) -> Optional[Account]:
        return self._find(self._accounts, account_id)

    def list_accounts(self) -> list[Account]:
        return list(self._accounts)

    def update_account(self, account_id: str, patch: AccountPatch) -> Account:
        changes = patch.changes()
        changes["last_sync"] = self.clock()
        return self._update(self._accounts, account_id, "account", changes)

    def delete_account(self, account_id: str) -> Account:
        return self._delete(self._accounts, account_id, "account")

    # Budget operations
    def create_budget(
        self,
        name: str,
        total_amount: float,
        period: BudgetPeriod,
        start_date: datetime,
        end_date: datetime,
        categories: Sequence[str] = (),
        budget_id: Optional[str] = None,
    ) -> Budget:
        budget = Budget(
            id=budget_id or self.id_factory(),
            name=name,
            total_amount=total_amount,
            period=BudgetPeriod(period),
            start_date=start_date,
            end_date=end_date,
            categories=tuple(categories),
        )
        self._budgets.append(budget)
        logger.debug("budget.created", id=budget.id)
        return budget

    def get_budget(self, budget_id: str) -> Optional[Budget]:
        return self._find(self._budgets, budget_id)

    def list_budgets(self) -> list[Budget]:
        return list(self._budgets)

    def update_budget(self, budget_id: str, patch: BudgetPatch) -> Budget:
        changes = patch.changes()
        if "categories" in changes:
            changes["categories"] = tuple(changes["categories"])
        return self._update(self._budgets, budget_id, "budget", changes)

    def delete_budget(self, budget_id: str) -> Budget:
        return self._delete(self._budgets, budget_id, "budget")

    # Goal operations
    def create_goal(
        self,
        name: str,
        target_amount: float,
        current_amount: float = 0.0,
        category: GoalCategory = GoalCategory.SAVINGS,
        deadline: Optional[date] = None,
        milestones: Sequence[str] = (),
        goal_id: Optional[str] = None,
    ) -> Goal:
        goal = Goal(
            id=goal_id or self.id_factory(),
            name=name,
            target_amount=target_amount,
            current_amount=current_amount,
            category=GoalCategory(category),
            deadline=deadline,
            milestones=tuple(milestones),
        )
        self._goals.append(goal)
        logger.debug("goal.created", id=goal.id)
        return goal

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        return self._find(self._goals, goal_id)

    def list_goals(self) -> list[Goal]:
        return list(self._goals)

    def update_goal(self, goal_id: str, patch: GoalPatch) -> Goal:
        changes = patch.changes()
        if "milestones" in changes:
            changes["milestones"] = tuple(changes["milestones"])
        return self._update(self._goals, goal_id, "goal", changes)

    def delete_goal(self, goal_id: str) -> Goal:
        return self._delete(self._goals, goal_id, "goal")

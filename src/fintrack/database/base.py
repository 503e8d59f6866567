"""Abstract record store interface."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
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


class Database(ABC):
    """Abstract record store for fintrack.

    Stores own identity assignment and timestamps. Every mutation is applied
    in one step; implementations never yield control half way through.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Prepare the store for use (create tables)."""
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        """Return True when the store holds no records of any kind."""
        pass

    # Transaction operations
    @abstractmethod
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
        """Create a transaction. New transactions are listed first."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """List all transactions, newest insert first."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: str, patch: TransactionPatch) -> Transaction:
        """Apply a patch. Raises NotFoundError when the ID is absent."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> Transaction:
        """Delete and return a transaction. Raises NotFoundError when absent."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self, name: str, balance: float = 0.0, account_id: Optional[str] = None,
        last_sync: Optional[datetime] = None,
    ) -> Account:
        """Create an account, stamping last_sync."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts in insertion order."""
        pass

    @abstractmethod
    def update_account(self, account_id: str, patch: AccountPatch) -> Account:
        """Apply a patch and refresh last_sync. Raises NotFoundError when absent."""
        pass

    @abstractmethod
    def delete_account(self, account_id: str) -> Account:
        """Delete and return an account. Transactions are left untouched."""
        pass

    # Budget operations
    @abstractmethod
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
        """Create a budget."""
        pass

    @abstractmethod
    def get_budget(self, budget_id: str) -> Optional[Budget]:
        """Get budget by ID."""
        pass

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        """List all budgets in insertion order."""
        pass

    @abstractmethod
    def update_budget(self, budget_id: str, patch: BudgetPatch) -> Budget:
        """Apply a patch. Raises NotFoundError when absent."""
        pass

    @abstractmethod
    def delete_budget(self, budget_id: str) -> Budget:
        """Delete and return a budget. Raises NotFoundError when absent."""
        pass

    # Goal operations
    @abstractmethod
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
        """Create a goal."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: str) -> Optional[Goal]:
        """Get goal by ID."""
        pass

    @abstractmethod
    def list_goals(self) -> list[Goal]:
        """List all goals in insertion order."""
        pass

    @abstractmethod
    def update_goal(self, goal_id: str, patch: GoalPatch) -> Goal:
        """Apply a patch. Raises NotFoundError when absent."""
        pass

    @abstractmethod
    def delete_goal(self, goal_id: str) -> Goal:
        """Delete and return a goal. Raises NotFoundError when absent."""
        pass

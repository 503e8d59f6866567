"""Generic SQLAlchemy record store implementation."""

import uuid
from datetime import UTC, date, datetime
from typing import Callable, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fintrack.database.base import Database
from fintrack.database.mappers import (
    account_to_domain,
    budget_to_domain,
    goal_to_domain,
    transaction_to_domain,
)
from fintrack.database.models import (
    Account,
    Budget,
    Goal,
    Transaction,
    create_session_factory,
)
from fintrack.domain.entities import (
    Account as DomainAccount,
    AccountPatch,
    Budget as DomainBudget,
    BudgetPatch,
    BudgetPeriod,
    Goal as DomainGoal,
    GoalCategory,
    GoalPatch,
    Transaction as DomainTransaction,
    TransactionPatch,
    TransactionType,
)
from fintrack.domain.errors import NotFoundError
from fintrack.log import get_logger

logger = get_logger(__name__)

ENUM_COLUMNS = ("type", "period", "category")


def _column_value(name: str, value):
    if name in ENUM_COLUMNS and hasattr(value, "value"):
        return value.value
    if name in ("categories", "milestones"):
        return list(value)
    return value


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(
        self,
        database_url: str = "sqlite://",
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        """Initialize SQLAlchemy record store.

        Args:
            database_url: SQLAlchemy database URL. The default keeps everything
                in memory for the lifetime of the process.
            clock: Callable returning the current timestamp
        """
        self.database_url = database_url
        self.clock = clock
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def _commit(self, session: Session) -> None:
        """Commit, rolling back on failure so the session stays usable."""
        try:
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise

    def _next_sequence(self, model) -> int:
        session = self._get_session()
        current = session.query(func.max(model.sequence)).scalar()
        return (current or 0) + 1

    def _require(self, model, record_id: str, entity: str):
        row = self._get_session().get(model, record_id)
        if row is None:
            raise NotFoundError(entity, record_id)
        return row

    def _apply(self, model, record_id: str, entity: str, changes: dict):
        session = self._get_session()
        row = self._require(model, record_id, entity)
        for name, value in changes.items():
            setattr(row, name, _column_value(name, value))
        self._commit(session)
        logger.debug(f"{entity}.updated", id=record_id, fields=sorted(changes))
        return row

    def _remove(self, model, record_id: str, entity: str):
        session = self._get_session()
        row = self._require(model, record_id, entity)
        session.delete(row)
        self._commit(session)
        logger.debug(f"{entity}.deleted", id=record_id)
        return row

    def _add(self, row, entity: str) -> None:
        session = self._get_session()
        session.add(row)
        self._commit(session)
        logger.debug(f"{entity}.created", id=row.id)

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def is_empty(self) -> bool:
        session = self._get_session()
        return all(
            session.query(model).first() is None
            for model in (Transaction, Account, Budget, Goal)
        )

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
    ) -> DomainTransaction:
        row = Transaction(
            id=transaction_id or uuid.uuid4().hex,
            sequence=self._next_sequence(Transaction),
            description=description,
            amount=amount,
            category=category,
            type=TransactionType(type).value,
            account_id=account_id,
            date=date,
        )
        self._add(row, "transaction")
        return transaction_to_domain(row)

    def get_transaction(self, transaction_id: str) -> Optional[DomainTransaction]:
        row = self._get_session().get(Transaction, transaction_id)
        if row is None:
            return None
        return transaction_to_domain(row)

    def list_transactions(self) -> list[DomainTransaction]:
        session = self._get_session()
        rows = session.query(Transaction).order_by(Transaction.sequence.desc()).all()
        return [transaction_to_domain(row) for row in rows]

    def update_transaction(self, transaction_id: str, patch: TransactionPatch) -> DomainTransaction:
        row = self._apply(Transaction, transaction_id, "transaction", patch.changes())
        return transaction_to_domain(row)

    def delete_transaction(self, transaction_id: str) -> DomainTransaction:
        return transaction_to_domain(self._remove(Transaction, transaction_id, "transaction"))

    # Account operations
    def create_account(
        self, name: str, balance: float = 0.0, account_id: Optional[str] = None,
        last_sync: Optional[datetime] = None,
    ) -> DomainAccount:
        row = Account(
            id=account_id or uuid.uuid4().hex,
            sequence=self._next_sequence(Account),
            name=name,
            balance=balance,
            last_sync=last_sync or self.clock(),
        )
        self._add(row, "account")
        return account_to_domain(row)

    def get_account(self, account_id: str) -> Optional[DomainAccount]:
        row = self._get_session().get(Account, account_id)
        if row is None:
            return None
        return account_to_domain(row)

    def list_accounts(self) -> list[DomainAccount]:
        session = self._get_session()
        rows = session.query(Account).order_by(Account.sequence).all()
        return [account_to_domain(row) for row in rows]

    def update_account(self, account_id: str, patch: AccountPatch) -> DomainAccount:
        changes = patch.changes()
        changes["last_sync"] = self.clock()
        return account_to_domain(self._apply(Account, account_id, "account", changes))

    def delete_account(self, account_id: str) -> DomainAccount:
        return account_to_domain(self._remove(Account, account_id, "account"))

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
    ) -> DomainBudget:
        row = Budget(
            id=budget_id or uuid.uuid4().hex,
            sequence=self._next_sequence(Budget),
            name=name,
            total_amount=total_amount,
            period=BudgetPeriod(period).value,
            start_date=start_date,
            end_date=end_date,
            categories=list(categories),
        )
        self._add(row, "budget")
        return budget_to_domain(row)

    def get_budget(self, budget_id: str) -> Optional[DomainBudget]:
        row = self._get_session().get(Budget, budget_id)
        if row is None:
            return None
        return budget_to_domain(row)

    def list_budgets(self) -> list[DomainBudget]:
        session = self._get_session()
        rows = session.query(Budget).order_by(Budget.sequence).all()
        return [budget_to_domain(row) for row in rows]

    def update_budget(self, budget_id: str, patch: BudgetPatch) -> DomainBudget:
        return budget_to_domain(self._apply(Budget, budget_id, "budget", patch.changes()))

    def delete_budget(self, budget_id: str) -> DomainBudget:
        return budget_to_domain(self._remove(Budget, budget_id, "budget"))

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
    ) -> DomainGoal:
        row = Goal(
            id=goal_id or uuid.uuid4().hex,
            sequence=self._next_sequence(Goal),
            name=name,
            target_amount=target_amount,
            current_amount=current_amount,
            category=GoalCategory(category).value,
            deadline=deadline,
            milestones=list(milestones),
        )
        self._add(row, "goal")
        return goal_to_domain(row)

    def get_goal(self, goal_id: str) -> Optional[DomainGoal]:
        row = self._get_session().get(Goal, goal_id)
        if row is None:
            return None
        return goal_to_domain(row)

    def list_goals(self) -> list[DomainGoal]:
        session = self._get_session()
        rows = session.query(Goal).order_by(Goal.sequence).all()
        return [goal_to_domain(row) for row in rows]

    def update_goal(self, goal_id: str, patch: GoalPatch) -> DomainGoal:
        return goal_to_domain(self._apply(Goal, goal_id, "goal", patch.changes()))

    def delete_goal(self, goal_id: str) -> DomainGoal:
        return goal_to_domain(self._remove(Goal, goal_id, "goal"))

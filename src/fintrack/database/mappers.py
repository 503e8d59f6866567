"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic, so the table layout can change
without touching the services or the aggregation code.
"""

from datetime import UTC, datetime
from typing import Optional

from fintrack.domain import entities as domain
from fintrack.database.models import (
    Account as ORMAccount,
    Budget as ORMBudget,
    Goal as ORMGoal,
    Transaction as ORMTransaction,
)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to timestamps that came back naive (SQLite drops offsets)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        category=orm_transaction.category,
        type=domain.TransactionType(orm_transaction.type),
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        balance=orm_account.balance,
        last_sync=as_utc(orm_account.last_sync),
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        name=orm_budget.name,
        total_amount=orm_budget.total_amount,
        period=domain.BudgetPeriod(orm_budget.period),
        start_date=as_utc(orm_budget.start_date),
        end_date=as_utc(orm_budget.end_date),
        categories=tuple(orm_budget.categories or ()),
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        name=orm_goal.name,
        target_amount=orm_goal.target_amount,
        current_amount=orm_goal.current_amount,
        category=domain.GoalCategory(orm_goal.category),
        deadline=orm_goal.deadline,
        milestones=tuple(orm_goal.milestones or ()),
    )

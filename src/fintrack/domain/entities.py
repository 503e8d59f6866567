"""Domain model entities for fintrack.

These are pure data classes representing business concepts, independent of
the record store backing them. Updates go through the explicit patch classes
below so a store never merges fields it does not know about.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional

from fintrack.domain.errors import ValidationError, unknown_patch_fields


class TransactionType(str, Enum):
    """Direction of money for a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class BudgetPeriod(str, Enum):
    """Budget recurrence period."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class GoalCategory(str, Enum):
    """Kind of savings goal."""

    SAVINGS = "savings"
    INVESTMENT = "investment"
    DEBT = "debt"
    PURCHASE = "purchase"
    TRAVEL = "travel"
    OTHER = "other"


DEFAULT_CATEGORY = "Other"

TRANSACTION_CATEGORIES = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Travel",
    "Education",
    "Investment",
    "Savings",
    DEFAULT_CATEGORY,
)


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is stored as entered. Its sign is not authoritative: branch on
    ``type`` and use ``absolute_amount`` for totals.
    """

    id: str
    description: str
    amount: float
    category: str
    type: TransactionType
    account_id: str
    date: date

    @property
    def absolute_amount(self) -> float:
        """Magnitude of ``amount``. Missing or unreadable amounts count as 0."""
        try:
            value = float(self.amount or 0.0)
        except (TypeError, ValueError):
            return 0.0
        return abs(value) if math.isfinite(value) else 0.0

    @property
    def signed_amount(self) -> float:
        """Amount signed by type, positive for income."""
        if self.type == TransactionType.INCOME:
            return self.absolute_amount
        return -self.absolute_amount


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: str
    name: str
    balance: float
    last_sync: datetime


@dataclass(frozen=True)
class Budget:
    """Budget domain entity."""

    id: str
    name: str
    total_amount: float
    period: BudgetPeriod
    start_date: datetime
    end_date: datetime
    categories: tuple[str, ...] = ()


@dataclass(frozen=True)
class Goal:
    """Savings goal domain entity."""

    id: str
    name: str
    target_amount: float
    current_amount: float
    category: GoalCategory
    deadline: Optional[date] = None
    milestones: tuple[str, ...] = ()

    @property
    def is_complete(self) -> bool:
        """True once the saved amount reaches the target. A missing target counts as 1."""
        return (self.current_amount or 0.0) >= (self.target_amount or 1.0)

    @property
    def progress(self) -> float:
        """Completion percentage, capped at 100."""
        if not self.target_amount or self.target_amount <= 0:
            return 0.0
        return min(100.0, (self.current_amount or 0.0) / self.target_amount * 100)


class _Patch:
    """Mixin for typed partial updates.

    Fields left as ``None`` are not applied.
    """

    def changes(self) -> dict[str, Any]:
        """Return the fields set on this patch."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)  # type: ignore[arg-type]
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.changes()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]):
        """Build a patch from a mapping, rejecting unknown keys."""
        allowed = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise ValidationError(unknown_patch_fields(cls.__name__, unknown))
        return cls(**dict(data))


@dataclass(frozen=True)
class TransactionPatch(_Patch):
    description: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    type: Optional[TransactionType] = None
    account_id: Optional[str] = None
    date: Optional[date] = None


@dataclass(frozen=True)
class AccountPatch(_Patch):
    name: Optional[str] = None
    balance: Optional[float] = None


@dataclass(frozen=True)
class BudgetPatch(_Patch):
    name: Optional[str] = None
    total_amount: Optional[float] = None
    period: Optional[BudgetPeriod] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    categories: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class GoalPatch(_Patch):
    name: Optional[str] = None
    target_amount: Optional[float] = None
    current_amount: Optional[float] = None
    category: Optional[GoalCategory] = None
    deadline: Optional[date] = None
    milestones: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class MonthlyBucket:
    """One calendar month of expense totals."""

    key: str
    label: str
    amount: float
    count: int


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total for one category."""

    category: str
    amount: float


@dataclass(frozen=True)
class SpendingInsights:
    """Derived spending metrics for a trailing window of months."""

    window_months: int
    start_date: date
    end_date: date
    monthly_spending: tuple[MonthlyBucket, ...]
    category_breakdown: tuple[CategoryTotal, ...]
    total_spent: float
    avg_monthly_spending: float
    current_month_spending: float
    previous_month_spending: float
    spending_change: float
    transaction_count: int

    def category_share(self, category_total: CategoryTotal) -> float:
        """Percentage of total spending taken by a category."""
        if self.total_spent <= 0:
            return 0.0
        return category_total.amount / self.total_spent * 100

    def top_categories(self, limit: int = 8) -> tuple[CategoryTotal, ...]:
        return self.category_breakdown[:limit]

    def recent_months(self, count: int = 6) -> tuple[MonthlyBucket, ...]:
        return self.monthly_spending[-count:]


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures for the dashboard view."""

    total_balance: float
    monthly_spending: float
    savings_rate: int
    completed_goals: int
    goal_count: int
    recent_transactions: tuple[Transaction, ...] = field(default_factory=tuple)

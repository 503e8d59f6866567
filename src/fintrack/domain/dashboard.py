"""Dashboard summary domain service."""

import asyncio
import math
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from fintrack.domain.account import AccountService
from fintrack.domain.entities import (
    Account,
    DashboardSummary,
    Goal,
    Transaction,
    TransactionType,
)
from fintrack.domain.goal import GoalService
from fintrack.domain.transaction import TransactionService
from fintrack.utils.date_parser import coerce_date

RECENT_TRANSACTION_COUNT = 5


def month_spending(transactions: Iterable[Transaction], today: date) -> float:
    """Sum absolute expenses dated in the calendar month of ``today``."""
    total = 0.0
    for txn in transactions:
        if txn.type != TransactionType.EXPENSE:
            continue
        day = coerce_date(txn.date)
        if day is not None and (day.year, day.month) == (today.year, today.month):
            total += txn.absolute_amount
    return total


def savings_rate(total_balance: float, spending: float) -> int:
    """Share of the balance left after this month's spending, in whole percent."""
    if total_balance <= 0:
        return 0
    # halves round up
    return math.floor((total_balance - spending) / total_balance * 100 + 0.5)


def build_dashboard(
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
    goals: Sequence[Goal],
    now: Optional[datetime | date] = None,
) -> DashboardSummary:
    """Compute the dashboard headline figures."""
    if now is None:
        today = date.today()
    elif isinstance(now, datetime):
        today = now.date()
    else:
        today = now

    total_balance = sum(account.balance or 0.0 for account in accounts)
    spending = month_spending(transactions, today)
    dated = [(coerce_date(txn.date), txn) for txn in transactions]
    recent = [
        txn
        for _, txn in sorted(
            ((day, txn) for day, txn in dated if day is not None),
            key=lambda pair: pair[0],
            reverse=True,
        )
    ][:RECENT_TRANSACTION_COUNT]

    return DashboardSummary(
        total_balance=total_balance,
        monthly_spending=spending,
        savings_rate=savings_rate(total_balance, spending),
        completed_goals=sum(1 for goal in goals if goal.is_complete),
        goal_count=len(goals),
        recent_transactions=tuple(recent),
    )


class DashboardService:
    """Service gathering records for the dashboard."""

    def __init__(
        self,
        account_service: AccountService,
        transaction_service: TransactionService,
        goal_service: GoalService,
    ):
        self.account_service = account_service
        self.transaction_service = transaction_service
        self.goal_service = goal_service

    async def summary(self, now: Optional[datetime | date] = None) -> DashboardSummary:
        """Load accounts, transactions and goals concurrently and summarize them."""
        accounts, transactions, goals = await asyncio.gather(
            self.account_service.get_all(),
            self.transaction_service.get_all(),
            self.goal_service.get_all(),
        )
        return build_dashboard(accounts, transactions, goals, now)

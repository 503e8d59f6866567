"""Domain layer for fintrack application."""

from fintrack.domain.transaction import TransactionService
from fintrack.domain.account import AccountService
from fintrack.domain.budget import BudgetService
from fintrack.domain.goal import GoalService
from fintrack.domain.insights import InsightsService, build_spending_insights
from fintrack.domain.dashboard import DashboardService, build_dashboard

__all__ = [
    "TransactionService",
    "AccountService",
    "BudgetService",
    "GoalService",
    "InsightsService",
    "DashboardService",
    "build_spending_insights",
    "build_dashboard",
]

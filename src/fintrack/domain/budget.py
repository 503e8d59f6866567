"""Budget domain service."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from fintrack.domain.entities import Budget, BudgetPatch, BudgetPeriod
from fintrack.domain.validation import (
    coerce_choice,
    coerce_optional_choice,
    require_field,
    simulate_latency,
)

if TYPE_CHECKING:
    from fintrack.database.base import Database

DEFAULT_BUDGET_LENGTH = timedelta(days=30)


class BudgetService:
    """Service for managing budgets."""

    DELAYS_MS = {"get_all": 280, "get_by_id": 200, "create": 450, "update": 380, "delete": 300}

    def __init__(
        self,
        db: Database,
        latency_scale: float = 0.0,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        """Initialize budget service.

        Args:
            db: Record store
            latency_scale: Multiplier for the simulated round trip of each call
            clock: Callable returning the current timestamp, used for defaults
        """
        self.db = db
        self.latency_scale = latency_scale
        self.clock = clock

    async def get_all(self) -> list[Budget]:
        await simulate_latency(self.DELAYS_MS["get_all"], self.latency_scale)
        return self.db.list_budgets()

    async def get_by_id(self, budget_id: str) -> Optional[Budget]:
        await simulate_latency(self.DELAYS_MS["get_by_id"], self.latency_scale)
        return self.db.get_budget(budget_id)

    async def create(
        self,
        name: Optional[str],
        total_amount: Optional[float],
        period: BudgetPeriod | str = BudgetPeriod.MONTHLY,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        categories: Sequence[str] = (),
    ) -> Budget:
        """Create a budget.

        The budget starts now and runs for 30 days unless dates are given.

        Raises:
            MissingFieldError: If name or total amount is missing
            ValidationError: If period is not weekly, monthly or yearly
        """
        require_field("budget", "name", name)
        require_field("budget", "total_amount", total_amount)
        budget_period = coerce_choice(BudgetPeriod, period, "period")

        await simulate_latency(self.DELAYS_MS["create"], self.latency_scale)
        now = self.clock()
        return self.db.create_budget(
            name=name.strip(),
            total_amount=float(total_amount),
            period=budget_period,
            start_date=start_date or now,
            end_date=end_date or now + DEFAULT_BUDGET_LENGTH,
            categories=categories,
        )

    async def update(self, budget_id: str, patch: BudgetPatch) -> Budget:
        """Apply a patch to a budget.

        Raises:
            NotFoundError: If the budget does not exist
        """
        if patch.name is not None:
            require_field("budget", "name", patch.name)
        patch = replace(patch, period=coerce_optional_choice(BudgetPeriod, patch.period, "period"))
        await simulate_latency(self.DELAYS_MS["update"], self.latency_scale)
        return self.db.update_budget(budget_id, patch)

    async def delete(self, budget_id: str) -> Budget:
        """Delete a budget.

        Raises:
            NotFoundError: If the budget does not exist
        """
        await simulate_latency(self.DELAYS_MS["delete"], self.latency_scale)
        return self.db.delete_budget(budget_id)

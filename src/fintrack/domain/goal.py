"""Goal domain service."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING, Optional, Sequence

from fintrack.domain.entities import Goal, GoalCategory, GoalPatch
from fintrack.domain.validation import (
    coerce_choice,
    coerce_optional_choice,
    require_field,
    simulate_latency,
)

if TYPE_CHECKING:
    from fintrack.database.base import Database


class GoalService:
    """Service for managing savings goals."""

    DELAYS_MS = {"get_all": 320, "get_by_id": 200, "create": 500, "update": 400, "delete": 280}

    def __init__(self, db: Database, latency_scale: float = 0.0):
        """Initialize goal service.

        Args:
            db: Record store
            latency_scale: Multiplier for the simulated round trip of each call
        """
        self.db = db
        self.latency_scale = latency_scale

    async def get_all(self) -> list[Goal]:
        await simulate_latency(self.DELAYS_MS["get_all"], self.latency_scale)
        return self.db.list_goals()

    async def get_by_id(self, goal_id: str) -> Optional[Goal]:
        await simulate_latency(self.DELAYS_MS["get_by_id"], self.latency_scale)
        return self.db.get_goal(goal_id)

    async def create(
        self,
        name: Optional[str],
        target_amount: Optional[float],
        current_amount: Optional[float] = None,
        category: GoalCategory | str = GoalCategory.SAVINGS,
        deadline: Optional[date] = None,
        milestones: Sequence[str] = (),
    ) -> Goal:
        """Create a goal.

        Raises:
            MissingFieldError: If name or target amount is missing
            ValidationError: If category is not a known goal category
        """
        require_field("goal", "name", name)
        require_field("goal", "target_amount", target_amount)
        goal_category = coerce_choice(GoalCategory, category, "category")

        await simulate_latency(self.DELAYS_MS["create"], self.latency_scale)
        return self.db.create_goal(
            name=name.strip(),
            target_amount=float(target_amount),
            current_amount=float(current_amount or 0.0),
            category=goal_category,
            deadline=deadline,
            milestones=milestones,
        )

    async def update(self, goal_id: str, patch: GoalPatch) -> Goal:
        """Apply a patch to a goal.

        Raises:
            NotFoundError: If the goal does not exist
        """
        if patch.name is not None:
            require_field("goal", "name", patch.name)
        patch = replace(
            patch, category=coerce_optional_choice(GoalCategory, patch.category, "category")
        )
        await simulate_latency(self.DELAYS_MS["update"], self.latency_scale)
        return self.db.update_goal(goal_id, patch)

    async def delete(self, goal_id: str) -> Goal:
        """Delete a goal.

        Raises:
            NotFoundError: If the goal does not exist
        """
        await simulate_latency(self.DELAYS_MS["delete"], self.latency_scale)
        return self.db.delete_goal(goal_id)

"""Tests for the async entity services."""

import asyncio
from datetime import date, timedelta

import pytest

from fintrack.domain.account import AccountService
from fintrack.domain.budget import BudgetService
from fintrack.domain.entities import (
    AccountPatch,
    BudgetPatch,
    BudgetPeriod,
    GoalCategory,
    GoalPatch,
    TransactionPatch,
    TransactionType,
)
from fintrack.domain.errors import MissingFieldError, NotFoundError, ValidationError
from fintrack.domain.goal import GoalService
from fintrack.domain.transaction import TransactionService, filter_transactions

from conftest import FIXED_NOW


class TestTransactionService:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_lists_newest_first(
        self, transaction_service, sample_account
    ):
        first = await transaction_service.create(description="Coffee", amount=4.5)
        second = await transaction_service.create(description="Lunch", amount=12.0)

        assert first.id != second.id
        assert [txn.id for txn in await transaction_service.get_all()] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_create_defaults(self, transaction_service, sample_account):
        txn = await transaction_service.create(description="Coffee", amount=4.5)

        assert txn.type == TransactionType.EXPENSE
        assert txn.account_id == sample_account.id
        assert txn.date == date.today()
        assert txn.category == ""

    @pytest.mark.asyncio
    async def test_create_without_accounts_uses_default_account(self, transaction_service):
        txn = await transaction_service.create(description="Coffee", amount=4.5)
        assert txn.account_id == "default"

    @pytest.mark.asyncio
    async def test_rapid_creates_get_distinct_ids(self, transaction_service):
        created = await asyncio.gather(
            *(transaction_service.create(description=f"t{i}", amount=i) for i in range(50))
        )
        assert len({txn.id for txn in created}) == 50

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"description": None, "amount": 10}, "description"),
            ({"description": "  ", "amount": 10}, "description"),
            ({"description": "Coffee", "amount": None}, "amount"),
        ],
    )
    async def test_create_requires_fields(self, transaction_service, kwargs, field):
        with pytest.raises(MissingFieldError) as excinfo:
            await transaction_service.create(**kwargs)
        assert excinfo.value.field == field

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_type(self, transaction_service):
        with pytest.raises(ValidationError):
            await transaction_service.create(description="Coffee", amount=3, type="transfer")

    @pytest.mark.asyncio
    async def test_update_applies_patch(self, transaction_service):
        txn = await transaction_service.create(description="Coffee", amount=4.5)

        updated = await transaction_service.update(
            txn.id, TransactionPatch(amount=5.0, type="income")
        )

        assert updated.amount == 5.0
        assert updated.type == TransactionType.INCOME
        assert updated.description == "Coffee"
        assert (await transaction_service.get_by_id(txn.id)) == updated

    @pytest.mark.asyncio
    async def test_update_cannot_blank_description(self, transaction_service):
        txn = await transaction_service.create(description="Coffee", amount=4.5)
        with pytest.raises(MissingFieldError):
            await transaction_service.update(txn.id, TransactionPatch(description=""))

    @pytest.mark.asyncio
    async def test_delete_returns_removed(self, transaction_service):
        txn = await transaction_service.create(description="Coffee", amount=4.5)

        deleted = await transaction_service.delete(txn.id)

        assert deleted == txn
        assert await transaction_service.get_by_id(txn.id) is None

    @pytest.mark.asyncio
    async def test_search(self, transaction_service):
        await transaction_service.create(description="Groceries", amount=50, category="Food & Dining")
        await transaction_service.create(description="Salary", amount=3000, type="income")
        await transaction_service.create(description="Bus", amount=3, category="Transportation")

        assert [t.description for t in await transaction_service.search("income")] == ["Salary"]
        assert [t.description for t in await transaction_service.search(term="FOOD")] == [
            "Groceries"
        ]
        assert len(await transaction_service.search("expense")) == 2

    def test_filter_transactions_all(self, make_transaction):
        transactions = [make_transaction(1, date(2026, 1, 1)), make_transaction(2, date(2026, 1, 2))]
        assert filter_transactions(transactions) == transactions


class TestAccountService:
    @pytest.mark.asyncio
    async def test_create_and_update_refreshes_last_sync(self, memory_db):
        times = iter([FIXED_NOW, FIXED_NOW + timedelta(hours=1)])
        memory_db.clock = lambda: next(times)
        service = AccountService(memory_db)

        account = await service.create(name="Checking", balance=100)
        updated = await service.update(account.id, AccountPatch(balance=250.0))

        assert account.last_sync == FIXED_NOW
        assert updated.balance == 250.0
        assert updated.last_sync == FIXED_NOW + timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_create_requires_name(self, account_service):
        with pytest.raises(MissingFieldError):
            await account_service.create(name="")

    @pytest.mark.asyncio
    async def test_delete_keeps_transactions(self, memory_db, account_service, transaction_service):
        account = await account_service.create(name="Checking")
        await transaction_service.create(description="Rent", amount=900, account_id=account.id)

        await account_service.delete(account.id)

        remaining = await transaction_service.get_all()
        assert len(remaining) == 1
        assert remaining[0].account_id == account.id


class TestBudgetService:
    @pytest.mark.asyncio
    async def test_create_defaults_to_thirty_days(self, budget_service):
        budget = await budget_service.create(name="Groceries", total_amount=400)

        assert budget.period == BudgetPeriod.MONTHLY
        assert budget.start_date == FIXED_NOW
        assert budget.end_date == FIXED_NOW + timedelta(days=30)
        assert budget.categories == ()

    @pytest.mark.asyncio
    async def test_create_requires_total_amount(self, budget_service):
        with pytest.raises(MissingFieldError) as excinfo:
            await budget_service.create(name="Groceries", total_amount=None)
        assert excinfo.value.field == "total_amount"

    @pytest.mark.asyncio
    async def test_update_categories(self, budget_service):
        budget = await budget_service.create(
            name="Fun", total_amount=100, categories=["Entertainment"]
        )
        updated = await budget_service.update(
            budget.id, BudgetPatch(categories=("Entertainment", "Shopping"), period="weekly")
        )

        assert updated.categories == ("Entertainment", "Shopping")
        assert updated.period == BudgetPeriod.WEEKLY

    @pytest.mark.asyncio
    async def test_invalid_period(self, budget_service):
        with pytest.raises(ValidationError):
            await budget_service.create(name="Fun", total_amount=100, period="daily")


class TestGoalService:
    @pytest.mark.asyncio
    async def test_create_defaults(self, goal_service):
        goal = await goal_service.create(name="Trip", target_amount=2000)

        assert goal.current_amount == 0
        assert goal.category == GoalCategory.SAVINGS
        assert goal.milestones == ()
        assert not goal.is_complete

    @pytest.mark.asyncio
    async def test_update_to_target_completes_goal(self, goal_service):
        goal = await goal_service.create(name="Trip", target_amount=1000, current_amount=900)

        updated = await goal_service.update(goal.id, GoalPatch(current_amount=1000.0))

        assert updated.is_complete

    @pytest.mark.asyncio
    async def test_create_requires_name(self, goal_service):
        with pytest.raises(MissingFieldError):
            await goal_service.create(name=None, target_amount=10)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "service_cls, patch",
    [
        (TransactionService, TransactionPatch(amount=1.0)),
        (AccountService, AccountPatch(balance=1.0)),
        (BudgetService, BudgetPatch(total_amount=1.0)),
        (GoalService, GoalPatch(current_amount=1.0)),
    ],
)
async def test_update_and_delete_missing_id_raise_not_found(memory_db, service_cls, patch):
    service = service_cls(memory_db)

    with pytest.raises(NotFoundError):
        await service.update("missing", patch)
    with pytest.raises(NotFoundError):
        await service.delete("missing")
    assert await service.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_latency_scale_delays_calls(memory_db, monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    service = GoalService(memory_db, latency_scale=0.5)

    await service.get_all()

    assert delays == [pytest.approx(0.16)]

"""Tests for the Database interface, run against every backend."""

import pytest
from datetime import date, timedelta

from fintrack.domain import entities
from fintrack.domain.entities import (
    AccountPatch,
    BudgetPatch,
    BudgetPeriod,
    GoalCategory,
    GoalPatch,
    TransactionPatch,
    TransactionType,
)
from fintrack.domain.errors import NotFoundError

from conftest import FIXED_NOW


def _add_transaction(store, description="Coffee", amount=-4.5, day=date(2026, 10, 1)):
    return store.create_transaction(
        description=description,
        amount=amount,
        category="Food & Dining",
        type=TransactionType.EXPENSE,
        account_id="1",
        date=day,
    )


class TestTransactions:
    def test_create_returns_domain_model(self, store):
        txn = _add_transaction(store)

        assert isinstance(txn, entities.Transaction)
        assert txn.type == TransactionType.EXPENSE
        assert store.get_transaction(txn.id) == txn

    def test_list_newest_first(self, store):
        first = _add_transaction(store, "first")
        second = _add_transaction(store, "second")
        third = _add_transaction(store, "third")

        assert [t.id for t in store.list_transactions()] == [third.id, second.id, first.id]

    def test_explicit_id_is_kept(self, store):
        txn = store.create_transaction(
            description="Salary",
            amount=3000.0,
            category="Income",
            type="income",
            account_id="1",
            date=date(2026, 10, 1),
            transaction_id="42",
        )

        assert txn.id == "42"
        assert store.get_transaction("42").type == TransactionType.INCOME

    def test_update_merges_fields(self, store):
        txn = _add_transaction(store)

        updated = store.update_transaction(txn.id, TransactionPatch(category="Travel"))

        assert updated.category == "Travel"
        assert updated.description == txn.description
        assert updated.date == txn.date

    def test_delete_returns_removed_record(self, store):
        txn = _add_transaction(store)

        assert store.delete_transaction(txn.id) == txn
        assert store.get_transaction(txn.id) is None
        assert store.list_transactions() == []


class TestAccounts:
    def test_create_stamps_last_sync(self, store):
        account = store.create_account(name="Checking", balance=120.0)

        assert account.last_sync == FIXED_NOW
        assert store.list_accounts() == [account]

    def test_update_refreshes_last_sync(self, store):
        account = store.create_account(
            name="Checking", balance=120.0, last_sync=FIXED_NOW - timedelta(days=2)
        )

        updated = store.update_account(account.id, AccountPatch(name="Main checking"))

        assert updated.name == "Main checking"
        assert updated.balance == 120.0
        assert updated.last_sync == FIXED_NOW

    def test_list_in_insertion_order(self, store):
        names = ["Checking", "Savings", "Credit Card"]
        for name in names:
            store.create_account(name=name)

        assert [a.name for a in store.list_accounts()] == names


class TestBudgets:
    def test_categories_round_trip(self, store):
        budget = store.create_budget(
            name="Monthly",
            total_amount=2000.0,
            period=BudgetPeriod.MONTHLY,
            start_date=FIXED_NOW,
            end_date=FIXED_NOW + timedelta(days=30),
            categories=["Food & Dining", "Shopping"],
        )

        fetched = store.get_budget(budget.id)
        assert fetched.categories == ("Food & Dining", "Shopping")
        assert fetched.start_date == FIXED_NOW

        updated = store.update_budget(budget.id, BudgetPatch(categories=("Travel",)))
        assert updated.categories == ("Travel",)
        assert updated.total_amount == 2000.0


class TestGoals:
    def test_create_and_update(self, store):
        goal = store.create_goal(
            name="Vacation",
            target_amount=3000.0,
            current_amount=1200.0,
            category=GoalCategory.TRAVEL,
            deadline=date(2027, 6, 1),
            milestones=["Flights", "Hotel"],
        )

        assert store.get_goal(goal.id).milestones == ("Flights", "Hotel")

        updated = store.update_goal(goal.id, GoalPatch(current_amount=3000.0))
        assert updated.is_complete
        assert updated.deadline == date(2027, 6, 1)


class TestIsEmpty:
    def test_empty_store(self, store):
        assert store.is_empty()

    def test_store_with_a_goal(self, store):
        store.create_goal(name="Car", target_amount=10.0)
        assert not store.is_empty()


@pytest.mark.parametrize(
    "method, args",
    [
        ("update_transaction", (TransactionPatch(amount=1.0),)),
        ("delete_transaction", ()),
        ("update_account", (AccountPatch(balance=1.0),)),
        ("delete_account", ()),
        ("update_budget", (BudgetPatch(total_amount=1.0),)),
        ("delete_budget", ()),
        ("update_goal", (GoalPatch(current_amount=1.0),)),
        ("delete_goal", ()),
    ],
)
def test_missing_record_raises_not_found(store, method, args):
    with pytest.raises(NotFoundError) as excinfo:
        getattr(store, method)("missing", *args)

    assert excinfo.value.entity_id == "missing"


@pytest.mark.parametrize("getter", ["get_transaction", "get_account", "get_budget", "get_goal"])
def test_get_missing_returns_none(store, getter):
    assert getattr(store, getter)("missing") is None


def test_sqlite_file_persists_between_instances(temp_db_path):
    from fintrack.database.factories import create_sqlite_database

    first = create_sqlite_database(temp_db_path)
    account = first.create_account(name="Checking", balance=50.0)
    first.disconnect()

    second = create_sqlite_database(temp_db_path)
    assert second.get_account(account.id).name == "Checking"
    second.disconnect()


def test_create_database_defaults_to_memory(monkeypatch):
    from fintrack.database.factories import create_database
    from fintrack.database.memory import MemoryDatabase

    monkeypatch.delenv("FINTRACK_DB_PATH", raising=False)

    assert isinstance(create_database(), MemoryDatabase)


def test_create_database_reads_env(monkeypatch, temp_db_path):
    from fintrack.database.factories import create_database
    from fintrack.database.sqlalchemy_db import SQLAlchemyDatabase

    monkeypatch.setenv("FINTRACK_DB_PATH", temp_db_path)

    db = create_database()
    assert isinstance(db, SQLAlchemyDatabase)
    assert db.database_url.endswith("fintrack.db")


def test_failed_commit_leaves_session_usable():
    from sqlalchemy.exc import SQLAlchemyError

    from fintrack.database.factories import create_sqlite_database

    db = create_sqlite_database()
    db.create_account(name="Checking", account_id="1")

    with pytest.raises(SQLAlchemyError):
        db.create_account(name="Duplicate", account_id="1")

    assert [a.name for a in db.list_accounts()] == ["Checking"]
    db.create_account(name="Savings")
    assert [a.name for a in db.list_accounts()] == ["Checking", "Savings"]
    db.disconnect()

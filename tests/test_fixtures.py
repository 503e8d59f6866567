"""Tests for loading seed data."""

import json
from datetime import date, datetime, timedelta, UTC

import pytest

from fintrack.database.fixtures import load_fixtures
from fintrack.domain.entities import BudgetPeriod, GoalCategory, TransactionType
from fintrack.domain.insights import build_spending_insights


def test_load_bundled_fixtures(store):
    counts = load_fixtures(store)

    assert counts == {"accounts": 3, "transactions": 16, "budgets": 3, "goals": 3}
    assert not store.is_empty()


def test_transactions_keep_fixture_order(store):
    load_fixtures(store)

    transactions = store.list_transactions()
    assert [txn.id for txn in transactions[:3]] == ["1", "2", "3"]
    assert transactions[-1].id == "16"
    assert transactions[-1].category == ""


def test_records_are_typed(store):
    load_fixtures(store)

    salary = store.get_transaction("2")
    assert salary.type == TransactionType.INCOME
    assert salary.date == date(2026, 10, 1)

    account = store.get_account("1")
    assert account.name == "Main Checking"
    assert account.last_sync == datetime(2026, 10, 17, 8, 30, tzinfo=UTC)

    budget = store.get_budget("3")
    assert budget.period == BudgetPeriod.YEARLY
    assert budget.categories == ("Travel",)

    goal = store.get_goal("1")
    assert goal.category == GoalCategory.SAVINGS
    assert goal.is_complete
    assert goal.deadline == date(2026, 12, 31)


def test_demo_insights(memory_db):
    load_fixtures(memory_db)

    result = build_spending_insights(memory_db.list_transactions(), 3, now=date(2026, 10, 18))

    assert result.total_spent == pytest.approx(980.68)
    assert result.transaction_count == 9
    assert result.current_month_spending == pytest.approx(293.75)
    assert result.previous_month_spending == pytest.approx(254.78)
    assert result.spending_change == pytest.approx(15.295, abs=0.01)
    assert result.category_breakdown[0].category == "Food & Dining"


def test_custom_data_dir(memory_db, tmp_path):
    (tmp_path / "accounts.json").write_text(
        json.dumps([{"id": "a", "name": "Wallet", "balance": 20}]), encoding="utf-8"
    )
    (tmp_path / "budgets.json").write_text(
        json.dumps(
            [{"name": "Short", "totalAmount": 50, "startDate": "2026-10-01T00:00:00Z"}]
        ),
        encoding="utf-8",
    )

    counts = load_fixtures(memory_db, data_dir=tmp_path)

    assert counts == {"accounts": 1, "transactions": 0, "budgets": 1, "goals": 0}
    budget = memory_db.list_budgets()[0]
    assert budget.end_date - budget.start_date == timedelta(days=30)
    assert budget.period == BudgetPeriod.MONTHLY


def test_fixture_must_be_array(memory_db, tmp_path):
    (tmp_path / "accounts.json").write_text(json.dumps({"id": "1"}), encoding="utf-8")

    with pytest.raises(ValueError, match="JSON array"):
        load_fixtures(memory_db, data_dir=tmp_path)

"""Shared pytest fixtures for fintrack tests."""

from datetime import UTC, date, datetime

import pytest

from fintrack.database.factories import create_sqlite_database
from fintrack.database.memory import MemoryDatabase
from fintrack.domain.account import AccountService
from fintrack.domain.budget import BudgetService
from fintrack.domain.entities import Transaction, TransactionType
from fintrack.domain.goal import GoalService
from fintrack.domain.transaction import TransactionService

FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


@pytest.fixture
def memory_db():
    """Create an empty in-memory store."""
    db = MemoryDatabase(clock=lambda: FIXED_NOW)
    db.connect()
    db.initialize_schema()
    yield db
    db.disconnect()


@pytest.fixture(params=["memory", "sqlalchemy"])
def store(request):
    """Yield each record store backend in turn."""
    if request.param == "memory":
        db = MemoryDatabase(clock=lambda: FIXED_NOW)
    else:
        db = create_sqlite_database()
        db.clock = lambda: FIXED_NOW
    db.connect()
    db.initialize_schema()
    yield db
    db.disconnect()


@pytest.fixture
def temp_db_path(tmp_path):
    """Return a path for a throwaway SQLite file."""
    return str(tmp_path / "fintrack.db")


@pytest.fixture
def transaction_service(memory_db):
    return TransactionService(memory_db)


@pytest.fixture
def account_service(memory_db):
    return AccountService(memory_db)


@pytest.fixture
def budget_service(memory_db):
    return BudgetService(memory_db, clock=lambda: FIXED_NOW)


@pytest.fixture
def goal_service(memory_db):
    return GoalService(memory_db)


@pytest.fixture
def sample_account(memory_db):
    """Create a sample account for testing."""
    return memory_db.create_account(name="Test Account", balance=1000.0)


@pytest.fixture
def make_transaction():
    """Build Transaction entities without going through a store."""
    counter = iter(range(1, 10_000))

    def _make(
        amount: float,
        day: date,
        category: str = "Food & Dining",
        type: TransactionType | str = TransactionType.EXPENSE,
        description: str = "Test transaction",
    ) -> Transaction:
        return Transaction(
            id=str(next(counter)),
            description=description,
            amount=amount,
            category=category,
            type=type,
            account_id="1",
            date=day,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

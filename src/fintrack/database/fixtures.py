"""Seed data loading.

Fixtures are JSON arrays in the camelCase record shape used by the web
client (``accountId``, ``totalAmount``, ``lastSync``, ...). They are loaded
into any ``Database`` so the demo runs without prior setup.
"""

import json
from datetime import timedelta
from importlib import resources
from pathlib import Path
from typing import Any, Optional

from fintrack.database.base import Database
from fintrack.log import get_logger
from fintrack.utils.date_parser import parse_date, parse_timestamp

logger = get_logger(__name__)


def _read_fixture(name: str, data_dir: Optional[Path]) -> list[dict[str, Any]]:
    if data_dir is not None:
        path = Path(data_dir) / f"{name}.json"
        if not path.exists():
            return []
        text = path.read_text(encoding="utf-8")
    else:
        text = resources.files("fintrack").joinpath("data", f"{name}.json").read_text(
            encoding="utf-8"
        )
    records = json.loads(text)
    if not isinstance(records, list):
        raise ValueError(f"Fixture '{name}' must contain a JSON array")
    return records


def load_fixtures(db: Database, data_dir: Optional[Path] = None) -> dict[str, int]:
    """Load seed records into a store.

    Args:
        db: Store to fill
        data_dir: Directory holding ``<entity>.json`` files. Defaults to the
            demo data bundled with the package.

    Returns:
        Mapping of fixture name to number of records loaded
    """
    counts: dict[str, int] = {}

    accounts = _read_fixture("accounts", data_dir)
    for record in accounts:
        last_sync = record.get("lastSync")
        db.create_account(
            name=record["name"],
            balance=float(record.get("balance") or 0),
            account_id=record.get("id"),
            last_sync=parse_timestamp(last_sync) if last_sync else None,
        )
    counts["accounts"] = len(accounts)

    # Insert oldest first so the store lists the fixture's first record first
    transactions = _read_fixture("transactions", data_dir)
    for record in reversed(transactions):
        db.create_transaction(
            description=record.get("description", ""),
            amount=float(record.get("amount") or 0),
            category=record.get("category") or "",
            type=record.get("type", "expense"),
            account_id=record.get("accountId", ""),
            date=parse_date(record["date"]),
            transaction_id=record.get("id"),
        )
    counts["transactions"] = len(transactions)

    budgets = _read_fixture("budgets", data_dir)
    for record in budgets:
        start = parse_timestamp(record["startDate"])
        end_value = record.get("endDate")
        db.create_budget(
            name=record["name"],
            total_amount=float(record.get("totalAmount") or 0),
            period=record.get("period", "monthly"),
            start_date=start,
            end_date=parse_timestamp(end_value) if end_value else start + timedelta(days=30),
            categories=record.get("categories") or (),
            budget_id=record.get("id"),
        )
    counts["budgets"] = len(budgets)

    goals = _read_fixture("goals", data_dir)
    for record in goals:
        deadline = record.get("deadline")
        db.create_goal(
            name=record["name"],
            target_amount=float(record.get("targetAmount") or 0),
            current_amount=float(record.get("currentAmount") or 0),
            category=record.get("category", "savings"),
            deadline=parse_date(deadline) if deadline else None,
            milestones=record.get("milestones") or (),
            goal_id=record.get("id"),
        )
    counts["goals"] = len(goals)

    logger.debug("fixtures.loaded", **counts)
    return counts

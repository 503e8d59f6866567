"""Spending insights aggregation.

Everything here except ``InsightsService`` is a pure function of
``(transactions, window_months, now)`` and never mutates its input.
"""

from collections import defaultdict
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from fintrack.domain.entities import (
    DEFAULT_CATEGORY,
    CategoryTotal,
    MonthlyBucket,
    SpendingInsights,
    Transaction,
    TransactionType,
)
from fintrack.domain.errors import ValidationError, invalid_window
from fintrack.domain.transaction import TransactionService
from fintrack.utils.date_parser import coerce_date, month_key, month_label, months_in_range

WINDOW_CHOICES = (3, 6, 12)
DEFAULT_WINDOW = 6


def window_start(now: date, window_months: int) -> date:
    """Return the first day covered by a trailing window."""
    return now - relativedelta(months=window_months)


def filter_window_expenses(
    transactions: Iterable[Transaction], start: date, end: date
) -> list[Transaction]:
    """Keep expenses dated within ``[start, end]``.

    Dates are normalized first: timestamps become their day and strings are
    parsed. Records whose date cannot be read are dropped. Returned records
    carry the normalized date.
    """
    expenses = []
    for txn in transactions:
        if txn.type != TransactionType.EXPENSE:
            continue
        day = coerce_date(txn.date)
        if day is None or not start <= day <= end:
            continue
        if type(txn.date) is not date:
            txn = replace(txn, date=day)
        expenses.append(txn)
    return expenses


def bucket_by_month(
    transactions: Sequence[Transaction], start: date, end: date
) -> tuple[MonthlyBucket, ...]:
    """Build one bucket per calendar month from ``start`` to ``end`` inclusive."""
    totals: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for txn in transactions:
        key = month_key(txn.date)
        totals[key] += txn.absolute_amount
        counts[key] += 1

    return tuple(
        MonthlyBucket(
            key=month_key(month),
            label=month_label(month),
            amount=totals.get(month_key(month), 0.0),
            count=counts.get(month_key(month), 0),
        )
        for month in months_in_range(start, end)
    )


def group_by_category(transactions: Sequence[Transaction]) -> tuple[CategoryTotal, ...]:
    """Sum absolute amounts per category, largest first."""
    totals: dict[str, float] = {}
    for txn in transactions:
        category = txn.category or DEFAULT_CATEGORY
        totals[category] = totals.get(category, 0.0) + txn.absolute_amount

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return tuple(CategoryTotal(category=name, amount=amount) for name, amount in ranked)


def percent_change(previous: float, current: float) -> float:
    """Percentage change from ``previous`` to ``current``.

    Returns 0 when ``previous`` is 0, whatever ``current`` is.
    """
    if previous <= 0:
        return 0.0
    return (current - previous) / previous * 100


def build_spending_insights(
    transactions: Iterable[Transaction],
    window_months: int = DEFAULT_WINDOW,
    now: Optional[datetime | date] = None,
) -> SpendingInsights:
    """Compute spending metrics over the trailing ``window_months``.

    Args:
        transactions: All transactions; income and out-of-window records are ignored
        window_months: One of 3, 6 or 12
        now: Anchor for the window (defaults to today)

    Returns:
        SpendingInsights snapshot

    Raises:
        ValidationError: If window_months is not a supported window
    """
    if window_months not in WINDOW_CHOICES:
        raise ValidationError(invalid_window(window_months, WINDOW_CHOICES))

    if now is None:
        end = date.today()
    elif isinstance(now, datetime):
        end = now.date()
    else:
        end = now
    start = window_start(end, window_months)

    expenses = filter_window_expenses(transactions, start, end)
    monthly = bucket_by_month(expenses, start, end)
    categories = group_by_category(expenses)

    total_spent = sum(txn.absolute_amount for txn in expenses)
    current = monthly[-1].amount if len(monthly) >= 1 else 0.0
    previous = monthly[-2].amount if len(monthly) >= 2 else 0.0

    return SpendingInsights(
        window_months=window_months,
        start_date=start,
        end_date=end,
        monthly_spending=monthly,
        category_breakdown=categories,
        total_spent=total_spent,
        avg_monthly_spending=total_spent / len(monthly) if monthly else 0.0,
        current_month_spending=current,
        previous_month_spending=previous,
        spending_change=percent_change(previous, current),
        transaction_count=len(expenses),
    )


class InsightsService:
    """Service feeding stored transactions into the insights aggregation."""

    def __init__(self, transaction_service: TransactionService):
        self.transaction_service = transaction_service

    async def spending_insights(
        self, window_months: int = DEFAULT_WINDOW, now: Optional[datetime | date] = None
    ) -> SpendingInsights:
        transactions = await self.transaction_service.get_all()
        return build_spending_insights(transactions, window_months, now)

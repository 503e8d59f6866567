"""Utility functions for fintrack."""

from fintrack.utils.date_parser import coerce_date, parse_date, parse_timestamp
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.account_resolver import resolve_account

__all__ = ["coerce_date", "parse_date", "parse_timestamp", "parse_amount", "resolve_account"]

"""Utility functions for fintrack."""

from fintrack.utils.date_parser import parse_date, parse_import_date
from fintrack.utils.amount_parser import parse_amount, parse_import_amount
from fintrack.utils.ids import CounterIds, uuid_ids

__all__ = [
    "parse_date",
    "parse_import_date",
    "parse_amount",
    "parse_import_amount",
    "CounterIds",
    "uuid_ids",
]

"""Tests for date, amount and reference parsing utilities."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from fintrack.domain.errors import ConflictError, NotFoundError
from fintrack.domain.entities import Account, Ledger
from fintrack.utils.account_resolver import resolve_account, resolve_category
from fintrack.utils.amount_parser import parse_amount, parse_import_amount
from fintrack.utils.date_parser import (
    format_display_date,
    get_date_range,
    parse_date,
    parse_import_date,
)
from fintrack.utils.ids import CounterIds


def test_parse_date_relative():
    """Test relative date keywords."""
    assert parse_date("today") == date.today()
    assert parse_date("Yesterday") == date.today() - timedelta(days=1)


def test_parse_date_iso_and_day_first():
    """ISO dates are read as is; slashed dates are day first."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("03/04/2024") == date(2024, 4, 3)
    assert parse_date("15 Jan 2024") == date(2024, 1, 15)


def test_parse_date_invalid():
    """Test unparseable input."""
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_parse_import_date():
    """Import dates convert DD/MM/YYYY and fall back to today."""
    today = date(2024, 6, 1)

    assert parse_import_date("15/01/2024", today=today) == date(2024, 1, 15)
    assert parse_import_date("2024-01-15", today=today) == date(2024, 1, 15)
    assert parse_import_date(datetime(2024, 1, 15, 8, 30), today=today) == date(2024, 1, 15)
    assert parse_import_date("", today=today) == today
    assert parse_import_date(None, today=today) == today
    assert parse_import_date("31/02/2024", today=today) == today
    assert parse_import_date("yesterday-ish", today=today) == today


def test_format_display_date():
    """Test DD/MM/YYYY output."""
    assert format_display_date(date(2024, 1, 5)) == "05/01/2024"


def test_get_date_range():
    """Test the named periods."""
    today = date.today()

    start, end = get_date_range("this-month")
    assert start == today.replace(day=1)
    assert end == today

    start, end = get_date_range("last-year")
    assert start == date(today.year - 1, 1, 1)
    assert end == date(today.year - 1, 12, 31)

    start, end = get_date_range("last-month")
    assert start.day == 1
    assert end == today.replace(day=1) - timedelta(days=1)

    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")


def test_parse_amount():
    """Test currency symbols and thousands separators."""
    assert parse_amount("123.45") == Decimal("123.45")
    assert parse_amount("$1,234.56") == Decimal("1234.56")
    assert parse_amount("-50", allow_negative=True) == Decimal("-50")


def test_parse_amount_invalid():
    """Test rejected amounts."""
    for value in ["", "abc", "NaN", "-5", "1e999999999", "-1e30"]:
        with pytest.raises(ValueError):
            parse_amount(value)


def test_parse_import_amount():
    """Import amounts read the leading number and default to zero."""
    assert parse_import_amount("42.10") == Decimal("42.10")
    assert parse_import_amount("12.5 EUR") == Decimal("12.5")
    assert parse_import_amount("-3") == Decimal("-3")
    assert parse_import_amount(7) == Decimal("7")
    assert parse_import_amount(2.5) == Decimal("2.5")
    assert parse_import_amount(float("nan")) == Decimal("0")
    assert parse_import_amount("abc") == Decimal("0")
    assert parse_import_amount(None) == Decimal("0")


def test_parse_import_amount_out_of_range():
    """Amounts too large for a balance are read as zero."""
    assert parse_import_amount("1e999999999") == Decimal("0")
    assert parse_import_amount("-1e999999999") == Decimal("0")
    assert parse_import_amount(1e300) == Decimal("0")
    assert parse_import_amount(10**40) == Decimal("0")
    assert parse_import_amount("999999999999999999.99") == Decimal("999999999999999999.99")


def test_counter_ids():
    """Test the deterministic id generator."""
    ids = CounterIds(start=3, prefix="t")
    assert [ids(), ids()] == ["t3", "t4"]


def test_resolve_account_by_id_or_name(base_ledger):
    """IDs match exactly, names ignore case."""
    assert resolve_account(base_ledger, "A") == "A"
    assert resolve_account(base_ledger, "main") == "A"
    assert resolve_category(base_ledger, "FOOD") == "C"

    with pytest.raises(NotFoundError):
        resolve_account(base_ledger, "nope")
    with pytest.raises(NotFoundError):
        resolve_category(base_ledger, "nope")


def test_resolve_account_ambiguous_name():
    """Two accounts sharing a name cannot be resolved by name."""
    ledger = Ledger(
        accounts=(
            Account(id="1", name="Cash", type="checking", balance=Decimal("0")),
            Account(id="2", name="cash", type="savings", balance=Decimal("0")),
        )
    )

    with pytest.raises(ConflictError, match="use the ID"):
        resolve_account(ledger, "CASH")
    assert resolve_account(ledger, "2") == "2"

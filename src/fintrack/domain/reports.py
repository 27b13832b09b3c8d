"""Dashboard and report calculations.

Everything here reads a ledger snapshot and returns plain values; nothing
mutates the store.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from fintrack.domain.entities import EXPENSE, INCOME, Ledger, Transaction

UNKNOWN_ACCOUNT = "Unknown Account"
UNKNOWN_CATEGORY = "Unknown"


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total for one category."""

    name: str
    total: Decimal
    percentage: float


@dataclass(frozen=True)
class MonthTotal:
    """Income and expense totals for one month (``YYYY-MM``)."""

    month: str
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class LedgerReport:
    """Everything the summary view shows."""

    start_date: Optional[date]
    end_date: Optional[date]
    total_balance: Decimal
    total_income: Decimal
    total_expenses: Decimal
    transaction_count: int
    recent: tuple[Transaction, ...] = ()
    categories: tuple[CategoryTotal, ...] = ()
    months: tuple[MonthTotal, ...] = ()
    account_balances: dict[str, Decimal] = field(default_factory=dict)

    @property
    def net_income(self) -> Decimal:
        return self.total_income - self.total_expenses


def account_name(ledger: Ledger, account_id: str) -> str:
    """Return the account's name, or "Unknown Account" for orphans."""
    account = ledger.get_account(account_id)
    return account.name if account is not None else UNKNOWN_ACCOUNT


def category_name(ledger: Ledger, category_id: str) -> str:
    """Return the category's name, or an empty string if unset or deleted."""
    if not category_id:
        return ""
    category = ledger.get_category(category_id)
    return category.name if category is not None else ""


def total_balance(ledger: Ledger) -> Decimal:
    """Sum of all account balances."""
    return sum((account.balance for account in ledger.accounts), Decimal("0"))


def _total_of_type(transactions: Sequence[Transaction], transaction_type: str) -> Decimal:
    return sum(
        (t.amount for t in transactions if t.type == transaction_type), Decimal("0")
    )


def total_income(transactions: Sequence[Transaction]) -> Decimal:
    """Sum of income amounts."""
    return _total_of_type(transactions, INCOME)


def total_expenses(transactions: Sequence[Transaction]) -> Decimal:
    """Sum of expense amounts. Transfers are not expenses."""
    return _total_of_type(transactions, EXPENSE)


def sort_newest_first(transactions: Sequence[Transaction]) -> list[Transaction]:
    """Order transactions by date then time, newest first."""
    return sorted(transactions, key=lambda t: (t.date, t.time), reverse=True)


def recent_transactions(ledger: Ledger, limit: int = 5) -> list[Transaction]:
    """Return the ``limit`` newest transactions."""
    return sort_newest_first(ledger.transactions)[:limit]


def filter_transactions(
    ledger: Ledger,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    account_id: Optional[str] = None,
    category_id: Optional[str] = None,
) -> list[Transaction]:
    """Filter transactions by inclusive date range, account and category.

    Args:
        ledger: Ledger to read
        start_date: Optional first date to include
        end_date: Optional last date to include
        account_id: Optional account ID
        category_id: Optional category ID

    Returns:
        Matching transactions in ledger order
    """
    result = []
    for transaction in ledger.transactions:
        if start_date is not None and transaction.date < start_date:
            continue
        if end_date is not None and transaction.date > end_date:
            continue
        if account_id is not None and transaction.account != account_id:
            continue
        if category_id is not None and transaction.category != category_id:
            continue
        result.append(transaction)
    return result


def category_breakdown(
    ledger: Ledger, transactions: Sequence[Transaction]
) -> list[CategoryTotal]:
    """Total expenses per category name, largest first.

    Uncategorized expenses are left out; expenses whose category was
    deleted are grouped under "Unknown".
    """
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.type != EXPENSE or not transaction.category:
            continue
        category = ledger.get_category(transaction.category)
        name = category.name if category is not None else UNKNOWN_CATEGORY
        totals[name] = totals.get(name, Decimal("0")) + transaction.amount

    grand_total = sum(totals.values(), Decimal("0"))
    breakdown = [
        CategoryTotal(
            name=name,
            total=total,
            percentage=float(total / grand_total * 100) if grand_total else 0.0,
        )
        for name, total in totals.items()
    ]
    breakdown.sort(key=lambda item: (-item.total, item.name))
    return breakdown


def monthly_trend(transactions: Sequence[Transaction]) -> list[MonthTotal]:
    """Income and expense totals per calendar month, oldest first."""
    months: dict[str, dict[str, Decimal]] = {}
    for transaction in transactions:
        key = transaction.date.strftime("%Y-%m")
        bucket = months.setdefault(key, {"income": Decimal("0"), "expenses": Decimal("0")})
        if transaction.type == INCOME:
            bucket["income"] += transaction.amount
        elif transaction.type == EXPENSE:
            bucket["expenses"] += transaction.amount

    return [
        MonthTotal(month=key, income=values["income"], expenses=values["expenses"])
        for key, values in sorted(months.items())
    ]


def build_report(
    ledger: Ledger,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    account_id: Optional[str] = None,
    category_id: Optional[str] = None,
    recent_limit: int = 5,
) -> LedgerReport:
    """Build the summary report for a ledger.

    Balances are always the ledger's current balances; the filters only
    narrow the transactions that feed the totals, breakdown and trend.
    """
    transactions = filter_transactions(
        ledger,
        start_date=start_date,
        end_date=end_date,
        account_id=account_id,
        category_id=category_id,
    )
    return LedgerReport(
        start_date=start_date,
        end_date=end_date,
        total_balance=total_balance(ledger),
        total_income=total_income(transactions),
        total_expenses=total_expenses(transactions),
        transaction_count=len(transactions),
        recent=tuple(sort_newest_first(transactions)[:recent_limit]),
        categories=tuple(category_breakdown(ledger, transactions)),
        months=tuple(monthly_trend(transactions)),
        account_balances={account.name: account.balance for account in ledger.accounts},
    )

"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import math
import re
from typing import Any

from fintrack.domain.entities import amount_in_range

# Longest numeric prefix, the way spreadsheet tools read "12.5 EUR".
NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(amount_str: str, allow_negative: bool = False) -> Decimal:
    """Parse an amount typed on the command line.

    Handles "123.45", "$123.45" and "1,234.56". Amounts are entered as
    positive numbers; the transaction type decides the sign.

    Args:
        amount_str: Amount string
        allow_negative: Accept negative values (account balances)

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed, is out of range, or
            is negative when that is not allowed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£¥,\s]", "", amount_str)

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount_in_range(amount):
        raise ValueError(f"Amount out of range: '{amount_str}'")
    if amount < 0 and not allow_negative:
        raise ValueError(f"Amount must not be negative: '{amount_str}'")
    return amount


def parse_import_amount(value: Any) -> Decimal:
    """Parse the Amount cell of an imported row.

    Reads the leading number of a text cell and ignores whatever follows.
    Blank, non-numeric, NaN or out-of-range cells give zero.

    Args:
        value: Cell value (text or a number from a spreadsheet)

    Returns:
        Decimal amount
    """
    if isinstance(value, bool) or value is None:
        return Decimal("0")
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return Decimal("0")
        amount = Decimal(str(value))
    else:
        match = NUMERIC_PREFIX.match(str(value))
        if match is None:
            return Decimal("0")
        amount = Decimal(match.group(1))

    return amount if amount_in_range(amount) else Decimal("0")

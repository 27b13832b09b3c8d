"""Export domain service.

Tabular exports (CSV, XLSX) hold one row per transaction with names in
place of IDs, in the same column order the importer reads. JSON exports are
full snapshots that the importer can restore.
"""

import csv
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from fintrack.database.mappers import dumps_snapshot, ledger_to_dict
from fintrack.domain.entities import Ledger
from fintrack.domain.errors import ValidationError
from fintrack.domain.importer import TABULAR_COLUMNS
from fintrack.domain.reports import category_name
from fintrack.utils.date_parser import format_display_date

EXPORT_FORMATS = ("csv", "xlsx", "json")
SHEET_NAME = "Transactions"


def transaction_rows(ledger: Ledger) -> list[dict[str, Any]]:
    """Flatten transactions into export rows, in ledger order."""
    rows = []
    for transaction in ledger.transactions:
        account = ledger.get_account(transaction.account)
        rows.append(
            {
                "Date": format_display_date(transaction.date),
                "Time": transaction.time,
                "Type": transaction.type,
                "Account": account.name if account is not None else "Unknown",
                "Description": transaction.description,
                "Category": category_name(ledger, transaction.category),
                "Subcategory": transaction.subcategory,
                "Amount": float(transaction.amount),
            }
        )
    return rows


def export_csv(ledger: Ledger, path: Path) -> int:
    """Write transactions as CSV. Returns the number of rows written."""
    rows = transaction_rows(ledger)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=TABULAR_COLUMNS)
        writer.writeheader()
        writer.writerows(rows)
    return len(rows)


def export_xlsx(ledger: Ledger, path: Path) -> int:
    """Write transactions to a single-sheet workbook. Returns the row count."""
    rows = transaction_rows(ledger)
    frame = pd.DataFrame(rows, columns=list(TABULAR_COLUMNS))
    frame.to_excel(path, sheet_name=SHEET_NAME, index=False)
    return len(rows)


def export_json(ledger: Ledger, path: Path, now: Optional[datetime] = None) -> int:
    """Write a full snapshot with an ``exportDate`` timestamp.

    Returns:
        Number of transactions in the snapshot
    """
    data = ledger_to_dict(ledger)
    payload = {
        "accounts": data["accounts"],
        "categories": data["categories"],
        "transactionTypes": data["transactionTypes"],
        "transactions": data["transactions"],
        "exportDate": (now or datetime.now(UTC)).isoformat(),
    }
    Path(path).write_text(dumps_snapshot(payload, indent=2), encoding="utf-8")
    return len(ledger.transactions)


def export_ledger(ledger: Ledger, path: str, export_format: Optional[str] = None) -> int:
    """Export in the given format, or the one implied by the file extension.

    Raises:
        ValidationError: If the format is not csv, xlsx or json
    """
    target = Path(path)
    fmt = (export_format or target.suffix.lstrip(".")).lower()
    if fmt == "csv":
        return export_csv(ledger, target)
    if fmt == "xlsx":
        return export_xlsx(ledger, target)
    if fmt == "json":
        return export_json(ledger, target)
    raise ValidationError(
        f"Unsupported export format '{fmt}'. Use one of: {', '.join(EXPORT_FORMATS)}"
    )

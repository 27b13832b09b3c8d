"""Bulk import domain service.

Tabular files (CSV, or the first sheet of an XLSX workbook) carry free-text
account and category names. Names are matched against the ledger ignoring
case; any that are missing are created once, up front, before the rows are
turned into transactions. JSON files are full snapshots and replace the
collections they contain.
"""

import csv
import logging
import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence

import pandas as pd
import simplejson

from fintrack.database.mappers import loads_snapshot, snapshot_from_dict
from fintrack.domain import operations as ops
from fintrack.domain.entities import (
    DEFAULT_TIME,
    EXPENSE,
    Account,
    Category,
    Transaction,
    find_by_name,
)
from fintrack.domain.errors import ValidationError
from fintrack.domain.ledger import LedgerStore
from fintrack.utils.amount_parser import parse_import_amount
from fintrack.utils.date_parser import parse_import_date

logger = logging.getLogger(__name__)

TABULAR_COLUMNS = (
    "Date",
    "Time",
    "Type",
    "Account",
    "Description",
    "Category",
    "Subcategory",
    "Amount",
)
REQUIRED_SNAPSHOT_KEYS = ("accounts", "transactions")


@dataclass(frozen=True)
class ImportResult:
    """Outcome of an import.

    ``status`` is "success", "partial" (some rows rejected) or "failed"
    (rows rejected and none imported).
    """

    imported: int
    errors: list[str] = field(default_factory=list)
    snapshot: bool = False

    @property
    def status(self) -> str:
        if not self.errors:
            return "success"
        if self.imported == 0:
            return "failed"
        return "partial"

    @property
    def message(self) -> str:
        if self.snapshot:
            return "Data imported successfully!"
        if self.status == "failed":
            shown = ", ".join(self.errors[:3])
            more = "..." if len(self.errors) > 3 else ""
            return f"Import failed. Errors: {shown}{more}"
        if self.status == "partial":
            return (
                f"Imported {self.imported} transactions successfully. "
                f"{len(self.errors)} errors occurred."
            )
        return f"Imported {self.imported} transactions successfully!"


def _cell_text(value: Any) -> str:
    """Return a cell as stripped text; blanks and NaN become ''."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


class ImportService:
    """Service for importing CSV, XLSX and JSON files into the ledger."""

    def __init__(self, store: LedgerStore, today: Optional[date] = None):
        """Initialize import service.

        Args:
            store: Ledger store
            today: Date used for rows without a readable date (defaults to today)
        """
        self.store = store
        self.today = today

    def import_file(self, file_path: str) -> ImportResult:
        """Import a file, choosing the reader by extension.

        Args:
            file_path: Path to a .json, .csv or .xlsx file

        Returns:
            Import statistics

        Raises:
            ValidationError: If the file type is unsupported or the content is invalid
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        suffix = path.suffix.lower()
        if suffix == ".json":
            return self.import_json(path.read_text(encoding="utf-8"))
        if suffix == ".csv":
            return self.import_rows(self.read_csv(path))
        if suffix == ".xlsx":
            return self.import_rows(self.read_spreadsheet(path))
        raise ValidationError(
            f"Unsupported file type '{path.suffix}'. Use .json, .csv or .xlsx"
        )

    def read_csv(self, path: Path) -> list[dict[str, Any]]:
        """Read a CSV file into row dicts keyed by header."""
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","
            reader = csv.DictReader(f, delimiter=delimiter)
            return [dict(row) for row in reader]

    def read_spreadsheet(self, path: Path) -> list[dict[str, Any]]:
        """Read the first sheet of a workbook into row dicts keyed by header."""
        frame = pd.read_excel(path, sheet_name=0, dtype=object)
        frame = frame.astype(object).where(pd.notna(frame), None)
        return frame.to_dict(orient="records")

    def import_json(self, text: str) -> ImportResult:
        """Import a JSON snapshot.

        The payload must be an object with at least ``accounts`` and
        ``transactions``. Every collection present replaces the current one;
        balances are taken as given.

        Raises:
            ValidationError: If the JSON is malformed or required keys are missing
        """
        try:
            payload = loads_snapshot(text)
        except simplejson.JSONDecodeError as e:
            logger.error("Rejected JSON import: %s", e)
            raise ValidationError("Invalid JSON format") from e

        if not isinstance(payload, dict) or not all(
            payload.get(key) is not None for key in REQUIRED_SNAPSHOT_KEYS
        ):
            logger.error("Rejected JSON import: missing accounts or transactions")
            raise ValidationError("Invalid JSON format")

        snapshot = snapshot_from_dict(payload)
        self.store.import_snapshot(snapshot)
        logger.info(
            "Imported snapshot with %d accounts and %d transactions",
            len(snapshot.accounts or ()),
            len(snapshot.transactions or ()),
        )
        return ImportResult(imported=len(snapshot.transactions or ()), snapshot=True)

    def import_rows(self, rows: Sequence[Mapping[str, Any]]) -> ImportResult:
        """Import tabular rows.

        Args:
            rows: Dicts keyed by the Date, Time, Type, Account, Description,
                Category, Subcategory and Amount headers

        Returns:
            Import statistics; rejected rows are listed in ``errors``

        Raises:
            ValidationError: If there are no rows
        """
        if not rows:
            raise ValidationError("No data found in the file")

        before = self.store.state
        new_accounts, new_categories = self._collect_new_records(rows)

        for account in new_accounts.values():
            self.store.dispatch(ops.AddAccount(account, keep_id=True))
        for category in new_categories.values():
            self.store.dispatch(ops.AddCategory(category, keep_id=True))
        if new_accounts or new_categories:
            logger.info(
                "Created %d accounts and %d categories from import",
                len(new_accounts),
                len(new_categories),
            )

        default_account = before.accounts[0].id if before.accounts else ""
        imported = 0
        errors = []
        for index, row in enumerate(rows, start=1):
            account_id = self._resolve_id(
                before.accounts, new_accounts, _cell_text(row.get("Account"))
            )
            category_id = self._resolve_id(
                before.categories, new_categories, _cell_text(row.get("Category"))
            )
            transaction = self._build_transaction(row, account_id or default_account, category_id)

            if not transaction.account or transaction.amount == 0:
                errors.append(f"Row {index}: Missing account or invalid amount")
                continue

            self.store.dispatch(ops.AddTransaction(transaction))
            imported += 1

        if errors:
            logger.warning("Rejected %d of %d imported rows", len(errors), len(rows))
        return ImportResult(imported=imported, errors=errors)

    def _collect_new_records(
        self, rows: Iterable[Mapping[str, Any]]
    ) -> tuple[dict[str, Account], dict[str, Category]]:
        """First pass: one new record per distinct name missing from the ledger."""
        ledger = self.store.state
        accounts: dict[str, Account] = {}
        categories: dict[str, Category] = {}

        for row in rows:
            account_name = _cell_text(row.get("Account"))
            key = account_name.lower()
            if account_name and key not in accounts and find_by_name(ledger.accounts, account_name) is None:
                accounts[key] = Account(
                    id=self.store.new_id(),
                    name=account_name,
                    type="checking",
                    balance=Decimal("0"),
                )

            category_name = _cell_text(row.get("Category"))
            key = category_name.lower()
            if category_name and key not in categories and find_by_name(ledger.categories, category_name) is None:
                categories[key] = Category(
                    id=self.store.new_id(), name=category_name, subcategories=()
                )

        return accounts, categories

    @staticmethod
    def _resolve_id(existing: Sequence[Any], created: Mapping[str, Any], name: str) -> str:
        if not name:
            return ""
        record = find_by_name(existing, name)
        if record is not None:
            return record.id
        new_record = created.get(name.lower())
        return new_record.id if new_record is not None else ""

    def _build_transaction(
        self, row: Mapping[str, Any], account_id: str, category_id: str
    ) -> Transaction:
        return Transaction(
            id="",
            date=parse_import_date(row.get("Date"), today=self.today),
            time=_cell_text(row.get("Time")) or DEFAULT_TIME,
            type=(_cell_text(row.get("Type")) or EXPENSE).lower(),
            account=account_id,
            description=_cell_text(row.get("Description")),
            category=category_id,
            subcategory=_cell_text(row.get("Subcategory")),
            amount=parse_import_amount(row.get("Amount")),
        )

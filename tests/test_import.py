"""Tests for CSV, XLSX and JSON import."""

import json
from datetime import date
from decimal import Decimal

import pytest

from fintrack.domain.errors import ValidationError
from fintrack.domain.exporter import export_xlsx
from fintrack.domain.importer import ImportResult


def _row(**values):
    row = {
        "Date": "15/01/2024",
        "Time": "09:30",
        "Type": "expense",
        "Account": "Main",
        "Description": "",
        "Category": "",
        "Subcategory": "",
        "Amount": "10",
    }
    row.update(values)
    return row


def test_import_rows_partial_success(import_service, store):
    """A row with a non-numeric amount is rejected; the rest are imported."""
    result = import_service.import_rows(
        [_row(Amount="10"), _row(Amount="abc"), _row(Amount="5", Type="income")]
    )

    assert result.imported == 2
    assert result.errors == ["Row 2: Missing account or invalid amount"]
    assert result.status == "partial"
    assert result.message == "Imported 2 transactions successfully. 1 errors occurred."
    assert len(store.state.transactions) == 2
    assert store.state.get_account("A").balance == Decimal("95")


def test_import_rows_rejects_oversized_amount(import_service, store):
    """Amounts too large for a balance are per-row errors."""
    result = import_service.import_rows(
        [_row(Amount="10"), _row(Amount="1e999999999"), _row(Amount="5", Type="income")]
    )

    assert result.imported == 2
    assert result.errors == ["Row 2: Missing account or invalid amount"]
    assert store.state.get_account("A").balance == Decimal("95")


def test_import_rows_all_rejected(import_service, store):
    """When every row is rejected the import has failed."""
    result = import_service.import_rows([_row(Amount="0"), _row(Amount="")])

    assert result.status == "failed"
    assert result.message.startswith("Import failed. Errors: Row 1:")
    assert store.state.transactions == ()


def test_import_rows_success_message(import_service):
    """Test the message for a clean import."""
    result = import_service.import_rows([_row()])

    assert result.status == "success"
    assert result.message == "Imported 1 transactions successfully!"


def test_import_rows_empty(import_service):
    """An empty file is an error."""
    with pytest.raises(ValidationError, match="No data found"):
        import_service.import_rows([])


def test_import_matches_names_ignoring_case(import_service, store):
    """Existing names match ignoring case; new names are created once."""
    result = import_service.import_rows(
        [
            _row(Account="MAIN", Category="food"),
            _row(Account="Wallet", Category="Travel"),
            _row(Account="wallet", Category="TRAVEL"),
        ]
    )

    ledger = store.state
    assert result.imported == 3
    assert [a.name for a in ledger.accounts] == ["Main", "Wallet"]
    assert [c.name for c in ledger.categories] == ["Food", "Travel"]

    wallet = ledger.accounts[1]
    travel = ledger.categories[1]
    assert wallet.type == "checking"
    assert wallet.balance == Decimal("-20")
    assert travel.subcategories == ()
    assert ledger.transactions[0].account == "A"
    assert ledger.transactions[0].category == "C"
    assert {t.account for t in ledger.transactions[1:]} == {wallet.id}
    assert {t.category for t in ledger.transactions[1:]} == {travel.id}


def test_import_blank_account_uses_first_account(import_service, store):
    """Rows without an account name go to the first existing account."""
    result = import_service.import_rows([_row(Account="")])

    assert result.imported == 1
    assert store.state.transactions[0].account == "A"


def test_import_row_defaults(import_service, store):
    """Blank cells fall back to today, 12:00 and expense."""
    import_service.import_rows([_row(Date="", Time="", Type="", Amount="12.5 EUR")])

    txn = store.state.transactions[0]
    assert txn.date == date(2024, 6, 1)
    assert txn.time == "12:00"
    assert txn.type == "expense"
    assert txn.amount == Decimal("12.5")


def test_import_converts_day_first_dates(import_service, store):
    """DD/MM/YYYY dates are read day first."""
    import_service.import_rows([_row(Date="03/04/2024"), _row(Date="2024-05-06")])

    dates = [t.date for t in store.state.transactions]
    assert dates == [date(2024, 4, 3), date(2024, 5, 6)]


def test_import_csv_file(import_service, store, tmp_path):
    """Test importing a CSV file with a byte order mark."""
    csv_file = tmp_path / "transactions.csv"
    csv_file.write_text(
        "\ufeffDate,Time,Type,Account,Description,Category,Subcategory,Amount\n"
        "01/02/2024,08:00,income,Main,Salary,Food,,1000\n"
        "02/02/2024,09:00,expense,Main,Lunch,Food,Coffee,4.50\n",
        encoding="utf-8",
    )

    result = import_service.import_file(str(csv_file))

    assert result.imported == 2
    assert store.state.get_account("A").balance == Decimal("1095.50")
    assert store.state.transactions[1].description == "Lunch"


def test_import_semicolon_csv(import_service, store, tmp_path):
    """Semicolon separated files are detected."""
    csv_file = tmp_path / "transactions.csv"
    csv_file.write_text(
        "Date;Time;Type;Account;Description;Category;Subcategory;Amount\n"
        "01/02/2024;08:00;expense;Main;Bus;;;2\n",
        encoding="utf-8",
    )

    result = import_service.import_file(str(csv_file))

    assert result.imported == 1
    assert store.state.get_account("A").balance == Decimal("98")


def test_import_xlsx_written_by_export(import_service, store, base_ledger, tmp_path):
    """A workbook written by the exporter can be imported again."""
    from fintrack.domain.ledger import LedgerStore
    from fintrack.domain.transaction import TransactionService
    from fintrack.utils.ids import CounterIds

    source = LedgerStore(base_ledger, new_id=CounterIds())
    TransactionService(source).create_transaction(
        "A", date(2024, 2, 10), Decimal("42.5"), description="Books"
    )
    workbook = tmp_path / "export.xlsx"
    export_xlsx(source.state, workbook)

    result = import_service.import_file(str(workbook))

    assert result.imported == 1
    txn = store.state.transactions[0]
    assert txn.date == date(2024, 2, 10)
    assert txn.amount == Decimal("42.5")
    assert txn.description == "Books"


def test_import_unsupported_file(import_service, tmp_path):
    """Unknown extensions are rejected."""
    text_file = tmp_path / "data.txt"
    text_file.write_text("hello", encoding="utf-8")

    with pytest.raises(ValidationError, match="Unsupported file type"):
        import_service.import_file(str(text_file))


def test_import_missing_file(import_service, tmp_path):
    """Test importing a file that does not exist."""
    with pytest.raises(FileNotFoundError):
        import_service.import_file(str(tmp_path / "missing.csv"))


def test_import_json_replaces_collections(import_service, store):
    """A JSON snapshot replaces the collections it contains."""
    payload = {
        "accounts": [{"id": "9", "name": "Imported", "type": "savings", "balance": 12.5}],
        "transactions": [],
    }

    result = import_service.import_json(json.dumps(payload))

    assert result.snapshot
    assert result.message == "Data imported successfully!"
    assert [a.name for a in store.state.accounts] == ["Imported"]
    assert store.state.accounts[0].balance == Decimal("12.5")
    assert store.state.transactions == ()
    assert store.state.categories[0].name == "Food"


def test_import_json_requires_accounts_and_transactions(import_service, store):
    """Snapshots without accounts or transactions are rejected unchanged."""
    before = store.state

    with pytest.raises(ValidationError, match="Invalid JSON format"):
        import_service.import_json(json.dumps({"accounts": []}))
    with pytest.raises(ValidationError, match="Invalid JSON format"):
        import_service.import_json("{not json")

    assert store.state == before


def test_import_result_status():
    """Test ImportResult status values."""
    assert ImportResult(imported=3).status == "success"
    assert ImportResult(imported=1, errors=["x"]).status == "partial"
    assert ImportResult(imported=0, errors=["x"]).status == "failed"


def test_import_json_rejects_oversized_balance(import_service, store):
    """A snapshot balance too large for the ledger leaves it unchanged."""
    before = store.state
    payload = '{"accounts": [{"id": "9", "name": "Huge", "balance": 1e999999999}], "transactions": []}'

    with pytest.raises(ValidationError, match="accounts"):
        import_service.import_json(payload)

    assert store.state == before


def test_import_json_keeps_exact_amounts(import_service, store):
    """Amounts are read as exact decimals, not binary floats."""
    payload = (
        '{"accounts": [{"id": "9", "name": "Big", "balance": 12345678901234567.89}],'
        ' "transactions": []}'
    )

    import_service.import_json(payload)

    assert store.state.accounts[0].balance == Decimal("12345678901234567.89")

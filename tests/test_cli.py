"""Tests for the command line interface."""

import json
import subprocess
import sys

import pytest

from fintrack.cli.main import cli


def _run(cli_runner, db_path, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", db_path, *args], **kwargs)


@pytest.mark.parametrize(
    "module", ["fintrack.cli.main", "fintrack.database.bridge", "fintrack.domain.importer"]
)
def test_modules_import_in_fresh_interpreter(module):
    """Each entry module imports on its own, whatever else is loaded first."""
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"], capture_output=True, text=True
    )

    assert result.returncode == 0, result.stderr


def test_help_does_not_need_database(cli_runner, tmp_path):
    """Showing help works without touching the database."""
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "transaction" in result.output
    assert "import" in result.output


def test_account_list_starts_with_seed(cli_runner, db_path):
    """A new database starts with the sample accounts."""
    result = _run(cli_runner, db_path, "account", "list")

    assert result.exit_code == 0
    assert "Checking Account" in result.output
    assert "15,000.00" in result.output
    assert "-850.00" in result.output


def test_account_add_and_duplicate(cli_runner, db_path):
    """Test creating an account and rejecting a duplicate name."""
    result = _run(cli_runner, db_path, "account", "add", "Wallet", "--type", "savings", "--balance", "20")
    assert result.exit_code == 0
    assert "Created account 'Wallet'" in result.output

    result = _run(cli_runner, db_path, "account", "add", "wallet")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_account_update_and_delete(cli_runner, db_path):
    """Test renaming an account and deleting it with its transactions kept."""
    result = _run(cli_runner, db_path, "account", "update", "checking account", "--name", "Everyday")
    assert result.exit_code == 0
    assert "Updated account 'Everyday'" in result.output

    result = _run(cli_runner, db_path, "account", "delete", "Everyday", "--yes")
    assert result.exit_code == 0
    assert "2 transactions will be kept" in result.output

    result = _run(cli_runner, db_path, "transaction", "list")
    assert "Unknown Account" in result.output


def test_account_delete_cancelled(cli_runner, db_path):
    """Answering no keeps the account."""
    result = _run(cli_runner, db_path, "account", "delete", "Savings Account", input="n\n")

    assert result.exit_code == 0
    assert "Deletion cancelled." in result.output
    assert "Savings Account" in _run(cli_runner, db_path, "account", "list").output


def test_transaction_add_updates_and_persists_balance(cli_runner, db_path):
    """An expense lowers the balance and the change is saved."""
    result = _run(
        cli_runner,
        db_path,
        "transaction",
        "add",
        "--account",
        "checking account",
        "--amount",
        "30",
        "--category",
        "food & dining",
        "--subcategory",
        "Coffee",
        "--date",
        "2024-02-01",
    )
    assert result.exit_code == 0
    assert "Balance: 2,470.00" in result.output

    result = _run(cli_runner, db_path, "account", "list")
    assert "2,470.00" in result.output


def test_transaction_add_with_type_label(cli_runner, db_path):
    """Type labels map to their category."""
    result = _run(
        cli_runner,
        db_path,
        "transaction",
        "add",
        "--account",
        "1",
        "--amount",
        "100",
        "--type",
        "Transfer Out",
    )
    assert result.exit_code == 0
    assert "(transfer)" in result.output
    assert "Balance: 2,400.00" in result.output


def test_transaction_add_errors(cli_runner, db_path):
    """Test bad amounts, unknown accounts and unknown types."""
    result = _run(cli_runner, db_path, "transaction", "add", "--account", "1", "--amount", "abc")
    assert result.exit_code == 1
    assert "Invalid amount" in result.output

    result = _run(cli_runner, db_path, "transaction", "add", "--account", "Nope", "--amount", "5")
    assert result.exit_code == 1
    assert "not found" in result.output

    result = _run(
        cli_runner, db_path, "transaction", "add", "--account", "1", "--amount", "5", "--type", "gift"
    )
    assert result.exit_code == 1
    assert "Unknown transaction type" in result.output


def test_transaction_update_and_delete(cli_runner, db_path):
    """Updating and deleting keep the balance in step."""
    result = _run(cli_runner, db_path, "transaction", "update", "1", "--type", "income")
    assert result.exit_code == 0
    assert "2,751.00" in _run(cli_runner, db_path, "account", "list").output

    result = _run(cli_runner, db_path, "transaction", "delete", "2")
    assert result.exit_code == 0
    assert "-2,249.00" in _run(cli_runner, db_path, "account", "list").output

    result = _run(cli_runner, db_path, "transaction", "delete", "2")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_transaction_list_filters(cli_runner, db_path):
    """Listing shows day-first dates and honours filters."""
    result = _run(cli_runner, db_path, "transaction", "list")
    assert result.exit_code == 0
    assert "15/01/2024" in result.output
    assert "Food & Dining > Groceries" in result.output

    result = _run(cli_runner, db_path, "transaction", "list", "--category", "Income")
    assert "Salary deposit" in result.output
    assert "Grocery shopping" not in result.output

    result = _run(cli_runner, db_path, "transaction", "list", "--start-date", "2025-01-01")
    assert "No transactions found." in result.output


def test_category_and_type_commands(cli_runner, db_path):
    """Test adding and listing categories and transaction types."""
    result = _run(cli_runner, db_path, "category", "add", "Travel", "--sub", "Flights", "--sub", "Hotels")
    assert result.exit_code == 0

    result = _run(cli_runner, db_path, "category", "list")
    assert "Travel" in result.output
    assert "Flights" in result.output

    result = _run(cli_runner, db_path, "type", "add", "Refund", "--category", "income")
    assert result.exit_code == 0

    result = _run(cli_runner, db_path, "type", "list")
    assert "Refund" in result.output


def test_import_csv_partial(cli_runner, db_path, tmp_path):
    """Rejected rows are reported but the import still succeeds."""
    csv_file = tmp_path / "in.csv"
    csv_file.write_text(
        "Date,Time,Type,Account,Description,Category,Subcategory,Amount\n"
        "01/03/2024,10:00,expense,Wallet,Lunch,Food & Dining,,12\n"
        "02/03/2024,10:00,expense,Wallet,Broken,,,abc\n"
        "03/03/2024,10:00,income,wallet,Refund,,,2\n",
        encoding="utf-8",
    )

    result = _run(cli_runner, db_path, "import", str(csv_file))

    assert result.exit_code == 0
    assert "Imported 2 transactions successfully. 1 errors occurred." in result.output
    assert "Row 2: Missing account or invalid amount" in result.output

    accounts = _run(cli_runner, db_path, "account", "list").output
    assert accounts.count("Wallet") == 1
    assert "-10.00" in accounts


def test_import_failed_exits_with_error(cli_runner, db_path, tmp_path):
    """An import where every row is rejected fails."""
    csv_file = tmp_path / "in.csv"
    csv_file.write_text(
        "Date,Time,Type,Account,Description,Category,Subcategory,Amount\n"
        "01/03/2024,10:00,expense,Wallet,Nothing,,,0\n",
        encoding="utf-8",
    )

    result = _run(cli_runner, db_path, "import", str(csv_file))

    assert result.exit_code == 1
    assert "Import failed" in result.output


def test_import_invalid_json(cli_runner, db_path, tmp_path):
    """Test importing a JSON file without accounts."""
    json_file = tmp_path / "bad.json"
    json_file.write_text(json.dumps({"transactions": []}), encoding="utf-8")

    result = _run(cli_runner, db_path, "import", str(json_file))

    assert result.exit_code == 1
    assert "Invalid JSON format" in result.output


def test_export_and_restore_json(cli_runner, db_path, tmp_path):
    """A JSON export restores the ledger after other changes."""
    backup = tmp_path / "backup.json"
    result = _run(cli_runner, db_path, "export", str(backup))
    assert result.exit_code == 0
    assert "Exported 2 transactions" in result.output
    assert "exportDate" in json.loads(backup.read_text(encoding="utf-8"))

    _run(cli_runner, db_path, "transaction", "delete", "1")
    result = _run(cli_runner, db_path, "import", str(backup))

    assert result.exit_code == 0
    assert "Data imported successfully!" in result.output
    assert "Grocery shopping" in _run(cli_runner, db_path, "transaction", "list").output


def test_export_csv_format_option(cli_runner, db_path, tmp_path):
    """--format overrides the file extension."""
    target = tmp_path / "out.txt"

    result = _run(cli_runner, db_path, "export", str(target), "--format", "csv")

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8").startswith("Date,Time,Type,Account")


def test_summary(cli_runner, db_path):
    """The summary shows balances and the category breakdown."""
    result = _run(cli_runner, db_path, "summary")

    assert result.exit_code == 0
    assert "16,650.00" in result.output
    assert "5,000.00" in result.output
    assert "Food & Dining" in result.output


def test_summary_rejects_two_periods(cli_runner, db_path):
    """Test combining two period options."""
    result = _run(cli_runner, db_path, "summary", "--this-month", "--last-year")

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_reset_restores_seed(cli_runner, db_path):
    """Reset brings back the sample data."""
    _run(cli_runner, db_path, "transaction", "delete", "1")

    result = _run(cli_runner, db_path, "reset", "--yes")

    assert result.exit_code == 0
    assert "Grocery shopping" in _run(cli_runner, db_path, "transaction", "list").output


def test_slots_are_separate(cli_runner, db_path):
    """Different slots in one database hold different ledgers."""
    _run(cli_runner, db_path, "--slot", "other", "account", "add", "Only Here")

    assert "Only Here" not in _run(cli_runner, db_path, "account", "list").output

"""Integration tests for end-to-end workflows."""

import re

from ledgerport.cli.main import cli


def test_full_workflow(cli_runner, temp_db, fixtures_dir):
    """Test complete workflow: account → format → preview → import → re-import."""
    db_args = ["--db-path", temp_db.database_path]
    csv_file = str(fixtures_dir / "chase_export.csv")

    # Step 1: Create account
    result = cli_runner.invoke(cli, [*db_args, "account", "create", "Checking", "--bank", "Chase"])
    assert result.exit_code == 0
    match = re.search(r"ID: (\d+)", result.output)
    assert match is not None
    account_id = match.group(1)

    # Step 2: Save the detected format for reuse
    result = cli_runner.invoke(
        cli, [*db_args, "format", "save", "Checking CSV", "--account", account_id, "--detect", csv_file]
    )
    assert result.exit_code == 0

    # Step 3: Preview with the saved format
    result = cli_runner.invoke(
        cli, [*db_args, "preview", csv_file, "--account", "Checking", "--format", "Checking CSV"]
    )
    assert result.exit_code == 0
    assert "New: 4" in result.output

    # Step 4: Import
    result = cli_runner.invoke(
        cli, [*db_args, "import", csv_file, "--account", "Checking", "--format", "Checking CSV"]
    )
    assert result.exit_code == 0
    assert "Imported: 4 transactions" in result.output

    stored = temp_db.get_transactions_by_account(int(account_id))
    assert [t.amount.minor_units for t in stored] == [-450, -2399, 250000, -1549]
    assert [t.merchant for t in stored] == ["Sq Starbucks", "Amazon Mktp", "Payroll Deposit", "Netflix.com"]

    # Step 5: Importing the same export again adds nothing
    result = cli_runner.invoke(
        cli, [*db_args, "import", csv_file, "--account", "Checking", "--format", "Checking CSV"]
    )
    assert result.exit_code == 0
    assert "Imported: 0 transactions" in result.output
    assert "Duplicates: 4" in result.output
    assert len(temp_db.get_transactions_by_account(int(account_id))) == 4


def test_verbose_logging(cli_runner, temp_db, sample_account, fixtures_dir, caplog):
    """--verbose emits per-stage debug and info records."""
    caplog.set_level("DEBUG", logger="ledgerport")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "--verbose",
            "preview",
            str(fixtures_dir / "debit_credit_export.csv"),
            "--account",
            "Test Account",
        ],
    )

    assert result.exit_code == 0
    assert any("Row 4 failed" in record.getMessage() for record in caplog.records)
    assert any("Preview for account" in record.getMessage() for record in caplog.records)

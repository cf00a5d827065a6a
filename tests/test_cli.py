"""Tests for the click command-line interface."""

from click.testing import CliRunner
from openpyxl import load_workbook

from ledger_recon.cli import main


def test_reconcile_dry_run(transactions_csv, statements_csv):
    runner = CliRunner()
    result = runner.invoke(
        main,
        [
            "reconcile",
            str(transactions_csv),
            str(statements_csv),
            "--start",
            "2023-01-01",
            "--end",
            "2023-12-31",
            "--dry-run",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Reconciliation Summary" in result.output
    assert "Dry run" in result.output
    assert "Unmatched Transactions" in result.output
    # T4 is before the window and must not be listed
    assert "T4" not in result.output


def test_reconcile_writes_report(transactions_csv, statements_csv, tmp_path):
    output = tmp_path / "report.xlsx"
    runner = CliRunner()
    result = runner.invoke(
        main,
        [
            "reconcile",
            str(transactions_csv),
            str(statements_csv),
            "--start",
            "2023-01-01",
            "--end",
            "2023-12-31",
            "-o",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    assert output.exists()

    wb = load_workbook(output)
    unmatched_ids = [
        row[0] for row in wb["Unmatched Transactions"].iter_rows(min_row=2, values_only=True)
    ]
    assert unmatched_ids == ["T2", "T3"]
    unmatched_statements = [
        row[0] for row in wb["Unmatched Statements"].iter_rows(min_row=2, values_only=True)
    ]
    assert unmatched_statements == ["B2", "B3"]


def test_reconcile_window_from_config(transactions_csv, statements_csv, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("window:\n  start: '2023-01-01'\n  end: '2023-12-31'\n")

    runner = CliRunner()
    result = runner.invoke(
        main,
        [
            "reconcile",
            str(transactions_csv),
            str(statements_csv),
            "-c",
            str(config_path),
            "--dry-run",
        ],
    )

    assert result.exit_code == 0, result.output


def test_reconcile_without_window_fails(transactions_csv, statements_csv):
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["reconcile", str(transactions_csv), str(statements_csv), "--dry-run"],
    )

    assert result.exit_code == 1
    assert "window" in result.output


def test_reconcile_reports_load_failure(statements_csv, tmp_path):
    bad = tmp_path / "bad.csv"
    bad.write_text("id,value\n1,2\n")

    runner = CliRunner()
    result = runner.invoke(
        main,
        [
            "reconcile",
            str(bad),
            str(statements_csv),
            "--start",
            "2023-01-01",
            "--end",
            "2023-12-31",
            "--dry-run",
        ],
    )

    assert result.exit_code == 1
    assert "Error" in result.output


def test_parse_transactions(transactions_csv):
    runner = CliRunner()
    result = runner.invoke(main, ["parse-transactions", str(transactions_csv)])

    assert result.exit_code == 0, result.output
    assert "Total records: 4" in result.output


def test_parse_statements(statements_csv):
    runner = CliRunner()
    result = runner.invoke(main, ["parse-statements", str(statements_csv)])

    assert result.exit_code == 0, result.output
    assert "Total records: 3" in result.output


def test_init_config(tmp_path):
    output = tmp_path / "config.yaml"
    runner = CliRunner()
    result = runner.invoke(main, ["init-config", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.exists()


def test_parse_transactions_warns_once_per_bad_row(tmp_path):
    path = tmp_path / "txns.csv"
    path.write_text(
        "trxID,amount,type,transactionTime\n"
        "T1,100.00,DEBIT,2023-05-01 10:00:00\n"
        "T2,abc,DEBIT,2023-05-01 10:00:00\n"
    )

    runner = CliRunner()
    result = runner.invoke(main, ["parse-transactions", str(path)])

    assert result.exit_code == 0, result.output
    assert "Total records: 1" in result.output
    assert result.output.count("Row 2:") == 1
    # The configured format is applied, not logging's bare fallback
    assert "WARNING" in result.output

"""Tests for the Excel report generator."""

from datetime import datetime

import pytest
from openpyxl import load_workbook

from ledger_recon.config import ReconConfig
from ledger_recon.matching import reconcile
from ledger_recon.models.transaction import RunMetadata
from ledger_recon.reports import ExcelReportGenerator
from ledger_recon.utils.exceptions import ReportGenerationError


@pytest.fixture
def summary(make_txn, make_stmt, window):
    txns = [
        make_txn("T1", "100.00", "2023-05-01 10:00:00"),
        make_txn("T2", "250.50", "2023-05-02 11:30:00"),
    ]
    stmts = [
        make_stmt("B1", "100.00", "2023-05-01 10:00:00"),
        make_stmt("B2", "240.50", "2023-05-02 11:30:00"),
    ]
    return reconcile(txns, stmts, *window)


@pytest.fixture
def metadata(window):
    return RunMetadata(
        transactions_filename="system_transactions.csv",
        statements_filename="bank_statements.csv",
        window_start=window[0],
        window_end=window[1],
        reconciled_at=datetime(2024, 1, 5, 9, 0, 0),
        processing_time_seconds=0.01,
    )


def test_all_sheets_written(config, summary, metadata, tmp_path):
    output = tmp_path / "out" / "report.xlsx"

    path = ExcelReportGenerator(config).generate_report(summary, metadata, output)

    wb = load_workbook(path)
    assert wb.sheetnames == [
        "Summary",
        "Unmatched Transactions",
        "Unmatched Statements",
        "Discrepancies",
        "Audit Trail",
    ]

    unmatched = wb["Unmatched Transactions"]
    assert unmatched["A1"].value == "Transaction ID"
    assert unmatched["A2"].value == "T2"
    assert unmatched["B2"].value == 250.5
    assert unmatched["D2"].value == "2023-05-02 11:30:00"

    assert wb["Unmatched Statements"]["A2"].value == "B2"

    discrepancies = wb["Discrepancies"]
    assert discrepancies["A2"].value == "T2"
    assert discrepancies["C2"].value == "B2"
    assert discrepancies["F2"].value == 10.0

    summary_sheet = wb["Summary"]
    values = {
        summary_sheet[f"A{row}"].value: summary_sheet[f"B{row}"].value
        for row in range(4, 17)
    }
    assert values["Transactions File:"] == "system_transactions.csv"
    assert values["Total Processed:"] == 2
    assert values["Total Matched:"] == 1
    assert values["Total Unmatched:"] == 2
    assert values["Total Discrepancy:"] == "10.00"


def test_disabled_sheet_is_skipped(summary, metadata, tmp_path):
    config = ReconConfig()
    config.output.sheets.audit_trail.enabled = False
    config.output.sheets.discrepancies.name = "Amount Differences"

    path = ExcelReportGenerator(config).generate_report(
        summary, metadata, tmp_path / "report.xlsx"
    )

    sheetnames = load_workbook(path).sheetnames
    assert "Audit Trail" not in sheetnames
    assert "Amount Differences" in sheetnames


def test_all_sheets_disabled_raises(summary, metadata, tmp_path):
    config = ReconConfig()
    for name in (
        "summary",
        "unmatched_transactions",
        "unmatched_statements",
        "discrepancies",
        "audit_trail",
    ):
        getattr(config.output.sheets, name).enabled = False

    with pytest.raises(ReportGenerationError):
        ExcelReportGenerator(config).generate_report(
            summary, metadata, tmp_path / "report.xlsx"
        )

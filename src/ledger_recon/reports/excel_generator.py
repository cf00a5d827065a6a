"""
Excel report generator for reconciliation results.
Creates multi-sheet workbooks with formatted output.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional
import logging

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.worksheet.worksheet import Worksheet

from ..config import ReconConfig, SheetConfig
from ..models.transaction import (
    BankStatement,
    Discrepancy,
    ReconciliationSummary,
    RunMetadata,
    Transaction,
)
from ..utils.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

# Style definitions
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
VARIANCE_FILL = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
UNMATCHED_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
TIMESTAMP_DISPLAY = "%Y-%m-%d %H:%M:%S"


class ExcelReportGenerator:
    """Generates Excel reconciliation reports with multiple sheets."""

    def __init__(self, config: ReconConfig):
        """
        Initialize the report generator.

        Args:
            config: Application configuration
        """
        self.config = config
        self.sheet_config = config.output.sheets

    def generate_report(
        self,
        summary: ReconciliationSummary,
        metadata: RunMetadata,
        output_path: Path,
    ) -> Path:
        """
        Generate the complete reconciliation report.

        Args:
            summary: Reconciliation summary
            metadata: Run facts shown on the summary and audit sheets
            output_path: Path for output file

        Returns:
            Path to generated report

        Raises:
            ReportGenerationError: If the workbook cannot be written
        """
        logger.info(f"Generating Excel report: {output_path}")

        wb = Workbook()

        # Remove default sheet
        if wb.active:
            wb.remove(wb.active)

        sheets = self.sheet_config
        if sheets.summary.enabled:
            self._create_summary_sheet(wb, sheets.summary, summary, metadata)
        if sheets.unmatched_transactions.enabled:
            self._create_unmatched_transactions_sheet(
                wb, sheets.unmatched_transactions, summary.unmatched_transactions
            )
        if sheets.unmatched_statements.enabled:
            self._create_unmatched_statements_sheet(
                wb, sheets.unmatched_statements, summary.unmatched_statements
            )
        if sheets.discrepancies.enabled:
            self._create_discrepancy_sheet(wb, sheets.discrepancies, summary.discrepancies)
        if sheets.audit_trail.enabled:
            self._create_audit_trail_sheet(wb, sheets.audit_trail, summary, metadata)

        if not wb.sheetnames:
            raise ReportGenerationError("All report sheets are disabled in configuration")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            raise ReportGenerationError(f"Failed to save report {output_path}: {e}") from e

        logger.info(f"Report saved: {output_path}")

        return output_path

    def _create_summary_sheet(
        self,
        wb: Workbook,
        sheet: SheetConfig,
        summary: ReconciliationSummary,
        metadata: RunMetadata,
    ) -> None:
        """Create the summary sheet with key metrics."""
        ws = wb.create_sheet(sheet.name)

        ws["A1"] = "Ledger Reconciliation Summary"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:D1")

        ws["A3"] = "File Information"
        ws["A3"].font = Font(bold=True)

        file_info = [
            ("Transactions File:", metadata.transactions_filename),
            ("Statements File:", metadata.statements_filename),
            ("Reconciliation Date:", metadata.reconciled_at.strftime(TIMESTAMP_DISPLAY)),
            (
                "Window (exclusive):",
                f"{metadata.window_start:{TIMESTAMP_DISPLAY}} to "
                f"{metadata.window_end:{TIMESTAMP_DISPLAY}}",
            ),
        ]

        for i, (label, value) in enumerate(file_info, start=4):
            ws[f"A{i}"] = label
            ws[f"B{i}"] = str(value)

        ws["A9"] = "Results"
        ws["A9"].font = Font(bold=True)

        count_data: list[tuple[str, Any]] = [
            ("Total Processed:", summary.total_processed),
            ("Total Matched:", summary.total_matched),
            ("Total Unmatched:", summary.total_unmatched),
            ("Unmatched Transactions:", len(summary.unmatched_transactions)),
            ("Unmatched Statements:", len(summary.unmatched_statements)),
            ("Match Rate:", f"{summary.match_rate:.1f}%"),
            ("Total Discrepancy:", f"{summary.total_discrepancy:,.2f}"),
        ]

        for i, (label, value) in enumerate(count_data, start=10):
            ws[f"A{i}"] = label
            ws[f"B{i}"] = value
            ws[f"B{i}"].alignment = Alignment(horizontal="right")

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 45

    def _create_unmatched_transactions_sheet(
        self,
        wb: Workbook,
        sheet: SheetConfig,
        transactions: tuple[Transaction, ...],
    ) -> None:
        """Create the unmatched system transactions sheet."""
        ws = wb.create_sheet(sheet.name)
        self._write_headers(ws, ["Transaction ID", "Amount", "Type", "Transaction Time"])

        for row_num, txn in enumerate(transactions, start=2):
            row_data = [
                txn.id,
                float(txn.amount),
                txn.kind.value,
                txn.timestamp.strftime(TIMESTAMP_DISPLAY),
            ]
            self._write_row(ws, row_num, row_data, UNMATCHED_FILL)

        self._auto_fit_columns(ws)

    def _create_unmatched_statements_sheet(
        self,
        wb: Workbook,
        sheet: SheetConfig,
        statements: tuple[BankStatement, ...],
    ) -> None:
        """Create the unmatched bank statements sheet."""
        ws = wb.create_sheet(sheet.name)
        self._write_headers(ws, ["Unique Identifier", "Amount", "Date"])

        for row_num, stmt in enumerate(statements, start=2):
            row_data = [
                stmt.external_id,
                float(stmt.amount),
                stmt.date.strftime(TIMESTAMP_DISPLAY),
            ]
            self._write_row(ws, row_num, row_data, UNMATCHED_FILL)

        self._auto_fit_columns(ws)

    def _create_discrepancy_sheet(
        self,
        wb: Workbook,
        sheet: SheetConfig,
        discrepancies: tuple[Discrepancy, ...],
    ) -> None:
        """Create the sheet listing same-instant amount differences."""
        ws = wb.create_sheet(sheet.name)
        self._write_headers(
            ws,
            [
                "Transaction ID",
                "Transaction Amount",
                "Unique Identifier",
                "Statement Amount",
                "Time",
                "Difference",
            ],
        )

        for row_num, item in enumerate(discrepancies, start=2):
            row_data = [
                item.transaction.id,
                float(item.transaction.amount),
                item.statement.external_id,
                float(item.statement.amount),
                item.transaction.timestamp.strftime(TIMESTAMP_DISPLAY),
                float(item.difference),
            ]
            self._write_row(ws, row_num, row_data, VARIANCE_FILL)

        self._auto_fit_columns(ws)

    def _create_audit_trail_sheet(
        self,
        wb: Workbook,
        sheet: SheetConfig,
        summary: ReconciliationSummary,
        metadata: RunMetadata,
    ) -> None:
        """Create the audit trail sheet."""
        ws = wb.create_sheet(sheet.name)

        ws["A1"] = "Reconciliation Audit Trail"
        ws["A1"].font = Font(size=14, bold=True)

        audit_info = [
            ("Generated At:", datetime.now().strftime(TIMESTAMP_DISPLAY)),
            ("Config File:", metadata.config_file_used or "Default"),
            ("Processing Time:", f"{metadata.processing_time_seconds:.2f} seconds"),
            ("Window Start:", metadata.window_start.strftime(TIMESTAMP_DISPLAY)),
            ("Window End:", metadata.window_end.strftime(TIMESTAMP_DISPLAY)),
            ("Discrepancy Pairs:", len(summary.discrepancies)),
        ]

        for row, (label, value) in enumerate(audit_info, start=3):
            ws[f"A{row}"] = label
            ws[f"B{row}"] = value

        self._auto_fit_columns(ws)

    def _write_headers(self, ws: Worksheet, headers: list[str]) -> None:
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER

    def _write_row(
        self,
        ws: Worksheet,
        row_num: int,
        row_data: list[Any],
        fill: Optional[PatternFill] = None,
    ) -> None:
        for col, value in enumerate(row_data, start=1):
            cell = ws.cell(row=row_num, column=col, value=value)
            cell.border = THIN_BORDER
            if fill is not None:
                cell.fill = fill

    def _auto_fit_columns(self, ws: Worksheet) -> None:
        """Auto-fit column widths based on content."""
        for column_cells in ws.columns:
            max_length = 0
            column = column_cells[0].column_letter

            for cell in column_cells:
                if cell.value is not None:
                    max_length = max(max_length, len(str(cell.value)))

            adjusted_width = min(max_length + 2, 50)
            ws.column_dimensions[column].width = adjusted_width

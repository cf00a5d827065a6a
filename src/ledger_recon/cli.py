"""
Command-line interface for the ledger vs bank statement reconciliation tool.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import logging
import sys

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .config import ReconConfig, generate_default_config, load_config, resolve_window
from .matching.engine import reconcile as reconcile_records
from .models.transaction import ReconciliationSummary, RunMetadata
from .parsers.statement_parser import StatementParser
from .parsers.transaction_parser import TransactionParser
from .reports.excel_generator import ExcelReportGenerator
from .utils.logging_config import setup_logging

console = Console()

WINDOW_FORMATS = ["%Y-%m-%d", "%Y-%m-%d %H:%M:%S"]
PREVIEW_ROWS = 20


@click.group()
@click.version_option(version=__version__)
def main():
    """Ledger vs Bank Statement Reconciliation Tool."""
    pass


@main.command()
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.argument("statements_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--start",
    type=click.DateTime(formats=WINDOW_FORMATS),
    default=None,
    help="Window start, exclusive (overrides window.start in config)",
)
@click.option(
    "--end",
    type=click.DateTime(formats=WINDOW_FORMATS),
    default=None,
    help="Window end, exclusive (overrides window.end in config)",
)
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output Excel file path")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--log-file", type=click.Path(path_type=Path), help="Also log to this file")
@click.option(
    "--dry-run", is_flag=True, help="Reconcile and show summary without generating report"
)
def reconcile(
    transactions_file: Path,
    statements_file: Path,
    start: Optional[datetime],
    end: Optional[datetime],
    config: Optional[Path],
    output: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
    dry_run: bool,
):
    """
    Reconcile system transactions with a bank statement.

    TRANSACTIONS_FILE: Path to the system transactions CSV

    STATEMENTS_FILE: Path to the bank statements CSV
    """
    try:
        recon_config = load_config(config)

        _configure_logging(recon_config, verbose, log_file)

        window_start, window_end = resolve_window(recon_config, start, end)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Parsing transactions...", total=None)
            transactions = TransactionParser(recon_config).parse_file(transactions_file)
            progress.update(task, completed=True)

            task = progress.add_task("Parsing bank statements...", total=None)
            statements = StatementParser(recon_config).parse_file(statements_file)
            progress.update(task, completed=True)

            task = progress.add_task("Running reconciliation...", total=None)
            start_time = datetime.now()

            summary = reconcile_records(transactions, statements, window_start, window_end)

            processing_time = (datetime.now() - start_time).total_seconds()
            progress.update(task, completed=True)

        metadata = RunMetadata(
            transactions_filename=transactions_file.name,
            statements_filename=statements_file.name,
            window_start=window_start,
            window_end=window_end,
            reconciled_at=start_time,
            processing_time_seconds=processing_time,
            config_file_used=recon_config.config_file_path,
        )

        _display_summary(summary, metadata)
        _display_unmatched(summary)

        if dry_run:
            console.print("\n[yellow]Dry run - no report generated[/yellow]")
            return

        if output is None:
            output = _default_output_path(recon_config.output.excel.filename_template)

        report_generator = ExcelReportGenerator(recon_config)
        report_path = report_generator.generate_report(
            summary=summary,
            metadata=metadata,
            output_path=output,
        )

        console.print(f"\n[green]Report generated: {report_path}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@main.command("parse-transactions")
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def parse_transactions(transactions_file: Path, config: Optional[Path], verbose: bool):
    """
    Parse a system transactions CSV and display its contents.

    TRANSACTIONS_FILE: Path to the system transactions CSV
    """
    try:
        recon_config = load_config(config)
        _configure_logging(recon_config, verbose)

        file_summary = TransactionParser(recon_config).get_file_summary(transactions_file)
        transactions = file_summary["records"]

        table = Table(title=f"System Transactions: {transactions_file.name}")
        table.add_column("ID")
        table.add_column("Amount", justify="right")
        table.add_column("Type")
        table.add_column("Transaction Time")

        for txn in transactions[:PREVIEW_ROWS]:
            table.add_row(txn.id, f"{txn.amount:,.2f}", txn.kind.value, str(txn.timestamp))

        console.print(table)
        _print_totals(transactions, file_summary)

    except Exception as e:
        console.print(f"[red]Error parsing file: {e}[/red]")
        sys.exit(1)


@main.command("parse-statements")
@click.argument("statements_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def parse_statements(statements_file: Path, config: Optional[Path], verbose: bool):
    """
    Parse a bank statements CSV and display its contents.

    STATEMENTS_FILE: Path to the bank statements CSV
    """
    try:
        recon_config = load_config(config)
        _configure_logging(recon_config, verbose)

        file_summary = StatementParser(recon_config).get_file_summary(statements_file)
        statements = file_summary["records"]

        table = Table(title=f"Bank Statements: {statements_file.name}")
        table.add_column("Unique Identifier")
        table.add_column("Amount", justify="right")
        table.add_column("Date")

        for stmt in statements[:PREVIEW_ROWS]:
            table.add_row(stmt.external_id, f"{stmt.amount:,.2f}", str(stmt.date))

        console.print(table)
        _print_totals(statements, file_summary)

    except Exception as e:
        console.print(f"[red]Error parsing file: {e}[/red]")
        sys.exit(1)


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _configure_logging(
    config: ReconConfig, verbose: bool, log_file: Optional[Path] = None
) -> None:
    log_level = logging.DEBUG if verbose else config.logging.level
    setup_logging(log_level, log_file=log_file, log_format=config.logging.format)


def _display_summary(summary: ReconciliationSummary, metadata: RunMetadata) -> None:
    """Display reconciliation summary in console."""
    table = Table(title="Reconciliation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Window Start (exclusive)", str(metadata.window_start))
    table.add_row("Window End (exclusive)", str(metadata.window_end))
    table.add_row("Total Processed", str(summary.total_processed))
    table.add_row("Total Matched", str(summary.total_matched))
    table.add_row("Total Unmatched", str(summary.total_unmatched))
    table.add_row("Match Rate", f"{summary.match_rate:.1f}%")
    table.add_row("Total Discrepancy", f"{summary.total_discrepancy:,.2f}")
    table.add_row("Processing Time", f"{metadata.processing_time_seconds:.2f}s")

    console.print(table)


def _display_unmatched(summary: ReconciliationSummary) -> None:
    """List unmatched records from both sides."""
    if summary.unmatched_transactions:
        table = Table(title="Unmatched Transactions")
        table.add_column("ID")
        table.add_column("Amount", justify="right")
        table.add_column("Type")
        table.add_column("Transaction Time")
        for txn in summary.unmatched_transactions:
            table.add_row(txn.id, f"{txn.amount:,.2f}", txn.kind.value, str(txn.timestamp))
        console.print(table)

    if summary.unmatched_statements:
        table = Table(title="Unmatched Statements")
        table.add_column("Unique Identifier")
        table.add_column("Amount", justify="right")
        table.add_column("Date")
        for stmt in summary.unmatched_statements:
            table.add_row(stmt.external_id, f"{stmt.amount:,.2f}", str(stmt.date))
        console.print(table)


def _print_totals(records: list, file_summary: dict) -> None:
    if len(records) > PREVIEW_ROWS:
        console.print(f"\n... and {len(records) - PREVIEW_ROWS} more records")

    skipped = file_summary["row_count"] - file_summary["parsed_count"]
    time_range = file_summary["time_range"]

    console.print(f"\nTotal records: {len(records)}")
    if skipped:
        console.print(f"[yellow]Skipped rows: {skipped}[/yellow]")
    if time_range["start"]:
        console.print(f"Time range: {time_range['start']} to {time_range['end']}")
    console.print(f"Total amount: {file_summary['total_amount']:,.2f}")


def _default_output_path(filename_template: str) -> Path:
    now = datetime.now()
    return Path(
        filename_template.format(date=now.strftime("%Y%m%d"), time=now.strftime("%H%M%S"))
    )


if __name__ == "__main__":
    main()

"""Shared fixtures for the ledger-recon test suite."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
import logging

import pytest

from ledger_recon.config import ReconConfig
from ledger_recon.models.transaction import BankStatement, Transaction, TransactionKind

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _ts(value: str) -> datetime:
    return datetime.strptime(value, TIMESTAMP_FORMAT)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attached to streams CliRunner has since closed."""
    yield
    logging.getLogger("ledger_recon").handlers = []


@pytest.fixture
def make_txn():
    """Build a Transaction from plain values."""

    def _make(txn_id, amount, when, kind=TransactionKind.DEBIT):
        return Transaction(
            id=txn_id,
            amount=Decimal(amount),
            kind=kind,
            timestamp=_ts(when),
        )

    return _make


@pytest.fixture
def make_stmt():
    """Build a BankStatement from plain values."""

    def _make(external_id, amount, when):
        return BankStatement(
            external_id=external_id,
            amount=Decimal(amount),
            date=_ts(when),
        )

    return _make


@pytest.fixture
def window():
    """The 2023 window used throughout, both bounds exclusive."""
    return _ts("2023-01-01 00:00:00"), _ts("2023-12-31 00:00:00")


@pytest.fixture
def config():
    return ReconConfig()


@pytest.fixture
def transactions_csv(tmp_path: Path) -> Path:
    path = tmp_path / "system_transactions.csv"
    path.write_text(
        "trxID,amount,type,transactionTime\n"
        "T1,100.00,DEBIT,2023-05-01 10:00:00\n"
        "T2,250.50,CREDIT,2023-05-02 11:30:00\n"
        "T3,-40.00,DEBIT,2023-06-01 09:00:00\n"
        "T4,75.00,CREDIT,2022-12-31 23:59:59\n"
    )
    return path


@pytest.fixture
def statements_csv(tmp_path: Path) -> Path:
    path = tmp_path / "bank_statements.csv"
    path.write_text(
        "unique_identifier,amount,date\n"
        "B1,100.00,2023-05-01 10:00:00\n"
        "B2,240.50,2023-05-02 11:30:00\n"
        "B3,15.00,2023-07-04 12:00:00\n"
    )
    return path

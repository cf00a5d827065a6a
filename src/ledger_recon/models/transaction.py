"""Data models for ledger transactions, bank statements and reconciliation results."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionKind(Enum):
    """Direction of a system transaction."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


@dataclass(frozen=True)
class Transaction:
    """
    Internal system transaction.

    The id is a bookkeeping key only; duplicates within one load are
    not rejected.
    """

    id: str

    # Signed amount, sign is significant for matching
    amount: Decimal

    kind: TransactionKind

    timestamp: datetime

    @property
    def moment(self) -> datetime:
        """Instant used by the match predicate."""
        return self.timestamp


@dataclass(frozen=True)
class BankStatement:
    """Bank-provided statement line."""

    external_id: str
    amount: Decimal
    date: datetime

    @property
    def moment(self) -> datetime:
        """Instant used by the match predicate."""
        return self.date


@dataclass(frozen=True)
class Discrepancy:
    """An unmatched transaction and a same-instant statement with a different amount."""

    transaction: Transaction
    statement: BankStatement
    difference: Decimal


@dataclass(frozen=True)
class ReconciliationSummary:
    """Result of reconciling one transaction set against one statement set."""

    total_processed: int
    total_matched: int
    total_unmatched: int
    unmatched_transactions: tuple[Transaction, ...]
    unmatched_statements: tuple[BankStatement, ...]
    total_discrepancy: Decimal

    # Pairs that make up total_discrepancy, in accumulation order
    discrepancies: tuple[Discrepancy, ...] = ()

    @property
    def match_rate(self) -> float:
        """Percentage of in-window transactions that found a matching statement."""
        if self.total_processed == 0:
            return 0.0
        return (self.total_matched / self.total_processed) * 100


@dataclass(frozen=True)
class RunMetadata:
    """Facts about a reconciliation run that are not part of its result."""

    transactions_filename: str
    statements_filename: str
    window_start: datetime
    window_end: datetime
    reconciled_at: datetime
    processing_time_seconds: float = 0.0
    config_file_used: Optional[str] = None

"""Data models for reconciliation."""

from .transaction import (
    BankStatement,
    Discrepancy,
    ReconciliationSummary,
    RunMetadata,
    Transaction,
    TransactionKind,
)

__all__ = [
    "BankStatement",
    "Discrepancy",
    "ReconciliationSummary",
    "RunMetadata",
    "Transaction",
    "TransactionKind",
]

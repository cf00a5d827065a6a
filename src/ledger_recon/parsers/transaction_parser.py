"""
System transactions CSV parser.
Expects the columns trxID, amount, type and transactionTime by default.
"""

import pandas as pd

from ..config import CsvInputConfig, ReconConfig
from ..models.transaction import Transaction, TransactionKind
from ..utils.exceptions import TransactionParseError
from .base import CsvRecordParser


class TransactionParser(CsvRecordParser[Transaction]):
    """Parser for internal ledger transaction exports."""

    label = "transactions"
    required_fields = ("id", "amount", "kind", "timestamp")
    error_class = TransactionParseError

    def _input_config(self, config: ReconConfig) -> CsvInputConfig:
        return config.input.transactions

    def _build_record(self, row: pd.Series, idx: int) -> Transaction:
        txn_id = self._field(row, "id")
        if not txn_id:
            raise ValueError("missing transaction id")

        return Transaction(
            id=txn_id,
            amount=self._parse_amount(self._field(row, "amount")),
            kind=self._parse_kind(self._field(row, "kind")),
            timestamp=self._parse_timestamp(self._field(row, "timestamp")),
        )

    def _parse_kind(self, value: str) -> TransactionKind:
        try:
            return TransactionKind(value.upper())
        except ValueError as e:
            raise ValueError(
                f"invalid transaction type '{value}', expected DEBIT or CREDIT"
            ) from e

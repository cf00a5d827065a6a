"""
Bank statement CSV parser.
Expects the columns unique_identifier, amount and date by default.
"""

import pandas as pd

from ..config import CsvInputConfig, ReconConfig
from ..models.transaction import BankStatement
from ..utils.exceptions import StatementParseError
from .base import CsvRecordParser


class StatementParser(CsvRecordParser[BankStatement]):
    """Parser for bank statement exports."""

    label = "statements"
    required_fields = ("external_id", "amount", "date")
    error_class = StatementParseError

    def _input_config(self, config: ReconConfig) -> CsvInputConfig:
        return config.input.statements

    def _build_record(self, row: pd.Series, idx: int) -> BankStatement:
        # Bank exports sometimes leave the identifier blank; the line is still reconcilable
        external_id = self._field(row, "external_id") or f"BANK-{idx:05d}"

        return BankStatement(
            external_id=external_id,
            amount=self._parse_amount(self._field(row, "amount")),
            date=self._parse_timestamp(self._field(row, "date")),
        )

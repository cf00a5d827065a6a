"""
Shared CSV loading for ledger and bank statement files.
Subclasses describe the columns they need and build one record per row.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Generic, TypeVar
import logging

import pandas as pd

from ..config import CsvInputConfig, ReconConfig
from ..utils.exceptions import LoadError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


class CsvRecordParser(Generic[RecordT]):
    """
    Base parser for one kind of CSV record file.

    Subclasses set ``label``, ``required_fields`` and ``error_class`` and
    implement ``_build_record``.
    """

    label = "records"
    required_fields: tuple[str, ...] = ()
    error_class: type[LoadError] = LoadError

    def __init__(self, config: ReconConfig):
        """
        Initialize the parser with configuration.

        Args:
            config: Application configuration object
        """
        self.config = config
        self.input_config = self._input_config(config)
        self.column_mappings = self.input_config.column_mappings
        self.skip_invalid_rows = config.input.skip_invalid_rows

    def _input_config(self, config: ReconConfig) -> CsvInputConfig:
        raise NotImplementedError

    def _build_record(self, row: pd.Series, idx: int) -> RecordT:
        raise NotImplementedError

    def column(self, field_name: str) -> str:
        """CSV header mapped to a record field."""
        return self.column_mappings.get(field_name, field_name)

    def parse_file(self, file_path: Path) -> list[RecordT]:
        """
        Parse a CSV file into records, preserving row order.

        Args:
            file_path: Path to the CSV file

        Returns:
            List of parsed records

        Raises:
            LoadError subclass: If the file cannot be read, required columns
                are missing, or a row is malformed while skipping is disabled
        """
        logger.info(f"Parsing {self.label} file: {file_path}")

        df = self._read_csv(file_path)
        self._check_columns(df, file_path)

        records = self._process_dataframe(df)
        logger.info(f"Extracted {len(records)} {self.label} from {file_path}")

        return records

    def _read_csv(self, file_path: Path) -> pd.DataFrame:
        try:
            return pd.read_csv(
                file_path,
                encoding=self.input_config.encoding,
                delimiter=self.input_config.delimiter,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                # Rows ending in a delimiter must not turn the first column into the index
                index_col=False,
            )
        except pd.errors.EmptyDataError:
            logger.warning(f"{file_path} is empty")
            return pd.DataFrame(columns=[self.column(f) for f in self.required_fields])
        except Exception as e:
            logger.error(f"Failed to read CSV file: {e}")
            raise self.error_class(f"Failed to read CSV file {file_path}: {e}") from e

    def _check_columns(self, df: pd.DataFrame, file_path: Path) -> None:
        df.columns = [str(c).strip() for c in df.columns]
        missing = [
            self.column(f) for f in self.required_fields if self.column(f) not in df.columns
        ]
        if missing:
            raise self.error_class(
                f"{file_path} is missing required column(s): {', '.join(missing)}"
            )

    def _process_dataframe(self, df: pd.DataFrame) -> list[RecordT]:
        """
        Convert DataFrame rows to records.

        Malformed rows are logged and skipped unless
        ``input.skip_invalid_rows`` is off.
        """
        records: list[RecordT] = []

        # Row numbers in messages are 1-based data rows, header excluded
        for row_num, (_, row) in enumerate(df.iterrows(), start=1):
            try:
                records.append(self._build_record(row, row_num))
            except ValueError as e:
                if not self.skip_invalid_rows:
                    raise self.error_class(f"Row {row_num}: {e}") from e
                logger.warning(f"Row {row_num}: {e}, skipping")

        return records

    def _field(self, row: pd.Series, field_name: str) -> str:
        return str(row.get(self.column(field_name), "")).strip()

    def _parse_timestamp(self, value: str) -> datetime:
        """
        Parse a timestamp using the configured layout.

        Raises:
            ValueError: If the value does not match the layout
        """
        if not value:
            raise ValueError("missing timestamp")
        timestamp_format = self.input_config.timestamp_format
        try:
            parsed = datetime.strptime(value, timestamp_format)
        except ValueError as e:
            raise ValueError(f"invalid timestamp '{value}'") from e
        # strptime accepts unpadded fields such as 2023-5-1 1:2:3; the layout is fixed
        if parsed.strftime(timestamp_format) != value:
            raise ValueError(
                f"invalid timestamp '{value}', expected layout {timestamp_format}"
            )
        return parsed

    def _parse_amount(self, value: Any) -> Decimal:
        """
        Parse a signed amount, tolerating currency symbols and thousands separators.

        Raises:
            ValueError: If the value is empty or not numeric
        """
        text = str(value).replace("$", "").replace(",", "").strip()
        if not text:
            raise ValueError("missing amount")
        try:
            amount = Decimal(text)
        except InvalidOperation as e:
            raise ValueError(f"invalid amount '{value}'") from e
        if not amount.is_finite():
            raise ValueError(f"invalid amount '{value}'")
        return amount

    def get_file_summary(self, file_path: Path) -> dict:
        """
        Parse a CSV file and summarize it in one read.

        Args:
            file_path: Path to the CSV file

        Returns:
            Dictionary with the parsed records, row count, columns, time
            range and amount total
        """
        df = self._read_csv(file_path)
        self._check_columns(df, file_path)
        records = self._process_dataframe(df)

        moments = [r.moment for r in records]
        total = sum((r.amount for r in records), Decimal("0"))

        return {
            "records": records,
            "row_count": len(df),
            "parsed_count": len(records),
            "columns": list(df.columns),
            "time_range": {
                "start": min(moments).isoformat(sep=" ") if moments else None,
                "end": max(moments).isoformat(sep=" ") if moments else None,
            },
            "total_amount": total,
        }

"""Configuration loader and validation for reconciliation settings."""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
WINDOW_BOUND_FORMATS = (TIMESTAMP_FORMAT, "%Y-%m-%d")


class CsvInputConfig(BaseModel):
    """Settings for reading one CSV input."""

    encoding: str = "utf-8"
    delimiter: str = ","
    timestamp_format: str = TIMESTAMP_FORMAT
    column_mappings: dict[str, str] = Field(default_factory=dict)


class InputConfig(BaseModel):
    """Configuration for input file parsing."""

    transactions: CsvInputConfig = Field(
        default_factory=lambda: CsvInputConfig(
            column_mappings={
                "id": "trxID",
                "amount": "amount",
                "kind": "type",
                "timestamp": "transactionTime",
            }
        )
    )
    statements: CsvInputConfig = Field(
        default_factory=lambda: CsvInputConfig(
            column_mappings={
                "external_id": "unique_identifier",
                "amount": "amount",
                "date": "date",
            }
        )
    )
    skip_invalid_rows: bool = True


class WindowConfig(BaseModel):
    """Reconciliation window bounds, both exclusive."""

    start: Optional[str] = None
    end: Optional[str] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def _stringify_yaml_dates(cls, value: Any) -> Any:
        # YAML loads an unquoted 2023-01-01 as a date object
        if isinstance(value, (date, datetime)):
            return str(value)
        return value


class ExcelOutputConfig(BaseModel):
    """Configuration for Excel output."""

    filename_template: str = "reconciliation_report_{date}_{time}.xlsx"


class SheetConfig(BaseModel):
    """Configuration for a report sheet."""

    enabled: bool = True
    name: str


class SheetsConfig(BaseModel):
    """Configuration for all report sheets."""

    summary: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Summary"))
    unmatched_transactions: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Unmatched Transactions")
    )
    unmatched_statements: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Unmatched Statements")
    )
    discrepancies: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Discrepancies")
    )
    audit_trail: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Audit Trail"))


class OutputConfig(BaseModel):
    """Configuration for output."""

    excel: ExcelOutputConfig = Field(default_factory=ExcelOutputConfig)
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ReconConfig(BaseModel):
    """Main configuration model for reconciliation."""

    input: InputConfig = Field(default_factory=InputConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return {
        "input": {
            "transactions": {
                "encoding": "utf-8",
                "delimiter": ",",
                "timestamp_format": TIMESTAMP_FORMAT,
                "column_mappings": {
                    "id": "trxID",
                    "amount": "amount",
                    "kind": "type",
                    "timestamp": "transactionTime",
                },
            },
            "statements": {
                "encoding": "utf-8",
                "delimiter": ",",
                "timestamp_format": TIMESTAMP_FORMAT,
                "column_mappings": {
                    "external_id": "unique_identifier",
                    "amount": "amount",
                    "date": "date",
                },
            },
            "skip_invalid_rows": True,
        },
        "window": {
            "start": None,
            "end": None,
        },
        "output": {
            "excel": {
                "filename_template": "reconciliation_report_{date}_{time}.xlsx",
            },
            "sheets": {
                "summary": {"enabled": True, "name": "Summary"},
                "unmatched_transactions": {
                    "enabled": True,
                    "name": "Unmatched Transactions",
                },
                "unmatched_statements": {
                    "enabled": True,
                    "name": "Unmatched Statements",
                },
                "discrepancies": {"enabled": True, "name": "Discrepancies"},
                "audit_trail": {"enabled": True, "name": "Audit Trail"},
            },
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    }


def load_config(config_path: Optional[Path] = None) -> ReconConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        ReconConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a mapping"
            )

        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        return ReconConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def parse_window_bound(value: Any) -> datetime:
    """
    Parse a window bound given as a datetime or a string.

    Accepts ``YYYY-MM-DD HH:MM:SS`` or ``YYYY-MM-DD`` (midnight).

    Raises:
        ConfigurationError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value

    text = str(value).strip()
    for fmt in WINDOW_BOUND_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    raise ConfigurationError(
        f"Invalid window bound '{value}', expected YYYY-MM-DD or YYYY-MM-DD HH:MM:SS"
    )


def resolve_window(
    config: ReconConfig,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> tuple[datetime, datetime]:
    """
    Determine the reconciliation window.

    Explicit bounds win over the ``window`` section of the configuration.
    An inverted window is returned as-is; reconciling over it simply
    yields an empty result.

    Raises:
        ConfigurationError: If a bound is missing from both places
    """
    start_value = start if start is not None else config.window.start
    end_value = end if end is not None else config.window.end

    if start_value is None or end_value is None:
        raise ConfigurationError(
            "Reconciliation window is not set: pass --start/--end or set "
            "window.start and window.end in the configuration file"
        )

    window_start = parse_window_bound(start_value)
    window_end = parse_window_bound(end_value)

    if window_start >= window_end:
        logger.warning(
            f"Window start {window_start} is not before end {window_end}; "
            "no records will be in the window"
        )

    return window_start, window_end


def generate_default_config(output_path: Path) -> None:
    """
    Generate a default configuration file.

    Args:
        output_path: Path to write the configuration file
    """
    config_dict = get_default_config()

    yaml_content = """# Ledger vs bank statement reconciliation configuration
# Generated configuration file - customize as needed
# window.start / window.end accept YYYY-MM-DD or YYYY-MM-DD HH:MM:SS (both exclusive)

"""
    yaml_content += yaml.dump(config_dict, default_flow_style=False, sort_keys=False)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")

"""Utility modules."""

from .exceptions import (
    ReconciliationError,
    LoadError,
    TransactionParseError,
    StatementParseError,
    ConfigurationError,
    ReportGenerationError,
)
from .logging_config import setup_logging

__all__ = [
    "ReconciliationError",
    "LoadError",
    "TransactionParseError",
    "StatementParseError",
    "ConfigurationError",
    "ReportGenerationError",
    "setup_logging",
]

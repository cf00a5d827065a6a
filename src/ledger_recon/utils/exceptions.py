"""Custom exceptions for the reconciliation application."""


class ReconciliationError(Exception):
    """Base exception for reconciliation errors."""

    pass


class LoadError(ReconciliationError):
    """Error loading input records."""

    pass


class TransactionParseError(LoadError):
    """Error parsing the system transactions CSV file."""

    pass


class StatementParseError(LoadError):
    """Error parsing the bank statements CSV file."""

    pass


class ConfigurationError(ReconciliationError):
    """Error in configuration."""

    pass


class ReportGenerationError(ReconciliationError):
    """Error generating Excel report."""

    pass

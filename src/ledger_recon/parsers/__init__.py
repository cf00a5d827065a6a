"""Parsers for system transaction and bank statement files."""

from .statement_parser import StatementParser
from .transaction_parser import TransactionParser

__all__ = ["StatementParser", "TransactionParser"]

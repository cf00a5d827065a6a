"""Reconciliation of internal ledger transactions against bank statements."""

__version__ = "0.1.0"

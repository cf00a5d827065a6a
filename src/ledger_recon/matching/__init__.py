"""Reconciliation engine and record predicates."""

from .engine import find_discrepancies, reconcile
from .predicates import in_window, is_discrepancy, is_match

__all__ = [
    "find_discrepancies",
    "reconcile",
    "in_window",
    "is_discrepancy",
    "is_match",
]

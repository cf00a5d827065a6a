"""
Record predicates shared by the reconciliation passes.

Both record types expose ``amount`` and ``moment``, so every predicate
accepts a transaction and a statement in either order.
"""

from datetime import datetime
from typing import Union

from ..models.transaction import BankStatement, Transaction

Record = Union[Transaction, BankStatement]


def in_window(record: Record, window_start: datetime, window_end: datetime) -> bool:
    """Check whether a record falls strictly inside the window (both bounds exclusive)."""
    return window_start < record.moment < window_end


def is_match(left: Record, right: Record) -> bool:
    """Exact amount and exact instant. No tolerance, no rounding."""
    return left.amount == right.amount and left.moment == right.moment


def is_discrepancy(left: Record, right: Record) -> bool:
    """Same instant but a different amount."""
    return left.amount != right.amount and left.moment == right.moment

"""
Reconciliation of system transactions against bank statements.

Matching is exact on amount and instant and is not one-to-one: a statement
can satisfy the match test for several transactions and vice versa, since
matched records are never removed from the candidate pool.
"""

from datetime import datetime
from decimal import Decimal
from typing import Sequence
import logging

from ..models.transaction import (
    BankStatement,
    Discrepancy,
    ReconciliationSummary,
    Transaction,
)
from .predicates import in_window, is_discrepancy, is_match

logger = logging.getLogger(__name__)


def reconcile(
    transactions: Sequence[Transaction],
    statements: Sequence[BankStatement],
    window_start: datetime,
    window_end: datetime,
) -> ReconciliationSummary:
    """
    Reconcile transactions against statements inside a date window.

    Records exactly on either window bound are left out. An inverted or
    empty window, or empty inputs, give a zero-valued summary rather than
    an error.

    Args:
        transactions: System transactions in load order
        statements: Bank statements in load order
        window_start: Exclusive lower bound
        window_end: Exclusive upper bound

    Returns:
        Reconciliation summary built from fresh collections
    """
    filtered_transactions = [
        t for t in transactions if in_window(t, window_start, window_end)
    ]
    filtered_statements = [
        s for s in statements if in_window(s, window_start, window_end)
    ]
    logger.debug(
        f"Window ({window_start} .. {window_end}): "
        f"{len(filtered_transactions)}/{len(transactions)} transactions, "
        f"{len(filtered_statements)}/{len(statements)} statements"
    )

    matched_ids, unmatched_transactions = _match_transactions(
        filtered_transactions, filtered_statements
    )
    unmatched_statements = _unmatched_statements(
        filtered_transactions, filtered_statements
    )
    discrepancies = find_discrepancies(
        filtered_transactions, filtered_statements, matched_ids
    )

    total_matched = len(filtered_transactions) - len(unmatched_transactions)
    total_discrepancy = sum((d.difference for d in discrepancies), Decimal("0"))

    summary = ReconciliationSummary(
        total_processed=len(filtered_transactions),
        total_matched=total_matched,
        total_unmatched=len(unmatched_transactions) + len(unmatched_statements),
        unmatched_transactions=tuple(unmatched_transactions),
        unmatched_statements=tuple(unmatched_statements),
        total_discrepancy=total_discrepancy,
        discrepancies=tuple(discrepancies),
    )

    logger.info(
        f"Reconciliation complete: {summary.total_processed} processed, "
        f"{summary.total_matched} matched, {summary.total_unmatched} unmatched, "
        f"discrepancy {summary.total_discrepancy}"
    )

    return summary


def _match_transactions(
    transactions: list[Transaction],
    statements: list[BankStatement],
) -> tuple[set[str], list[Transaction]]:
    """
    Find a matching statement for each transaction.

    The scan stops at the first matching statement in statement order.

    Returns:
        Tuple of (ids of matched transactions, unmatched transactions)
    """
    matched_ids: set[str] = set()
    unmatched: list[Transaction] = []

    for txn in transactions:
        if any(is_match(txn, stmt) for stmt in statements):
            matched_ids.add(txn.id)
        else:
            unmatched.append(txn)

    return matched_ids, unmatched


def _unmatched_statements(
    transactions: list[Transaction],
    statements: list[BankStatement],
) -> list[BankStatement]:
    """Statements with no matching transaction, independent of the matched-id set."""
    return [
        stmt
        for stmt in statements
        if not any(is_match(txn, stmt) for txn in transactions)
    ]


def find_discrepancies(
    transactions: Sequence[Transaction],
    statements: Sequence[BankStatement],
    matched_ids: set[str],
) -> list[Discrepancy]:
    """
    Collect amount differences for unmatched transactions.

    Every statement sharing the transaction's instant with a different
    amount contributes, so one transaction may appear several times.
    Transactions are skipped by id: a transaction whose id belongs to any
    matched transaction contributes nothing.

    Args:
        transactions: In-window transactions
        statements: In-window statements
        matched_ids: Ids of transactions that found a match

    Returns:
        Discrepancies in transaction order, then statement order
    """
    discrepancies: list[Discrepancy] = []

    for txn in transactions:
        if txn.id in matched_ids:
            continue
        for stmt in statements:
            if is_discrepancy(txn, stmt):
                discrepancies.append(
                    Discrepancy(
                        transaction=txn,
                        statement=stmt,
                        difference=abs(txn.amount - stmt.amount),
                    )
                )

    return discrepancies

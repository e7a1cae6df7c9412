"""
Filter strategies that select transactions from the store.

A filter decides which transactions match and reports them as indices
into the store's current transaction list.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import Any, List, Sequence

from .store import TransactionStore
from .transaction import Category, Transaction, parse_category

logger = logging.getLogger(__name__)


class TransactionFilter(ABC):
    """Strategy deciding which transactions match."""

    @abstractmethod
    def matches(self, transaction: Transaction) -> bool:
        """Return True if the transaction matches this filter."""

    def filter(self, transactions: Sequence[Transaction]) -> List[int]:
        """
        Get the indices of matching transactions.

        Args:
            transactions: Transactions in store order

        Returns:
            Ascending list of indices of the matching transactions
        """
        return [index for index, transaction in enumerate(transactions) if self.matches(transaction)]


class CategoryFilter(TransactionFilter):
    """Matches transactions of one category."""

    def __init__(self, category: Any):
        self.category: Category = parse_category(category)

    def matches(self, transaction: Transaction) -> bool:
        return transaction.category == self.category

    def __repr__(self) -> str:
        return f"CategoryFilter(category={self.category.value})"


class AmountFilter(TransactionFilter):
    """Matches transactions with exactly the given amount."""

    def __init__(self, amount: Any):
        try:
            self.amount = Decimal(str(amount))
        except (InvalidOperation, ValueError, TypeError):
            raise ValueError(f"Invalid amount format: {amount}")

        if not self.amount.is_finite():
            raise ValueError(f"Amount must be a finite number, got: {self.amount}")

        if self.amount <= 0:
            raise ValueError(f"Amount must be positive, got: {self.amount}")

    def matches(self, transaction: Transaction) -> bool:
        return transaction.amount == self.amount

    def __repr__(self) -> str:
        return f"AmountFilter(amount={self.amount})"


def apply_filter(store: TransactionStore, transaction_filter: TransactionFilter) -> List[int]:
    """
    Run a filter over the store and record its result.

    Args:
        store: Store to filter
        transaction_filter: Filter strategy to apply

    Returns:
        The matched indices now held by the store
    """
    indices = transaction_filter.filter(store.get_transactions())
    store.set_matched_filter_indices(indices)
    logger.info(f"Applied {transaction_filter!r}: {len(indices)} matches")
    return indices

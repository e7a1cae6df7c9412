"""
In-memory transaction store for the expense tracker.

This module implements the observable model: an ordered list of
transactions, the indices currently matched by a filter, and the
listeners notified after every state change.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from .listener import TransactionStoreListener
from .transaction import Transaction

logger = logging.getLogger(__name__)


class TransactionStore:
    """
    Ordered collection of transactions with filter results and observers.

    Callers only ever receive copies of the internal sequences. Every
    successful mutation clears or replaces state and then notifies all
    registered listeners synchronously, in registration order.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._transactions: List[Transaction] = []
        self._matched_filter_indices: List[int] = []
        self._listeners: List[TransactionStoreListener] = []

    def add_transaction(self, transaction: Optional[Transaction]) -> None:
        """
        Append a transaction to the end of the store.

        Args:
            transaction: The transaction to add

        Raises:
            ValueError: If transaction is None
        """
        if transaction is None:
            raise ValueError("The new transaction must be non-null.")

        self._transactions.append(transaction)
        # Previous filter results no longer line up with the list.
        self._matched_filter_indices.clear()
        logger.debug(f"Added transaction, store now holds {len(self._transactions)}")
        self._state_changed()

    def remove_transaction(self, transaction: Transaction) -> None:
        """
        Remove the first transaction equal to the given one.

        Removing a transaction that is not stored is a no-op, but the
        filter is still cleared and listeners are still notified.

        Args:
            transaction: The transaction to remove
        """
        try:
            self._transactions.remove(transaction)
            logger.debug(f"Removed transaction, store now holds {len(self._transactions)}")
        except ValueError:
            logger.debug("Transaction to remove was not found")

        self._matched_filter_indices.clear()
        self._state_changed()

    def get_transactions(self) -> Tuple[Transaction, ...]:
        """
        Get a read-only snapshot of the stored transactions.

        Returns:
            Tuple of transactions in insertion order
        """
        return tuple(self._transactions)

    def set_matched_filter_indices(self, indices: Optional[Iterable[int]]) -> None:
        """
        Replace the matched filter indices.

        Validation is all-or-nothing: if any index is rejected the
        previous indices are kept and no listener is notified.

        Args:
            indices: Positions of the transactions matching the filter

        Raises:
            ValueError: If indices is None or any index is out of range
        """
        if indices is None:
            raise ValueError("The matched filter indices list must be non-null.")

        new_indices = list(indices)
        size = len(self._transactions)
        for index in new_indices:
            if isinstance(index, bool) or not isinstance(index, int):
                raise ValueError(f"Matched filter index must be an integer, got: {index!r}")
            if index < 0 or index > size - 1:
                raise ValueError(
                    "Each matched filter index must be between 0 (inclusive) "
                    f"and the number of transactions (exclusive), got: {index}"
                )

        self._matched_filter_indices = new_indices
        logger.debug(f"Matched filter indices set to {new_indices}")
        self._state_changed()

    def get_matched_filter_indices(self) -> List[int]:
        """Get a copy of the matched filter indices."""
        return list(self._matched_filter_indices)

    def register(self, listener: Optional[TransactionStoreListener]) -> bool:
        """
        Register a listener for state change notifications.

        Args:
            listener: The listener to register

        Returns:
            True if the listener was newly registered, False if it is
            None or already registered
        """
        if listener is None:
            return False

        if self.has_listener(listener):
            return False

        self._listeners.append(listener)
        logger.debug(f"Registered listener {listener!r}")
        return True

    def listener_count(self) -> int:
        """Return the number of registered listeners."""
        return len(self._listeners)

    def has_listener(self, listener: TransactionStoreListener) -> bool:
        """Check whether an equal listener is already registered."""
        return listener in self._listeners

    def _state_changed(self) -> None:
        """Notify every registered listener of a state change."""
        for listener in self._listeners:
            listener.update(self)

    def __len__(self) -> int:
        """Return number of stored transactions."""
        return len(self._transactions)

    def __repr__(self) -> str:
        return (
            f"TransactionStore(transactions={len(self._transactions)}, "
            f"matched={len(self._matched_filter_indices)}, listeners={len(self._listeners)})"
        )

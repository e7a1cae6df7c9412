"""
Listener interface for transaction store state changes.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .store import TransactionStore


class TransactionStoreListener(ABC):
    """
    Observer notified whenever a TransactionStore changes state.
    """

    @abstractmethod
    def update(self, store: 'TransactionStore') -> None:
        """
        Handle a state change.

        Args:
            store: The store whose state changed
        """


class LoggingListener(TransactionStoreListener):
    """
    Listener that writes an audit record for every state change.
    """

    def __init__(self, audit_logger: logging.Logger):
        self.audit_logger = audit_logger

    def update(self, store: 'TransactionStore') -> None:
        """Log the current transaction count and matched indices."""
        self.audit_logger.info(
            f"STATE_CHANGED|"
            f"TRANSACTIONS:{len(store.get_transactions())}|"
            f"MATCHED:{store.get_matched_filter_indices()}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LoggingListener):
            return NotImplemented
        return self.audit_logger is other.audit_logger

    def __hash__(self) -> int:
        return hash(self.audit_logger.name)

    def __repr__(self) -> str:
        return f"LoggingListener(logger={self.audit_logger.name!r})"

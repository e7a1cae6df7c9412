"""
Core model components.

This module contains the transaction value object, the observable
transaction store, its listener interface, and filter strategies.
"""

from .transaction import Transaction, Category, parse_category
from .listener import TransactionStoreListener, LoggingListener
from .store import TransactionStore
from .filters import TransactionFilter, CategoryFilter, AmountFilter, apply_filter

__all__ = [
    "Transaction",
    "Category",
    "parse_category",
    "TransactionStoreListener",
    "LoggingListener",
    "TransactionStore",
    "TransactionFilter",
    "CategoryFilter",
    "AmountFilter",
    "apply_filter",
]

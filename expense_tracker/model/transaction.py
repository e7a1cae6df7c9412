"""
Transaction data structures for the expense tracker.

This module defines the expense categories and the Transaction value
object stored by the transaction store.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict


MAX_AMOUNT = Decimal('1000')


class Category(Enum):
    """
    Expense categories supported by the tracker.
    """
    FOOD = "food"
    TRAVEL = "travel"
    BILLS = "bills"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"


def parse_category(category: Any) -> Category:
    """
    Convert a category name or enum member to a Category.

    Args:
        category: Category enum member or case-insensitive string value

    Returns:
        Category enum value

    Raises:
        ValueError: If category is not a known category
    """
    if isinstance(category, Category):
        return category
    if not isinstance(category, str):
        raise ValueError(f"Category must be a string, got: {type(category).__name__}")
    try:
        return Category(category.strip().lower())
    except ValueError:
        raise ValueError(f"Invalid category: {category}. Must be one of: {[c.value for c in Category]}")


@dataclass
class Transaction:
    """
    Represents a single expense entry.

    Amounts use Decimal to keep the entered value exact. The store never
    looks inside a transaction; equality is only used for removal.
    """

    transaction_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    amount: Decimal = Decimal('0')
    category: Category = Category.OTHER
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate transaction after initialization."""
        self._validate()

    def _validate(self) -> None:
        """
        Validate transaction fields.

        Raises:
            ValueError: If amount or category are invalid
        """
        if not isinstance(self.amount, Decimal):
            raise ValueError(f"Amount must be a Decimal, got: {type(self.amount).__name__}")

        if not self.amount.is_finite():
            raise ValueError(f"Amount must be a finite number, got: {self.amount}")

        if self.amount <= 0:
            raise ValueError(f"Amount must be positive, got: {self.amount}")

        if self.amount > MAX_AMOUNT:
            raise ValueError(f"Amount cannot exceed {MAX_AMOUNT}, got: {self.amount}")

        if not isinstance(self.category, Category):
            raise ValueError(f"Category must be a Category, got: {self.category!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction to dictionary for serialization."""
        return {
            "transaction_id": self.transaction_id,
            "amount": str(self.amount),
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert transaction to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        """
        Create transaction from dictionary.

        Raises:
            ValueError: If a required field is missing or malformed
        """
        for key in ("amount", "category"):
            if key not in data:
                raise ValueError(f"Missing required field: {key}")

        try:
            amount = Decimal(str(data["amount"]))
        except (InvalidOperation, ValueError, TypeError):
            raise ValueError(f"Invalid amount format: {data['amount']}")

        kwargs: Dict[str, Any] = {
            "transaction_id": data.get("transaction_id", str(uuid.uuid4())),
            "amount": amount,
            "category": parse_category(data["category"]),
        }
        if data.get("timestamp"):
            timestamp = data["timestamp"]
            if not isinstance(timestamp, str):
                raise ValueError(f"Timestamp must be an ISO-8601 string, got: {timestamp!r}")
            kwargs["timestamp"] = datetime.fromisoformat(timestamp.replace('Z', '+00:00'))
        return cls(**kwargs)

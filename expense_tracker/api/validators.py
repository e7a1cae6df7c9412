"""
Input validation utilities for the API layer.

This module validates transaction and filter requests before they
reach the transaction store.
"""

from decimal import Decimal, InvalidOperation
from typing import Dict, Any, List, Optional, Tuple
import logging

from ..model.filters import AmountFilter, CategoryFilter
from ..model.transaction import Category, MAX_AMOUNT

logger = logging.getLogger(__name__)

MAX_DECIMAL_PLACES = 2
FILTER_FIELDS = ('indices', 'category', 'amount')


def validate_amount(amount: Any) -> Tuple[bool, Optional[str], Optional[Decimal]]:
    """
    Validate a transaction amount.

    Args:
        amount: Amount to validate

    Returns:
        Tuple of (is_valid, error_message, parsed_amount)
    """
    if amount is None:
        return False, "Amount is required", None

    if isinstance(amount, bool):
        return False, f"Invalid amount format: {amount}", None

    try:
        amt = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        return False, f"Invalid amount format: {amount}", None

    if not amt.is_finite():
        return False, f"Invalid amount format: {amount}", None

    if amt <= 0:
        return False, "Amount must be positive", None

    if amt > MAX_AMOUNT:
        return False, f"Amount too large. Maximum: {MAX_AMOUNT}", None

    if amt.as_tuple().exponent < -MAX_DECIMAL_PLACES:
        return False, f"Amount cannot have more than {MAX_DECIMAL_PLACES} decimal places", None

    return True, None, amt


def validate_category(category: Any) -> Tuple[bool, Optional[str], Optional[Category]]:
    """
    Validate a transaction category.

    Args:
        category: Category name to validate

    Returns:
        Tuple of (is_valid, error_message, parsed_category)
    """
    if not category:
        return False, "Category is required", None

    if not isinstance(category, str):
        return False, "Category must be a string", None

    try:
        cat = Category(category.strip().lower())
    except ValueError:
        valid_categories = [c.value for c in Category]
        return False, f"Invalid category: {category}. Must be one of: {valid_categories}", None

    return True, None, cat


def validate_transaction_request(data: Dict[str, Any]) -> Tuple[bool, Optional[str], Optional[Dict[str, Any]]]:
    """
    Validate a request to add a transaction.

    Args:
        data: Transaction request data

    Returns:
        Tuple of (is_valid, error_message, parsed_data)
    """
    for field in ('amount', 'category'):
        if field not in data:
            return False, f"Missing required field: {field}", None

    is_valid, error, amount = validate_amount(data['amount'])
    if not is_valid:
        return False, error, None

    is_valid, error, category = validate_category(data['category'])
    if not is_valid:
        return False, error, None

    return True, None, {'amount': amount, 'category': category}


def validate_indices(indices: Any) -> Tuple[bool, Optional[str], Optional[List[int]]]:
    """
    Validate a list of matched filter indices.

    Range checks are left to the store, which knows its current size.

    Args:
        indices: Value expected to be a list of integers

    Returns:
        Tuple of (is_valid, error_message, parsed_indices)
    """
    if not isinstance(indices, list):
        return False, "Indices must be a list of integers", None

    for index in indices:
        if isinstance(index, bool) or not isinstance(index, int):
            return False, f"Invalid index: {index!r}. Indices must be integers", None

    return True, None, list(indices)


def validate_filter_request(data: Dict[str, Any]) -> Tuple[bool, Optional[str], Optional[Dict[str, Any]]]:
    """
    Validate a filter request.

    The request must carry exactly one of ``indices``, ``category`` or
    ``amount``. Category and amount requests are turned into filter
    strategies; index requests are passed through.

    Args:
        data: Filter request data

    Returns:
        Tuple of (is_valid, error_message, parsed_data) where parsed_data
        holds either ``indices`` or ``filter``
    """
    present = [field for field in FILTER_FIELDS if field in data]
    if len(present) != 1:
        return False, f"Exactly one of {list(FILTER_FIELDS)} is required", None

    field = present[0]
    if field == 'indices':
        is_valid, error, indices = validate_indices(data['indices'])
        if not is_valid:
            return False, error, None
        return True, None, {'indices': indices}

    if field == 'category':
        is_valid, error, category = validate_category(data['category'])
        if not is_valid:
            return False, error, None
        return True, None, {'filter': CategoryFilter(category)}

    is_valid, error, amount = validate_amount(data['amount'])
    if not is_valid:
        return False, error, None
    return True, None, {'filter': AmountFilter(amount)}

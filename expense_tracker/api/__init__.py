"""
API layer for the expense tracker.

This module provides the REST API that drives the transaction store
and the validators applied to its inputs.
"""

from .rest_api import create_app, run_server
from .validators import validate_transaction_request, validate_filter_request

__all__ = [
    "create_app",
    "run_server",
    "validate_transaction_request",
    "validate_filter_request",
]

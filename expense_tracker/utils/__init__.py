"""
Utility modules for the expense tracker.

This module provides logging setup and the audit logger used to
record store state changes.
"""

from .logger import setup_logging, get_logger, create_audit_logger

__all__ = [
    "setup_logging",
    "get_logger",
    "create_audit_logger",
]

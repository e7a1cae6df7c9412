"""
Expense tracker model and service.

An in-memory, observable store of expense transactions with filter
results, driven by a small REST API.
"""

__version__ = "1.0.0"

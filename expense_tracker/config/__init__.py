"""
Configuration module for the expense tracker.

This module provides configuration management and settings
for the expense tracker service.
"""

from .settings import Settings, get_settings, reload_settings

__all__ = [
    "Settings",
    "get_settings",
    "reload_settings",
]

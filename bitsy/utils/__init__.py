"""
Utility modules for bitsy.

This package contains configuration helpers used throughout the front end.
"""

from .settings import Settings, DEFAULT_SETTINGS, MAX_NESTING_DEPTH

__all__ = [
    "Settings",
    "DEFAULT_SETTINGS",
    "MAX_NESTING_DEPTH",
]

"""
Core module for bitsy.

This module contains the Compiler facade that loads program files and runs
them through the front end.
"""

from .compiler import Compiler, ParseResult

__all__ = [
    "Compiler",
    "ParseResult",
]

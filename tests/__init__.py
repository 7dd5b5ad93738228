"""
Test suite for bitsy.

This package contains tests for the Bitsy front end including:
- Unit tests for the lexer, parser and syntax tree
- Tests for the Compiler facade and the command line
- Program fixtures checked end to end
"""

__version__ = "0.1.0"

"""
bitsy - front end for the Bitsy scripting language

Bitsy is a small, line-oriented, BASIC-like language. This package turns
Bitsy source text into a validated syntax tree.

Example:
    >>> from bitsy import Compiler
    >>> compiler = Compiler()
    >>> program = compiler.parse("BEGIN PRINT 1 END")
    >>> program.body
    [Print(expr=Number(value=1))]

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "bitsy Team"

from .core import Compiler, ParseResult
from .frontend import Lexer, Parser, LexerError, ParseError, parse_source

__all__ = [
    "__version__",
    "__author__",
    "Compiler",
    "ParseResult",
    "Lexer",
    "Parser",
    "LexerError",
    "ParseError",
    "parse_source",
]

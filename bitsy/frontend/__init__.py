"""
Frontend module for bitsy.

This module provides the lexer and parser components of the Bitsy front end.
The lexer produces tokens lazily; the parser pulls them one at a time.
"""

from .lexer import (
    Lexer, Token, TokenType, LexerError,
    InvalidCharacterError, InvalidNumberError, UnclosedCommentError,
    tokenize_source,
)
from .parser import (
    Parser, ParseError,
    EmptyProgramError, MissingBeginError, UnexpectedEndOfFileError,
    ExpectedAssignError, TrailingInputError, UnexpectedTokenError,
    UnmatchedParenthesisError, NestingTooDeepError,
    parse_source,
)

__all__ = [
    # Lexer components
    "Lexer",
    "Token",
    "TokenType",
    "LexerError",
    "InvalidCharacterError",
    "InvalidNumberError",
    "UnclosedCommentError",
    "tokenize_source",
    # Parser components
    "Parser",
    "ParseError",
    "EmptyProgramError",
    "MissingBeginError",
    "UnexpectedEndOfFileError",
    "ExpectedAssignError",
    "TrailingInputError",
    "UnexpectedTokenError",
    "UnmatchedParenthesisError",
    "NestingTooDeepError",
    "parse_source",
]

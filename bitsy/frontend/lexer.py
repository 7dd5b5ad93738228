"""
Lexer module for bitsy.

This module provides a hand-written tokenizer for Bitsy source code.
It converts program text into a lazy stream of tokens for the parser.
"""

import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional, Union


class TokenType(Enum):
    """Token types for the Bitsy language."""
    # Keywords
    BEGIN = auto()       # BEGIN
    END = auto()         # END
    IFP = auto()         # IFP (if positive)
    IFZ = auto()         # IFZ (if zero)
    IFN = auto()         # IFN (if negative)
    ELSE = auto()        # ELSE
    LOOP = auto()        # LOOP
    BREAK = auto()       # BREAK
    PRINT = auto()       # PRINT
    READ = auto()        # READ

    # Literals
    NUMBER = auto()      # Signed 32-bit integer literal

    # Operators
    ADD = auto()         # +
    SUBTRACT = auto()    # -
    MULTIPLY = auto()    # *
    DIVIDE = auto()      # /
    MODULO = auto()      # %
    ASSIGN = auto()      # =

    # Separators
    LPAREN = auto()      # (
    RPAREN = auto()      # )

    # Misc
    IDENTIFIER = auto()  # Variable name


@dataclass(frozen=True)
class Token:
    """Represents a token in the source code.

    Attributes:
        type: The token type
        value: The integer value of a NUMBER, the name of an IDENTIFIER,
            None for every other token
    """
    type: TokenType
    value: Union[int, str, None] = None

    def spelling(self) -> str:
        """Render the token the way it is written in source."""
        if self.value is not None:
            return str(self.value)
        return _SPELLINGS[self.type]

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.type.name})"
        return f"Token({self.type.name}, {self.value!r})"


class LexerError(Exception):
    """Exception raised for lexer errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidCharacterError(LexerError):
    """A character that cannot start any token."""

    def __init__(self, character: str):
        self.character = character
        super().__init__(f"Invalid character: {character!r}")


class InvalidNumberError(LexerError):
    """A number literal that does not fit in a signed 32-bit integer."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid number: {text} does not fit in a 32-bit signed integer")


class UnclosedCommentError(LexerError):
    """End of input reached inside a `{ ... }` comment."""

    def __init__(self):
        super().__init__("Unclosed comment: expected `}` before end of file")


# Reserved words, matched case-sensitively
_KEYWORDS = {
    "BEGIN": TokenType.BEGIN,
    "END": TokenType.END,
    "IFP": TokenType.IFP,
    "IFZ": TokenType.IFZ,
    "IFN": TokenType.IFN,
    "ELSE": TokenType.ELSE,
    "LOOP": TokenType.LOOP,
    "BREAK": TokenType.BREAK,
    "PRINT": TokenType.PRINT,
    "READ": TokenType.READ,
}

# Single character operators and separators
_SYMBOLS = {
    "+": TokenType.ADD,
    "-": TokenType.SUBTRACT,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "%": TokenType.MODULO,
    "=": TokenType.ASSIGN,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

_SPELLINGS = {token_type: text for text, token_type in _KEYWORDS.items()}
_SPELLINGS.update({token_type: text for text, token_type in _SYMBOLS.items()})

_WHITESPACE = frozenset(" \t\n\r")
_DIGITS = frozenset(string.digits)
_IDENTIFIER_START = frozenset(string.ascii_letters + "_")
_IDENTIFIER_CHARS = _IDENTIFIER_START | _DIGITS

COMMENT_OPEN = "{"
COMMENT_CLOSE = "}"

INT32_MAX = 2**31 - 1


class Lexer:
    """Lexer for tokenizing Bitsy source code.

    The lexer holds a cursor over a fully loaded source buffer and produces
    tokens on demand. It is consumed once, left to right: after the end of
    input, or after the first error, it produces nothing more.

    Example:
        >>> lexer = Lexer("BEGIN PRINT 1 END")
        >>> for token in lexer:
        ...     print(token)
    """

    def __init__(self, source: str):
        """Initialize the lexer.

        Args:
            source: Complete, already decoded program text
        """
        self._source = source
        self._pos: int = 0
        self._finished: bool = False

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens lazily until end of input.

        Raises:
            LexerError: When the source contains an invalid token
        """
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token

    def next_token(self) -> Optional[Token]:
        """Scan the next token.

        Returns:
            The next Token, or None once the input is exhausted

        Raises:
            LexerError: If the next token is invalid
        """
        if self._finished:
            return None

        try:
            token = self._scan()
        except LexerError:
            self._finished = True
            raise

        if token is None:
            self._finished = True
        return token

    def tokenize(self) -> List[Token]:
        """Collect all remaining tokens into a list.

        Raises:
            LexerError: If tokenization fails
        """
        return list(self)

    def _current_char(self) -> Optional[str]:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return None

    def _scan(self) -> Optional[Token]:
        # Whitespace and comments never produce tokens
        while True:
            self._skip_whitespace()
            char = self._current_char()
            if char != COMMENT_OPEN:
                break
            self._skip_comment()

        if char is None:
            return None

        if char in _IDENTIFIER_START:
            return self._scan_word()

        if char in _DIGITS:
            return self._scan_number()

        if char in _SYMBOLS:
            self._pos += 1
            return Token(_SYMBOLS[char])

        raise InvalidCharacterError(char)

    def _skip_whitespace(self) -> None:
        while self._current_char() in _WHITESPACE:
            self._pos += 1

    def _skip_comment(self) -> None:
        """Skip a comment; the first `}` closes it, nested `{` included."""
        end = self._source.find(COMMENT_CLOSE, self._pos + 1)
        if end == -1:
            self._pos = len(self._source)
            raise UnclosedCommentError()
        self._pos = end + 1

    def _scan_run(self, allowed: frozenset) -> str:
        start = self._pos
        while self._current_char() in allowed:
            self._pos += 1
        return self._source[start:self._pos]

    def _scan_word(self) -> Token:
        word = self._scan_run(_IDENTIFIER_CHARS)
        if is_keyword(word):
            return Token(_KEYWORDS[word])
        return Token(TokenType.IDENTIFIER, word)

    def _scan_number(self) -> Token:
        text = self._scan_run(_DIGITS)
        value = int(text)
        if value > INT32_MAX:
            raise InvalidNumberError(text)
        return Token(TokenType.NUMBER, value)


def is_keyword(name: str) -> bool:
    """Check if a name is a reserved word."""
    return name in _KEYWORDS


def tokenize_source(source: str) -> List[Token]:
    """Convenience function to tokenize source code.

    Args:
        source: Bitsy source code string

    Returns:
        List of Token objects
    """
    return Lexer(source).tokenize()

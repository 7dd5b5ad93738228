"""
Front end orchestration module for bitsy.

This module provides the high-level Compiler class that loads a program
file, tokenizes and parses it, and reports the outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..frontend.lexer import Lexer, Token, LexerError
from ..frontend.parser import Parser, ParseError
from ..syntax import Program
from ..utils.settings import Settings, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Result of loading and parsing a program file.

    Attributes:
        success: Whether the program parsed
        program: The syntax tree (if parsing succeeded)
        error_message: Error message if loading or parsing failed
    """
    success: bool
    program: Optional[Program] = None
    error_message: Optional[str] = None


class Compiler:
    """Main front end class for bitsy.

    This class runs Bitsy source through the lexer and parser, either from
    a string or from a program file on disk.

    Example:
        >>> compiler = Compiler()
        >>> result = compiler.load(Path("countdown.bitsy"))
        >>> if result.success:
        ...     print(format_tree(result.program))
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the compiler.

        Args:
            settings: Front end settings. Defaults to DEFAULT_SETTINGS.
        """
        self._settings = settings or DEFAULT_SETTINGS

    @property
    def settings(self) -> Settings:
        return self._settings

    def tokenize(self, source: str) -> List[Token]:
        """Tokenize Bitsy source code.

        Raises:
            LexerError: If tokenization fails
        """
        tokens = Lexer(source).tokenize()
        logger.debug("Scanned %d tokens", len(tokens))
        return tokens

    def parse(self, source: str) -> Program:
        """Parse Bitsy source code into a syntax tree.

        Args:
            source: Bitsy source code string

        Returns:
            Program: The root of the syntax tree

        Raises:
            LexerError: If tokenization fails
            ParseError: If parsing fails
        """
        parser = Parser(Lexer(source), max_depth=self._settings.max_nesting_depth)
        program = parser.parse()
        logger.debug("Parsed %d top-level statements", len(program.body))
        return program

    def read_source(self, path: Path) -> str:
        """Read and validate a program file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the suffix is not accepted or the text cannot be decoded
        """
        if not path.is_file():
            raise FileNotFoundError(f"Input file not found: {path}")

        if not self._settings.accepts_suffix(path.suffix):
            expected = ", ".join(self._settings.source_suffixes)
            raise ValueError(f"Input must be a {expected} file: {path}")

        try:
            return path.read_text(encoding=self._settings.encoding)
        except UnicodeDecodeError as e:
            raise ValueError(
                f"Input is not valid {self._settings.encoding} text: {path} ({e.reason})"
            ) from e

    def load(self, path: Path) -> ParseResult:
        """Load and parse a program file.

        Args:
            path: Path to the program file

        Returns:
            ParseResult: The result of the parse
        """
        logger.debug("Loading %s", path)

        try:
            source = self.read_source(path)
        except (FileNotFoundError, ValueError) as e:
            return ParseResult(success=False, error_message=str(e))

        try:
            program = self.parse(source)
        except LexerError as e:
            return ParseResult(success=False, error_message=f"Lexical error: {e}")
        except ParseError as e:
            return ParseResult(success=False, error_message=f"Syntax error: {e}")

        return ParseResult(success=True, program=program)

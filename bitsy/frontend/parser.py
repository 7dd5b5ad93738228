"""
Parser module for bitsy.

This module provides a recursive descent parser that pulls tokens from the
lexer one at a time, with a single token of lookahead, and builds the
program's syntax tree.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from ..syntax import (
    Number, Variable, BinaryOperation, Negation, Expr,
    Assignment, Conditional, ConditionKind, Loop, Break, Print, Read, Block, Stmt,
    Operator, Program,
)
from ..utils.settings import DEFAULT_SETTINGS, check_nesting_depth
from .lexer import Lexer, Token, TokenType


class ParseError(Exception):
    """Exception raised for parsing errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class EmptyProgramError(ParseError):
    def __init__(self):
        super().__init__("The program is empty.")


class MissingBeginError(ParseError):
    def __init__(self):
        super().__init__("The program must start with `BEGIN`.")


class UnexpectedEndOfFileError(ParseError):
    def __init__(self):
        super().__init__("Unexpected end of file.")


class ExpectedAssignError(ParseError):
    """An identifier at statement start not followed by `=`."""

    def __init__(self, token: Token):
        self.token = token
        super().__init__(f"Expected `=` after identifier, got `{token.spelling()}`.")


class TrailingInputError(ParseError):
    """Tokens left over after the outermost `END`."""

    def __init__(self, token: Token):
        self.token = token
        super().__init__(
            f"Can't parse instructions after `BEGIN ... END`: found `{token.spelling()}`."
        )


class UnexpectedTokenError(ParseError):
    """A token that no grammar rule accepts at this position."""

    def __init__(self, token: Token, expected: str):
        self.token = token
        self.expected = expected
        super().__init__(f"Expected {expected}, got `{token.spelling()}`.")


class UnmatchedParenthesisError(ParseError):
    """A parenthesised expression not closed by `)`."""

    def __init__(self, token: Token):
        self.token = token
        super().__init__(f"Expected `)` to close `(`, got `{token.spelling()}`.")


class NestingTooDeepError(ParseError):
    """Blocks or expressions nested beyond the configured limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Nesting exceeds the maximum depth of {limit}.")


# Tokens that open a block closed by END
BLOCK_OPENERS = frozenset({
    TokenType.BEGIN,
    TokenType.IFP,
    TokenType.IFZ,
    TokenType.IFN,
    TokenType.LOOP,
})

_CONDITIONS = {
    TokenType.IFP: ConditionKind.POSITIVE,
    TokenType.IFZ: ConditionKind.ZERO,
    TokenType.IFN: ConditionKind.NEGATIVE,
}

# Lowest precedence tier
_ADDITIVE = {
    TokenType.ADD: Operator.ADD,
    TokenType.SUBTRACT: Operator.SUBTRACT,
}

# Highest precedence tier
_MULTIPLICATIVE = {
    TokenType.MULTIPLY: Operator.MULTIPLY,
    TokenType.DIVIDE: Operator.DIVIDE,
    TokenType.MODULO: Operator.MODULO,
}


class Parser:
    """Recursive descent parser for Bitsy.

    Accepts any iterable of tokens: normally a Lexer, but a hand-built list
    works just as well. Tokens are pulled lazily; errors raised by the
    lexer while pulling propagate unchanged.

    The parser is single use: construct it, then call parse() once.

    Example:
        >>> parser = Parser(Lexer("BEGIN PRINT 1 END"))
        >>> program = parser.parse()
    """

    def __init__(self, tokens: Iterable[Token],
                 max_depth: int = DEFAULT_SETTINGS.max_nesting_depth):
        """Initialize the parser and check the program opens with BEGIN.

        Args:
            tokens: Token stream to parse
            max_depth: Deepest allowed block or expression nesting

        Raises:
            ValueError: If max_depth is outside 1..MAX_NESTING_DEPTH
            EmptyProgramError: If the stream has no tokens
            MissingBeginError: If the first token is not BEGIN
            LexerError: If the first tokens cannot be scanned
        """
        self._tokens: Iterator[Token] = iter(tokens)
        self._max_depth = check_nesting_depth(max_depth)

        current = next(self._tokens, None)
        if current is None:
            raise EmptyProgramError()
        if current.type != TokenType.BEGIN:
            raise MissingBeginError()

        self._current: Token = current
        self._next: Optional[Token] = next(self._tokens, None)
        self._block_depth: int = 1
        self._expression_depth: int = 0

    def parse(self) -> Program:
        """Parse the program body and return the syntax tree.

        Raises:
            ParseError: If the program is malformed
            LexerError: If tokenization fails
        """
        try:
            body, _ = self._parse_body(allow_else=False)
        except RecursionError:
            # Interpreter stack ran out before max_depth was reached
            raise NestingTooDeepError(self._max_depth) from None

        # Nothing may follow the outermost END
        if self._next is not None:
            raise TrailingInputError(self._next)

        return Program(body)

    def _advance(self) -> Token:
        """Shift the lookahead into the current slot and update block depth."""
        if self._next is None:
            raise UnexpectedEndOfFileError()

        self._current = self._next
        self._next = next(self._tokens, None)

        if self._current.type in BLOCK_OPENERS:
            self._block_depth += 1
            if self._block_depth > self._max_depth:
                raise NestingTooDeepError(self._max_depth)
        elif self._current.type == TokenType.END:
            self._block_depth -= 1

        return self._current

    def _peek_type(self) -> Optional[TokenType]:
        if self._next is None:
            return None
        return self._next.type

    def _parse_body(self, allow_else: bool) -> Tuple[List[Stmt], bool]:
        """Parse statements up to the END closing the innermost open block.

        For the program body this stops once the current token is END and
        the block depth is back to 0.

        Returns:
            The statements, and whether the body stopped at ELSE instead
        """
        closing_depth = self._block_depth - 1
        statements: List[Stmt] = []

        while True:
            token = self._advance()
            if token.type == TokenType.END and self._block_depth == closing_depth:
                return statements, False
            if token.type == TokenType.ELSE and allow_else:
                return statements, True
            statements.append(self._parse_statement())

    def _parse_statement(self) -> Stmt:
        """Parse the statement starting at the current token."""
        token = self._current

        if token.type == TokenType.IDENTIFIER:
            return self._parse_assignment()
        elif token.type in _CONDITIONS:
            return self._parse_conditional()
        elif token.type == TokenType.LOOP:
            body, _ = self._parse_body(allow_else=False)
            return Loop(body)
        elif token.type == TokenType.BREAK:
            return Break()
        elif token.type == TokenType.PRINT:
            return Print(self._parse_expression())
        elif token.type == TokenType.READ:
            return self._parse_read()
        elif token.type == TokenType.BEGIN:
            body, _ = self._parse_body(allow_else=False)
            return Block(body)
        elif token.type == TokenType.ELSE:
            raise UnexpectedTokenError(token, "a statement (ELSE without a matching IFP, IFZ or IFN)")

        raise UnexpectedTokenError(token, "a statement")

    def _parse_assignment(self) -> Assignment:
        name = self._current.value

        token = self._advance()
        if token.type != TokenType.ASSIGN:
            raise ExpectedAssignError(token)

        return Assignment(name, self._parse_expression())

    def _parse_conditional(self) -> Conditional:
        kind = _CONDITIONS[self._current.type]
        test = self._parse_expression()

        body, has_else = self._parse_body(allow_else=True)
        orelse = None
        if has_else:
            orelse, _ = self._parse_body(allow_else=False)

        return Conditional(kind, test, body, orelse)

    def _parse_read(self) -> Read:
        token = self._advance()
        if token.type != TokenType.IDENTIFIER:
            raise UnexpectedTokenError(token, "an identifier after READ")
        return Read(token.value)

    # ==================== Expressions ====================

    def _parse_expression(self) -> Expr:
        """Parse `+` and `-`, the lowest precedence tier."""
        left = self._parse_term()
        while self._peek_type() in _ADDITIVE:
            operator = _ADDITIVE[self._advance().type]
            right = self._parse_term()
            left = BinaryOperation(left, operator, right)
        return left

    def _parse_term(self) -> Expr:
        """Parse `*`, `/` and `%`, which bind tighter than `+` and `-`."""
        left = self._parse_atom()
        while self._peek_type() in _MULTIPLICATIVE:
            operator = _MULTIPLICATIVE[self._advance().type]
            right = self._parse_atom()
            left = BinaryOperation(left, operator, right)
        return left

    def _parse_atom(self) -> Expr:
        token = self._advance()

        if token.type == TokenType.NUMBER:
            return Number(token.value)

        if token.type == TokenType.IDENTIFIER:
            return Variable(token.value)

        if token.type == TokenType.SUBTRACT:
            self._enter_expression()
            operand = self._parse_atom()
            self._expression_depth -= 1
            return Negation(operand)

        if token.type == TokenType.LPAREN:
            self._enter_expression()
            expr = self._parse_expression()
            closing = self._advance()
            if closing.type != TokenType.RPAREN:
                raise UnmatchedParenthesisError(closing)
            self._expression_depth -= 1
            return expr

        raise UnexpectedTokenError(token, "an expression")

    def _enter_expression(self) -> None:
        self._expression_depth += 1
        if self._expression_depth > self._max_depth:
            raise NestingTooDeepError(self._max_depth)


def parse_source(source: str,
                 max_depth: int = DEFAULT_SETTINGS.max_nesting_depth) -> Program:
    """Convenience function to tokenize and parse source code.

    Args:
        source: Bitsy source code string
        max_depth: Deepest allowed block or expression nesting

    Returns:
        Program: The root of the syntax tree
    """
    return Parser(Lexer(source), max_depth=max_depth).parse()

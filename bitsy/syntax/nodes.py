"""
AST node definitions for bitsy.

This module contains the data classes that represent a parsed Bitsy
program. Every node owns its children; the Program node is the root.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union


class Operator(Enum):
    """Binary arithmetic operators, valued by their source symbol."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"


class ConditionKind(Enum):
    """Runtime predicate a conditional tests its value against."""
    POSITIVE = "IFP"
    ZERO = "IFZ"
    NEGATIVE = "IFN"


# ==================== Expressions ====================

@dataclass(frozen=True)
class Number:
    """Integer literal.

    Attributes:
        value: The literal value (signed 32-bit range)
    """
    value: int


@dataclass(frozen=True)
class Variable:
    """Variable reference, resolved at execution time.

    Attributes:
        name: The variable name
    """
    name: str


@dataclass(frozen=True)
class BinaryOperation:
    """Binary arithmetic expression.

    Attributes:
        left: Left operand expression
        operator: The operator
        right: Right operand expression
    """
    left: "Expr"
    operator: Operator
    right: "Expr"


@dataclass(frozen=True)
class Negation:
    """Unary minus; evaluates like `0 - operand`.

    Attributes:
        operand: The negated expression
    """
    operand: "Expr"


# Union type for all expressions
Expr = Union[
    Number,
    Variable,
    BinaryOperation,
    Negation,
]


# ==================== Statements ====================

@dataclass(frozen=True)
class Assignment:
    """Assignment statement.

    Attributes:
        name: Variable name to assign to
        expr: Expression to evaluate and assign
    """
    name: str
    expr: Expr


@dataclass(frozen=True)
class Conditional:
    """IFP / IFZ / IFN statement.

    Attributes:
        kind: Which sign of the test value selects the body
        test: Expression whose value is tested
        body: Statements run when the test holds
        orelse: Statements of the ELSE branch, or None without ELSE
    """
    kind: ConditionKind
    test: Expr
    body: List["Stmt"]
    orelse: Optional[List["Stmt"]] = None


@dataclass(frozen=True)
class Loop:
    """Unconditional loop, left only through BREAK.

    Attributes:
        body: List of statements in the loop body
    """
    body: List["Stmt"]


@dataclass(frozen=True)
class Break:
    """Break out of the innermost loop."""


@dataclass(frozen=True)
class Print:
    """Print statement.

    Attributes:
        expr: Expression to print
    """
    expr: Expr


@dataclass(frozen=True)
class Read:
    """Read an integer into a variable.

    Attributes:
        name: Target variable name
    """
    name: str


@dataclass(frozen=True)
class Block:
    """Nested BEGIN ... END block.

    Attributes:
        body: List of statements in the block
    """
    body: List["Stmt"]


# Union type for all statements
Stmt = Union[
    Assignment,
    Conditional,
    Loop,
    Break,
    Print,
    Read,
    Block,
]


# ==================== Program ====================

@dataclass(frozen=True)
class Program:
    """Root of the tree: the body of the outermost BEGIN ... END.

    Attributes:
        body: List of top-level statements
    """
    body: List[Stmt]


Node = Union[Program, Stmt, Expr]

"""
Syntax tree module for bitsy.

This module defines the AST produced by the parser, the sole interface to
any later execution stage, and a text renderer for it.
"""

from .nodes import (
    # Operators
    Operator,
    ConditionKind,
    # Expressions
    Number,
    Variable,
    BinaryOperation,
    Negation,
    Expr,
    # Statements
    Assignment,
    Conditional,
    Loop,
    Break,
    Print,
    Read,
    Block,
    Stmt,
    # Root
    Program,
    Node,
)
from .printer import format_tree

__all__ = [
    # Operators
    "Operator",
    "ConditionKind",
    # Expressions
    "Number",
    "Variable",
    "BinaryOperation",
    "Negation",
    "Expr",
    # Statements
    "Assignment",
    "Conditional",
    "Loop",
    "Break",
    "Print",
    "Read",
    "Block",
    "Stmt",
    # Root
    "Program",
    "Node",
    "format_tree",
]

"""
Text rendering of Bitsy syntax trees.

Each node is printed on its own line, children indented two spaces
below their parent.
"""

from typing import List

from .nodes import (
    Number, Variable, BinaryOperation, Negation,
    Assignment, Conditional, Loop, Break, Print, Read, Block, Program, Node,
)

INDENT = "  "


def format_tree(node: Node) -> str:
    """Render a node and its subtree as indented text.

    Example:
        >>> print(format_tree(Program([Print(Number(1))])))
        Program
          Print
            Number 1
    """
    lines: List[str] = []
    _emit(node, 0, lines)
    return "\n".join(lines)


def _emit_body(label: str, body: list, depth: int, lines: List[str]) -> None:
    lines.append(INDENT * depth + label)
    for stmt in body:
        _emit(stmt, depth + 1, lines)


def _emit(node: Node, depth: int, lines: List[str]) -> None:
    pad = INDENT * depth

    if isinstance(node, Number):
        lines.append(f"{pad}Number {node.value}")
    elif isinstance(node, Variable):
        lines.append(f"{pad}Variable {node.name}")
    elif isinstance(node, BinaryOperation):
        lines.append(f"{pad}BinaryOperation {node.operator.value}")
        _emit(node.left, depth + 1, lines)
        _emit(node.right, depth + 1, lines)
    elif isinstance(node, Negation):
        lines.append(f"{pad}Negation")
        _emit(node.operand, depth + 1, lines)
    elif isinstance(node, Assignment):
        lines.append(f"{pad}Assignment {node.name}")
        _emit(node.expr, depth + 1, lines)
    elif isinstance(node, Conditional):
        lines.append(f"{pad}Conditional {node.kind.value}")
        _emit(node.test, depth + 1, lines)
        _emit_body("Then", node.body, depth + 1, lines)
        if node.orelse is not None:
            _emit_body("Else", node.orelse, depth + 1, lines)
    elif isinstance(node, Loop):
        _emit_body("Loop", node.body, depth, lines)
    elif isinstance(node, Break):
        lines.append(f"{pad}Break")
    elif isinstance(node, Print):
        lines.append(f"{pad}Print")
        _emit(node.expr, depth + 1, lines)
    elif isinstance(node, Read):
        lines.append(f"{pad}Read {node.name}")
    elif isinstance(node, Block):
        _emit_body("Block", node.body, depth, lines)
    elif isinstance(node, Program):
        _emit_body("Program", node.body, depth, lines)
    else:
        raise TypeError(f"Not a syntax tree node: {node!r}")

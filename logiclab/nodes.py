"""
Abstract syntax tree for Boolean expressions.

The tree is a closed set of immutable node types:

- Variable: leaf referencing an input signal
- Literal: constant 0/1
- Not: unary negation
- BinaryOp: AND, OR, XOR, NAND, NOR or XNOR of two subtrees

Each node carries a ``node_id`` used only to key evaluation traces; it is
excluded from equality so two trees compare equal when their structure does.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Optional, TypeVar, Union


class BinaryKind(Enum):
    AND = "AND"
    OR = "OR"
    XOR = "XOR"
    NAND = "NAND"
    NOR = "NOR"
    XNOR = "XNOR"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    BinaryKind.AND: "∧",
    BinaryKind.OR: "∨",
    BinaryKind.XOR: "⊕",
    BinaryKind.NAND: "↑",
    BinaryKind.NOR: "↓",
    BinaryKind.XNOR: "⊙",
}


@dataclass(frozen=True)
class Variable:
    name: str
    node_id: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Literal:
    value: bool
    node_id: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Not:
    operand: "Node"
    node_id: int = field(default=0, compare=False)


@dataclass(frozen=True)
class BinaryOp:
    kind: BinaryKind
    left: "Node"
    right: "Node"
    node_id: int = field(default=0, compare=False)


Node = Union[Variable, Literal, Not, BinaryOp]

T = TypeVar("T")


def walk(node: Node) -> Iterator[Node]:
    """Yield every node of the tree in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Not):
            stack.append(current.operand)
        elif isinstance(current, BinaryOp):
            stack.append(current.right)
            stack.append(current.left)


def extract_variables(node: Node) -> list[str]:
    """Sorted, de-duplicated variable names referenced in the tree."""
    return sorted({n.name for n in walk(node) if isinstance(n, Variable)})


def node_count(node: Node) -> int:
    return sum(1 for _ in walk(node))


def count_gates(node: Node) -> dict[str, int]:
    """Count operator nodes by gate type (NOT plus each binary kind)."""
    counts = {}
    for n in walk(node):
        if isinstance(n, Not):
            counts["NOT"] = counts.get("NOT", 0) + 1
        elif isinstance(n, BinaryOp):
            counts[n.kind.value] = counts.get(n.kind.value, 0) + 1
    return counts


def fold(
    node: Node,
    leaf: Callable[[Node], T],
    unary: Callable[[Not, T], T],
    binary: Callable[[BinaryOp, T, T], T],
) -> T:
    """
    Combine a tree bottom-up without recursion.

    ``leaf`` is called for Variable and Literal nodes, ``unary`` and
    ``binary`` with the already-folded operands. Calls happen in post-order,
    left operand first.
    """
    stack = [(node, False)]
    values = []

    while stack:
        current, expanded = stack.pop()
        if isinstance(current, (Variable, Literal)):
            values.append(leaf(current))
        elif isinstance(current, Not):
            if expanded:
                values.append(unary(current, values.pop()))
            else:
                stack.append((current, True))
                stack.append((current.operand, False))
        elif isinstance(current, BinaryOp):
            if expanded:
                right = values.pop()
                left = values.pop()
                values.append(binary(current, left, right))
            else:
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))
        else:
            raise TypeError(f"Unknown node type: {type(current).__name__}")

    return values.pop()


def clone_ast(node: Node, ids: Optional[Iterator[int]] = None) -> Node:
    """
    Copy a tree, giving every node a fresh id.

    Args:
        node: Root of the tree to copy
        ids: Id source; defaults to numbering after the largest id in ``node``

    Returns:
        A structurally equal tree (``clone == node``) with new ids
    """
    if ids is None:
        ids = itertools.count(max(n.node_id for n in walk(node)) + 1)

    def leaf(n):
        if isinstance(n, Variable):
            return Variable(n.name, node_id=next(ids))
        return Literal(n.value, node_id=next(ids))

    return fold(
        node,
        leaf,
        lambda n, operand: Not(operand, node_id=next(ids)),
        lambda n, left, right: BinaryOp(n.kind, left, right, node_id=next(ids)),
    )


def _leaf_text(node: Node) -> str:
    if isinstance(node, Variable):
        return node.name
    return "1" if node.value else "0"


def to_infix(node: Node) -> str:
    """
    Render a tree with keyword operators, fully parenthesizing binary nodes.

    The output parses back to an equal tree.
    """
    return fold(
        node,
        _leaf_text,
        lambda n, operand: f"NOT {operand}",
        lambda n, left, right: f"({left} {n.kind.value} {right})",
    )


def to_symbolic(node: Node) -> str:
    """Render a tree with logic symbols (¬, ∧, ∨, ⊕, ↑, ↓, ⊙)."""
    return fold(
        node,
        _leaf_text,
        lambda n, operand: f"¬{operand}",
        lambda n, left, right: f"({left} {n.kind.symbol} {right})",
    )

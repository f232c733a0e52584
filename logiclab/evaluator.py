"""
Evaluate expression trees against variable bindings.

Bindings map uppercase variable names to booleans. Row ``i`` of an
``n``-variable enumeration binds ``variables[0]`` to the most significant
bit of ``i``.
"""

from typing import Optional

from .errors import UndefinedVariableError
from .nodes import BinaryKind, Literal, Node, fold

Bindings = dict[str, bool]


def _apply(kind: BinaryKind, left: bool, right: bool) -> bool:
    if kind is BinaryKind.AND:
        return left and right
    if kind is BinaryKind.OR:
        return left or right
    if kind is BinaryKind.XOR:
        return left != right
    if kind is BinaryKind.NAND:
        return not (left and right)
    if kind is BinaryKind.NOR:
        return not (left or right)
    if kind is BinaryKind.XNOR:
        return left == right
    raise ValueError(f"Unknown operator: {kind}")


def _evaluate(node: Node, bindings: Bindings, trace: Optional[dict[int, bool]]) -> bool:
    def record(n: Node, value: bool) -> bool:
        if trace is not None:
            trace[n.node_id] = value
        return value

    def leaf(n: Node) -> bool:
        if isinstance(n, Literal):
            return record(n, n.value)
        try:
            return record(n, bool(bindings[n.name]))
        except KeyError:
            raise UndefinedVariableError(n.name) from None

    return fold(
        node,
        leaf,
        lambda n, operand: record(n, not operand),
        lambda n, left, right: record(n, _apply(n.kind, left, right)),
    )


def evaluate(node: Node, bindings: Bindings) -> bool:
    """
    Evaluate a tree under the given bindings.

    Both operands of a binary node are always evaluated, so a missing
    binding is reported even where the result would short-circuit.
    Evaluation does not recurse, so tree depth is limited only by memory.

    Raises:
        UndefinedVariableError: a Variable node has no binding
    """
    return _evaluate(node, bindings, None)


def evaluate_with_trace(node: Node, bindings: Bindings) -> tuple[bool, dict[int, bool]]:
    """
    Evaluate a tree and record the value computed at every node.

    Returns:
        Tuple of (result, mapping of node_id -> value)
    """
    trace = {}
    result = _evaluate(node, bindings, trace)
    return result, trace


def minterm_to_binding(minterm: int, variables: list[str]) -> Bindings:
    """Convert a minterm index to bindings (variables[0] is the MSB)."""
    n = len(variables)
    return {
        name: bool((minterm >> (n - 1 - i)) & 1)
        for i, name in enumerate(variables)
    }


def minterm_number(bindings: Bindings, variables: list[str]) -> int:
    """Minterm index of a binding (variables[0] is the MSB)."""
    minterm = 0
    for name in variables:
        minterm = (minterm << 1) | (1 if bindings[name] else 0)
    return minterm


def maxterm_number(bindings: Bindings, variables: list[str]) -> int:
    """Complement index of a binding: 2^n - 1 - minterm."""
    return (1 << len(variables)) - 1 - minterm_number(bindings, variables)


def generate_combinations(variables: list[str]) -> list[Bindings]:
    """All 2^n bindings in ascending minterm order."""
    return [minterm_to_binding(i, variables) for i in range(1 << len(variables))]


def evaluate_all(node: Node, variables: list[str]) -> list[bool]:
    """Evaluate a tree for every binding, indexed by minterm number."""
    return [evaluate(node, bindings) for bindings in generate_combinations(variables)]

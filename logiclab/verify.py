"""
Verification of minimization results against truth tables.

Ensures a minimized sum of products produces the same output as the
original expression for every input combination.
"""

from .evaluator import evaluate, generate_combinations
from .nodes import BinaryKind, BinaryOp, Literal, Node, Not, Variable
from .quine_mccluskey import Implicant, MinimizationResult
from .truth_tables import TruthTable


def evaluate_sop(implicants: list[Implicant], minterm: int) -> bool:
    """Evaluate a sum-of-products on a specific input (OR of AND terms)."""
    return any(impl.covers(minterm) for impl in implicants)


def implicant_to_ast(impl: Implicant, variables: list[str]) -> Node:
    """Build the AND of an implicant's literals; all dashes is constant 1."""
    node = None
    for name, p in zip(variables, impl.pattern):
        if p == "-":
            continue
        literal = Variable(name) if p == "1" else Not(Variable(name))
        node = literal if node is None else BinaryOp(BinaryKind.AND, node, literal)
    return node if node is not None else Literal(True)


def result_to_ast(result: MinimizationResult) -> Node:
    """Build an expression tree equivalent to a minimization result."""
    if result.expression == "1":
        return Literal(True)

    node = None
    for impl in result.essential_implicants:
        term = implicant_to_ast(impl, result.variables)
        node = term if node is None else BinaryOp(BinaryKind.OR, node, term)
    return node if node is not None else Literal(False)


def verify_result(result: MinimizationResult, table: TruthTable) -> tuple[bool, list[str]]:
    """
    Verify that a minimization result reproduces a truth table.

    The result is rebuilt as an expression tree and evaluated on every row,
    so the check covers term rendering as well as the implicant cover.

    Returns:
        Tuple of (all_correct, list of error messages)
    """
    errors = []

    if list(result.variables) != list(table.variables):
        return False, [f"Variable order differs: {result.variables} vs {table.variables}"]

    sop = result_to_ast(result)
    for row in table.rows:
        actual = evaluate(sop, row.inputs)
        if actual != row.output:
            errors.append(
                f"Minterm {row.minterm}: expected {int(row.output)}, got {int(actual)}"
            )

    return len(errors) == 0, errors


def verify_equivalent(first: Node, second: Node, variables: list[str]) -> tuple[bool, list[int]]:
    """
    Compare two expressions over every binding of ``variables``.

    Returns:
        Tuple of (equivalent, minterms where they differ)
    """
    differences = []
    for i, bindings in enumerate(generate_combinations(variables)):
        if evaluate(first, bindings) != evaluate(second, bindings):
            differences.append(i)
    return not differences, differences


def print_truth_table_comparison(result: MinimizationResult, table: TruthTable) -> bool:
    """Print truth table comparing expected vs minimized outputs."""
    print("Truth Table Verification")
    print("=" * 50)
    print(f"{'m':>4} | {''.join(table.variables):>8} | Expected | Actual | Match")
    print("-" * 50)

    all_match = True
    for row in table.rows:
        bits = "".join("1" if row.inputs[v] else "0" for v in table.variables)
        actual = evaluate_sop(result.essential_implicants, row.minterm) or result.expression == "1"
        match = actual == row.output
        all_match = all_match and match
        print(
            f"{row.minterm:>4} | {bits:>8} | {int(row.output):>8} | "
            f"{int(actual):>6} | {'.' if match else 'X'}"
        )

    print("-" * 50)
    print(f"All correct: {all_match}")
    return all_match

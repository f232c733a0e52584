"""
Truth tables generated from expression trees.

Rows are enumerated in ascending minterm order with the first variable as
the most significant bit:

    A B | F      minterm  maxterm
    0 0 | .      0        3
    0 1 | .      1        2
    1 0 | .      2        1
    1 1 | .      3        0

Tables are capped at MAX_TABLE_VARIABLES inputs (256 rows).
"""

from dataclasses import dataclass, field
from typing import Optional

from .errors import TooManyVariablesError
from .evaluator import Bindings, evaluate, minterm_to_binding
from .nodes import Node, extract_variables, to_infix

MAX_TABLE_VARIABLES = 8


@dataclass(frozen=True)
class TruthTableRow:
    inputs: Bindings
    output: bool
    minterm: int
    maxterm: int


@dataclass(frozen=True)
class TruthTable:
    variables: list[str]
    rows: list[TruthTableRow]
    expression: str = field(default="", compare=False)

    @property
    def num_vars(self) -> int:
        return len(self.variables)

    @property
    def outputs(self) -> list[bool]:
        return [row.output for row in self.rows]


def generate_truth_table(
    ast: Node,
    variables: list[str] = None,
    expression: str = None,
) -> TruthTable:
    """
    Build the exhaustive truth table of an expression.

    Args:
        ast: Expression tree
        variables: Column order (MSB first); defaults to the tree's sorted variables
        expression: Source text to keep with the table; defaults to the tree rendered

    Raises:
        TooManyVariablesError: more than MAX_TABLE_VARIABLES variables
    """
    if variables is None:
        variables = extract_variables(ast)
    if len(variables) > MAX_TABLE_VARIABLES:
        raise TooManyVariablesError(len(variables), MAX_TABLE_VARIABLES)
    if expression is None:
        expression = to_infix(ast)

    n = len(variables)
    full = (1 << n) - 1
    rows = []

    for i in range(1 << n):
        inputs = minterm_to_binding(i, variables)
        rows.append(TruthTableRow(
            inputs=inputs,
            output=evaluate(ast, inputs),
            minterm=i,
            maxterm=full - i,
        ))

    return TruthTable(variables=list(variables), rows=rows, expression=expression)


def get_minterms(table: TruthTable) -> list[int]:
    """Row indices where the output is 1."""
    return [row.minterm for row in table.rows if row.output]


def get_maxterms(table: TruthTable) -> list[int]:
    """Row indices where the output is 0."""
    return [row.minterm for row in table.rows if not row.output]


def count_ones(table: TruthTable) -> int:
    return sum(1 for row in table.rows if row.output)


def count_zeros(table: TruthTable) -> int:
    return len(table.rows) - count_ones(table)


def constant_value(table: TruthTable) -> Optional[bool]:
    """The function's value if it is constant, otherwise None."""
    ones = count_ones(table)
    if ones == 0:
        return False
    if ones == len(table.rows):
        return True
    return None


def is_constant(table: TruthTable) -> bool:
    return constant_value(table) is not None


def to_sop(table: TruthTable) -> str:
    """Canonical sum of products, e.g. ``A'B + AB'``."""
    minterms = [row for row in table.rows if row.output]

    if not minterms:
        return "0"
    if len(minterms) == len(table.rows):
        return "1"

    terms = []
    for row in minterms:
        terms.append("".join(
            v if row.inputs[v] else f"{v}'" for v in table.variables
        ))
    return " + ".join(terms)


def to_pos(table: TruthTable) -> str:
    """Canonical product of sums, e.g. ``(A + B)(A' + B')``."""
    maxterms = [row for row in table.rows if not row.output]

    if not maxterms:
        return "1"
    if len(maxterms) == len(table.rows):
        return "0"

    terms = []
    for row in maxterms:
        literals = [f"{v}'" if row.inputs[v] else v for v in table.variables]
        terms.append(f"({' + '.join(literals)})")
    return "".join(terms)


def _bit(value: bool) -> str:
    return "1" if value else "0"


def to_csv(table: TruthTable) -> str:
    """CSV with one column per variable, then Output and Minterm."""
    lines = [",".join(table.variables + ["Output", "Minterm"])]
    for row in table.rows:
        values = [_bit(row.inputs[v]) for v in table.variables]
        values.append(_bit(row.output))
        values.append(str(row.minterm))
        lines.append(",".join(values))
    return "\n".join(lines)


def to_latex(table: TruthTable) -> str:
    """LaTeX ``tabular`` with one column per variable and an F column."""
    cols = "c" * (len(table.variables) + 1)
    header = " & ".join(table.variables + ["F"])

    latex = f"\\begin{{tabular}}{{|{cols}|}}\n\\hline\n{header} \\\\\n\\hline\n"
    for row in table.rows:
        values = [_bit(row.inputs[v]) for v in table.variables]
        values.append(_bit(row.output))
        latex += f"{' & '.join(values)} \\\\\n"
    latex += "\\hline\n\\end{tabular}"
    return latex


def to_text(table: TruthTable) -> str:
    """Plain-text table: ``A | B | F`` header, dashed rule, one line per row."""
    width = max([len(v) for v in table.variables] + [1])

    header = " | ".join(v.rjust(width) for v in table.variables)
    header = f"{header} | F" if header else "F"
    lines = [header, "-" * len(header)]

    for row in table.rows:
        values = [_bit(row.inputs[v]).rjust(width) for v in table.variables]
        values.append(_bit(row.output))
        lines.append(" | ".join(values))

    return "\n".join(lines) + "\n"


def to_dict(table: TruthTable) -> dict:
    """JSON-ready representation of a table."""
    return {
        "variables": list(table.variables),
        "expression": table.expression,
        "rows": [
            {
                "inputs": {v: int(row.inputs[v]) for v in table.variables},
                "output": int(row.output),
                "minterm": row.minterm,
                "maxterm": row.maxterm,
            }
            for row in table.rows
        ],
    }


def print_truth_table(table: TruthTable):
    """Print a table with its minterm/maxterm indices."""
    print(f"Truth table: {table.expression}")
    print("=" * 50)
    head = " ".join(f"{v:>2}" for v in table.variables)
    print(f"{'m':>4} | {head} | F | {'M':>4}")
    print("-" * 50)

    for row in table.rows:
        bits = " ".join(f"{_bit(row.inputs[v]):>2}" for v in table.variables)
        print(f"{row.minterm:>4} | {bits} | {_bit(row.output)} | {row.maxterm:>4}")

    print("-" * 50)
    print(f"Ones: {count_ones(table)}, zeros: {count_zeros(table)}")

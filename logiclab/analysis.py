"""
Top-level expression processing.

``process_expression`` runs the whole pipeline (tokens, tree, truth table,
K-map, minimization) on one input string. The ``handle_*`` functions expose
the same operations as request handlers returning ``(status, body)`` with
JSON-ready bodies, for whatever transport a caller puts in front of them.

Every call works on fresh objects, so calls are independent of each other.
"""

from dataclasses import dataclass
from typing import Optional

from . import truth_tables
from .errors import LogicError, TooManyVariablesError
from .kmap import KMAP_MAX_VARIABLES, KMAP_MIN_VARIABLES, KMap, KMapGroup, find_kmap_groups, generate_kmap
from .lexer import Token, tokenize
from .nodes import Node, count_gates
from .parser import parse
from .quine_mccluskey import MAX_MINIMIZE_VARIABLES, Implicant, MinimizationResult, minimize
from .truth_tables import TruthTable, generate_truth_table, get_minterms

EXAMPLES = [
    {"name": "Simple AND", "expression": "A AND B", "category": "basic"},
    {"name": "Simple OR", "expression": "A OR B", "category": "basic"},
    {"name": "NOT Gate", "expression": "NOT A", "category": "basic"},
    {"name": "XOR Gate", "expression": "A XOR B", "category": "basic"},
    {"name": "NAND Gate", "expression": "A NAND B", "category": "basic"},
    {"name": "NOR Gate", "expression": "A NOR B", "category": "basic"},
    {"name": "Combined Logic", "expression": "(A AND B) OR (C AND D)", "category": "intermediate"},
    {"name": "Half Adder Sum", "expression": "A XOR B", "category": "circuits"},
    {"name": "Half Adder Carry", "expression": "A AND B", "category": "circuits"},
    {"name": "Full Adder Sum", "expression": "A XOR B XOR Cin", "category": "circuits"},
    {"name": "Full Adder Carry", "expression": "(A AND B) OR (Cin AND (A XOR B))", "category": "circuits"},
    {"name": "2:1 Multiplexer", "expression": "(A AND NOT S) OR (B AND S)", "category": "circuits"},
    {"name": "De Morgan Example", "expression": "NOT (A AND B)", "category": "theorems"},
    {"name": "Complex Expression", "expression": "(A AND B) OR (NOT C AND D) XOR E", "category": "advanced"},
]


@dataclass(frozen=True)
class ParseOutcome:
    """Result-or-error value of parsing; exactly one of ast/error is set."""

    ast: Optional[Node]
    variables: list[str]
    error: Optional[LogicError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SimplificationResult:
    original: str
    simplified: str
    minimization: MinimizationResult
    statistics: dict


@dataclass
class ExpressionAnalysis:
    expression: str
    tokens: list[Token]
    ast: Node
    variables: list[str]
    truth_table: TruthTable
    kmap: Optional[KMap] = None
    kmap_groups: Optional[list[KMapGroup]] = None
    simplification: Optional[SimplificationResult] = None


def try_parse(expression: str) -> ParseOutcome:
    """Tokenize and parse, returning lexical/syntax errors instead of raising."""
    try:
        result = parse(tokenize(expression))
    except LogicError as e:
        return ParseOutcome(ast=None, variables=[], error=e)
    return ParseOutcome(ast=result.ast, variables=result.variables)


def gate_count(ast: Node) -> int:
    """Number of operator nodes (gates) in an expression tree."""
    return sum(count_gates(ast).values())


def sop_gate_count(implicants: list[Implicant]) -> int:
    """
    Gates needed for a two-level sum of products.

    One NOT per complemented literal, n-1 two-input ANDs per n-literal term,
    and t-1 two-input ORs for t terms.
    """
    if not implicants:
        return 0
    count = len(implicants) - 1
    for impl in implicants:
        count += max(impl.num_literals - 1, 0)
        count += impl.pattern.count("0")
    return count


def simplify_table(table: TruthTable, ast: Node, exact: bool = False) -> SimplificationResult:
    """Minimize a truth table and compare gate counts with the source tree."""
    result = minimize(get_minterms(table), table.num_vars, table.variables, exact=exact)

    original_gates = gate_count(ast)
    simplified_gates = sop_gate_count(result.essential_implicants)
    reduction = round((1 - simplified_gates / original_gates) * 100) if original_gates else 0

    return SimplificationResult(
        original=table.expression,
        simplified=result.expression,
        minimization=result,
        statistics={
            "original_gate_count": original_gates,
            "simplified_gate_count": simplified_gates,
            "reduction": reduction,
            "prime_implicants": len(result.prime_implicants),
            "selected_implicants": len(result.essential_implicants),
            "uncovered_minterms": list(result.uncovered),
        },
    )


def process_expression(expression: str, exact: bool = False) -> ExpressionAnalysis:
    """
    Run the full pipeline on one expression.

    The K-map is built for 2-4 variables and minimization runs for up to
    MAX_MINIMIZE_VARIABLES; outside those ranges the fields are None.

    Raises:
        LexicalError, ExpressionSyntaxError: malformed input
        TooManyVariablesError: more variables than a truth table allows
    """
    tokens = tokenize(expression)
    parsed = parse(tokens)
    table = generate_truth_table(parsed.ast, parsed.variables, expression)

    kmap = None
    kmap_groups = None
    if KMAP_MIN_VARIABLES <= len(parsed.variables) <= KMAP_MAX_VARIABLES:
        kmap = generate_kmap(table)
        kmap_groups = find_kmap_groups(kmap)

    simplification = None
    if len(parsed.variables) <= MAX_MINIMIZE_VARIABLES:
        simplification = simplify_table(table, parsed.ast, exact=exact)

    return ExpressionAnalysis(
        expression=expression,
        tokens=tokens,
        ast=parsed.ast,
        variables=parsed.variables,
        truth_table=table,
        kmap=kmap,
        kmap_groups=kmap_groups,
        simplification=simplification,
    )


def validate_expression(expression: str) -> dict:
    """Check an expression without building its table. Never raises."""
    outcome = try_parse(expression)
    if not outcome.ok:
        return {
            "valid": False,
            "variables": [],
            "variableCount": 0,
            "error": outcome.error.message,
        }
    return {
        "valid": True,
        "variables": outcome.variables,
        "variableCount": len(outcome.variables),
        "error": None,
    }


def simplify_expression(expression: str, exact: bool = False) -> SimplificationResult:
    """
    Parse and minimize an expression.

    Raises:
        TooManyVariablesError: more than MAX_MINIMIZE_VARIABLES variables
    """
    parsed = parse(tokenize(expression))
    if len(parsed.variables) > MAX_MINIMIZE_VARIABLES:
        raise TooManyVariablesError(
            len(parsed.variables), MAX_MINIMIZE_VARIABLES, "minimization"
        )
    table = generate_truth_table(parsed.ast, parsed.variables, expression)
    return simplify_table(table, parsed.ast, exact=exact)


def error_to_dict(error: LogicError, expression: str = None) -> dict:
    body = {
        "error": error.label,
        "message": error.to_user_friendly(expression),
    }
    for attr in ("position", "length", "suggestion"):
        value = getattr(error, attr, None)
        if value is not None:
            body[attr] = value
    return body


def _bad_request(message: str) -> tuple[int, dict]:
    return 400, {"error": "Invalid request", "message": message}


def _summary(simplification: SimplificationResult, with_steps: bool = False) -> dict:
    body = {
        "original": simplification.original,
        "simplified": simplification.simplified,
        "statistics": simplification.statistics,
    }
    if with_steps:
        body["steps"] = [
            {"description": step.description, "data": step.data}
            for step in simplification.minimization.steps
        ]
    return body


def handle_parse(expression) -> tuple[int, dict]:
    """Full analysis: variables, truth table and (when allowed) simplification."""
    if not expression or not isinstance(expression, str):
        return _bad_request("Expression is required and must be a string")
    try:
        analysis = process_expression(expression)
    except LogicError as e:
        return 400, error_to_dict(e, expression)

    return 200, {
        "success": True,
        "data": {
            "expression": analysis.expression,
            "variables": analysis.variables,
            "truthTable": truth_tables.to_dict(analysis.truth_table),
            "simplification": (
                _summary(analysis.simplification) if analysis.simplification else None
            ),
        },
    }


def handle_validate(expression) -> tuple[int, dict]:
    """Validation result; status is always 200."""
    if not isinstance(expression, str):
        expression = ""
    return 200, validate_expression(expression)


def handle_simplify(expression, exact: bool = False) -> tuple[int, dict]:
    if not expression or not isinstance(expression, str):
        return _bad_request("Expression is required and must be a string")
    try:
        simplification = simplify_expression(expression, exact=exact)
    except TooManyVariablesError as e:
        return 400, {
            "error": "Simplification not available",
            "message": f"Expression has too many variables (max {e.limit})",
        }
    except LogicError as e:
        return 400, error_to_dict(e, expression)

    return 200, {"success": True, "data": _summary(simplification, with_steps=True)}


def handle_examples() -> tuple[int, dict]:
    return 200, {"success": True, "data": [dict(example) for example in EXAMPLES]}

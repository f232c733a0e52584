"""Command-line interface for Boolean expression analysis."""

import argparse
import json
import sys

from . import truth_tables
from .analysis import EXAMPLES, error_to_dict, process_expression, validate_expression
from .errors import LogicError
from .evaluator import evaluate_with_trace
from .kmap import print_kmap
from .nodes import to_infix, walk
from .quine_mccluskey import print_prime_implicants
from .verify import print_truth_table_comparison, verify_result


def parse_bindings(text: str) -> dict[str, bool]:
    """Parse ``A=1,B=0`` into bindings (names uppercased)."""
    bindings = {}
    for item in filter(None, (part.strip() for part in text.split(","))):
        name, sep, value = item.partition("=")
        if not sep or value.strip() not in ("0", "1"):
            raise argparse.ArgumentTypeError(f"Bad binding {item!r}, expected NAME=0 or NAME=1")
        bindings[name.strip().upper()] = value.strip() == "1"
    return bindings


def print_examples():
    print("Example expressions")
    print("=" * 40)
    for example in EXAMPLES:
        print(f"  {example['name']:20} [{example['category']}]  {example['expression']}")


def print_trace(ast, bindings: dict[str, bool]):
    result, trace = evaluate_with_trace(ast, bindings)
    print("Evaluation trace:")
    for node in walk(ast):
        print(f"  {int(trace[node.node_id])}  {to_infix(node)}")
    print(f"Result: {int(result)}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Analyze Boolean expressions: truth tables and minimal sum of products",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  logiclab "A AND B OR A AND C"          Truth table and minimized SOP
  logiclab "(A & ~S) | (B & S)" --kmap   Also show the Karnaugh map
  logiclab "A ^ B" --format csv          Truth table as CSV
  logiclab "A B' + C" --exact            Use exact (MaxSAT) cover selection
  logiclab "A + B" --trace A=1,B=0       Show every sub-expression's value
  logiclab --examples                    List example expressions
        """,
    )

    parser.add_argument("expression", nargs="?", help="Boolean expression to analyze")
    parser.add_argument(
        "--format", "-f",
        choices=["text", "csv", "latex", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--exact",
        action="store_true",
        help="Select implicants with an exact minimum cover instead of the greedy one",
    )
    parser.add_argument("--steps", action="store_true", help="Show minimization steps")
    parser.add_argument("--kmap", action="store_true", help="Show the Karnaugh map (2-4 variables)")
    parser.add_argument(
        "--trace",
        type=parse_bindings,
        metavar="A=1,B=0",
        help="Evaluate once with these bindings and show every node's value",
    )
    parser.add_argument("--validate", action="store_true", help="Only check the expression")
    parser.add_argument("--examples", action="store_true", help="List example expressions and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Indexed truth table, verification report and tracebacks")

    args = parser.parse_args(argv)

    if args.examples:
        print_examples()
        return 0

    if args.expression is None:
        parser.error("an expression is required")

    if args.validate:
        result = validate_expression(args.expression)
        print(json.dumps(result, indent=2))
        return 0 if result["valid"] else 1

    try:
        analysis = process_expression(args.expression, exact=args.exact)
    except LogicError as e:
        if args.format == "json":
            print(json.dumps(error_to_dict(e, args.expression), indent=2, ensure_ascii=False))
        else:
            print(e.to_user_friendly(args.expression), file=sys.stderr)
            suggestion = getattr(e, "suggestion", None)
            if suggestion:
                print(f"Hint: {suggestion}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    table = analysis.truth_table
    simplification = analysis.simplification

    if args.format == "csv":
        print(truth_tables.to_csv(table))
        return 0
    if args.format == "latex":
        print(truth_tables.to_latex(table))
        return 0
    if args.format == "json":
        body = {
            "expression": analysis.expression,
            "variables": analysis.variables,
            "truthTable": truth_tables.to_dict(table),
            "sop": truth_tables.to_sop(table),
            "pos": truth_tables.to_pos(table),
            "simplified": simplification.simplified if simplification else None,
            "statistics": simplification.statistics if simplification else None,
        }
        print(json.dumps(body, indent=2, ensure_ascii=False))
        return 0

    print("Boolean Expression Analyzer")
    print("=" * 40)
    print(f"Expression: {analysis.expression}")
    print(f"Parsed:     {to_infix(analysis.ast)}")
    print(f"Variables:  {', '.join(analysis.variables) or '(none)'}")
    print()
    if args.verbose:
        truth_tables.print_truth_table(table)
        print()
    else:
        print(truth_tables.to_text(table))

    constant = truth_tables.constant_value(table)
    if constant is not None:
        print(f"Constant function: always {int(constant)}")
    print(f"Canonical SOP: {truth_tables.to_sop(table)}")
    print(f"Canonical POS: {truth_tables.to_pos(table)}")

    if args.trace is not None:
        print()
        try:
            print_trace(analysis.ast, args.trace)
        except LogicError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if args.kmap:
        print()
        if analysis.kmap is None:
            print("K-map available for 2-4 variables only")
        else:
            print_kmap(analysis.kmap, analysis.kmap_groups)

    if simplification is None:
        print()
        print("Simplification not available: too many variables")
        return 0

    result = simplification.minimization
    print()
    print(f"Minimized ({result.method}): {simplification.simplified}")
    stats = simplification.statistics
    print(
        f"Gates: {stats['original_gate_count']} -> {stats['simplified_gate_count']} "
        f"({stats['reduction']}% reduction)"
    )

    if args.steps:
        print()
        for step in result.steps:
            print(f"- {step.description}")
        print()
        print_prime_implicants(result)

    if args.verbose:
        print()
        print_truth_table_comparison(result, table)
        correct, errors = verify_result(result, table)
        print()
        print(f"Verification {'PASSED' if correct else 'FAILED'}")
        for err in errors:
            print(f"  {err}")

    if result.uncovered:
        print(f"\nWarning: minterms left uncovered: {result.uncovered}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Boolean expression analysis: parsing, truth tables and Quine-McCluskey minimization."""

from .errors import (
    LogicError,
    LexicalError,
    ExpressionSyntaxError,
    UndefinedVariableError,
    TooManyVariablesError,
)
from .lexer import Token, TokenType, tokenize
from .nodes import BinaryKind, BinaryOp, Literal, Not, Variable, clone_ast, to_infix
from .parser import ParseResult, parse, parse_expression
from .evaluator import evaluate, evaluate_with_trace
from .truth_tables import TruthTable, TruthTableRow, generate_truth_table, get_minterms, get_maxterms
from .quine_mccluskey import Implicant, MinimizationResult, minimize
from .solver import exact_cover
from .verify import verify_result
from .analysis import process_expression, validate_expression, simplify_expression

__all__ = [
    "LogicError",
    "LexicalError",
    "ExpressionSyntaxError",
    "UndefinedVariableError",
    "TooManyVariablesError",
    "Token",
    "TokenType",
    "tokenize",
    "BinaryKind",
    "BinaryOp",
    "Literal",
    "Not",
    "Variable",
    "clone_ast",
    "to_infix",
    "ParseResult",
    "parse",
    "parse_expression",
    "evaluate",
    "evaluate_with_trace",
    "TruthTable",
    "TruthTableRow",
    "generate_truth_table",
    "get_minterms",
    "get_maxterms",
    "Implicant",
    "MinimizationResult",
    "minimize",
    "exact_cover",
    "verify_result",
    "process_expression",
    "validate_expression",
    "simplify_expression",
]
__version__ = "0.1.0"

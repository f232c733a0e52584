import pytest

from logiclab.errors import ExpressionSyntaxError, LexicalError
from logiclab.lexer import Token, TokenType, tokenize
from logiclab.nodes import BinaryKind, BinaryOp, Literal, Not, Variable, node_count, to_infix, to_symbolic, walk
from logiclab.parser import MAX_NESTING_DEPTH, parse, parse_expression
from logiclab.truth_tables import generate_truth_table

A, B, C, D = Variable("A"), Variable("B"), Variable("C"), Variable("D")


def op(kind, left, right):
    return BinaryOp(BinaryKind[kind], left, right)


def ast_of(text):
    return parse_expression(text).ast


def test_and_binds_tighter_than_or():
    assert ast_of("A AND B OR C") == op("OR", op("AND", A, B), C)


def test_precedence_tiers():
    assert ast_of("A OR B XOR C AND D") == op("OR", A, op("XOR", B, op("AND", C, D)))
    assert ast_of("A NOR B XNOR C NAND D") == op("NOR", A, op("XNOR", B, op("NAND", C, D)))


def test_left_associative():
    assert ast_of("A NAND B NAND C") == op("NAND", op("NAND", A, B), C)
    assert ast_of("A ^ B ^ C") == op("XOR", op("XOR", A, B), C)


def test_parentheses_reset_precedence():
    assert ast_of("(A OR B) AND C") == op("AND", op("OR", A, B), C)
    assert ast_of("((A))") == A


@pytest.mark.parametrize("text, expected", [
    ("A B", op("AND", A, B)),
    ("A(B + C)", op("AND", A, op("OR", B, C))),
    ("A'B", op("AND", Not(A), B)),
    ("A B'", op("AND", A, Not(B))),
    ("A ~B", op("AND", A, Not(B))),
    ("A 1", op("AND", A, Literal(True))),
    ("(A)(B)", op("AND", A, B)),
    ("A B & C D", op("AND", op("AND", op("AND", A, B), C), D)),
    ("A B + C D", op("OR", op("AND", A, B), op("AND", C, D))),
])
def test_implicit_and(text, expected):
    assert ast_of(text) == expected


def test_multi_letter_names_are_single_variables():
    result = parse_expression("AB + C")
    assert result.variables == ["AB", "C"]


def test_postfix_and_prefix_not():
    assert ast_of("A''") == Not(Not(A))
    assert ast_of("~A'") == Not(Not(A))
    assert ast_of("NOT NOT A") == Not(Not(A))
    assert ast_of("(A + B)'") == Not(op("OR", A, B))
    assert ast_of("NOT A AND B") == op("AND", Not(A), B)


def test_literals():
    assert ast_of("true") == Literal(True)
    assert ast_of("0 OR A") == op("OR", Literal(False), A)


def test_variables_sorted_and_unique():
    assert parse_expression("b AND a OR B").variables == ["A", "B"]
    assert parse_expression("1 OR 0").variables == []


def test_node_ids_unique_and_per_call():
    first = parse_expression("(A AND B) OR NOT C")
    second = parse_expression("(A AND B) OR NOT C")
    first_ids = [n.node_id for n in walk(first.ast)]
    assert len(set(first_ids)) == len(first_ids)
    assert first_ids == [n.node_id for n in walk(second.ast)]


def test_token_list_without_eof_is_accepted():
    tokens = [Token(TokenType.VARIABLE, "A", 0, 1)]
    assert parse(tokens).ast == A


@pytest.mark.parametrize("text", ["", "   "])
def test_empty_expression(text):
    with pytest.raises(ExpressionSyntaxError) as exc:
        parse_expression(text)
    assert exc.value.message == "Expression cannot be empty"


def test_unexpected_end():
    with pytest.raises(ExpressionSyntaxError) as exc:
        parse_expression("A AND")
    assert exc.value.message == "Unexpected end of expression"
    assert exc.value.position == 5
    assert exc.value.length == 0


def test_missing_closing_parenthesis():
    with pytest.raises(ExpressionSyntaxError) as exc:
        parse_expression("(A OR B")
    assert exc.value.message == "Missing closing parenthesis"
    assert exc.value.position == 7
    assert exc.value.suggestion


def test_trailing_tokens():
    with pytest.raises(ExpressionSyntaxError) as exc:
        parse_expression("A B )")
    assert exc.value.message == "Unexpected token: )"
    assert exc.value.position == 4
    assert exc.value.length == 1


def test_unexpected_token():
    with pytest.raises(ExpressionSyntaxError) as exc:
        parse_expression(") A")
    assert "got: )" in exc.value.message


def test_double_plus_is_a_syntax_error():
    # Both '+' lex as OR; the second has no left operand
    with pytest.raises(ExpressionSyntaxError) as exc:
        parse_expression("A ++ B")
    assert exc.value.position == 3
    assert "got: +" in exc.value.message


def test_lexical_errors_propagate():
    with pytest.raises(LexicalError):
        parse_expression("A = B")


ROUND_TRIP = [
    "A AND B",
    "A OR B AND NOT C",
    "(A XOR B) XNOR (C NAND D)",
    "A B' + A' B",
    "~(A | B) & 1",
    "NOT NOT (A NOR B) XOR 0",
    "(A AND NOT S) OR (B AND S)",
    "A''' ^ B",
]


@pytest.mark.parametrize("text", ROUND_TRIP)
def test_infix_round_trip(text):
    original = parse_expression(text)
    reparsed = parse_expression(to_infix(original.ast))
    assert reparsed.ast == original.ast
    assert reparsed.variables == original.variables


@pytest.mark.parametrize("text", ROUND_TRIP)
def test_symbolic_round_trip_preserves_truth_table(text):
    original = parse_expression(text)
    reparsed = parse_expression(to_symbolic(original.ast))
    first = generate_truth_table(original.ast, original.variables)
    second = generate_truth_table(reparsed.ast, original.variables)
    assert first.outputs == second.outputs


def test_nesting_limit():
    depth = MAX_NESTING_DEPTH
    assert ast_of("(" * depth + "A" + ")" * depth) == A

    with pytest.raises(ExpressionSyntaxError) as exc:
        parse_expression("(" * (depth + 1) + "A" + ")" * (depth + 1))
    assert exc.value.message == "Expression is nested too deeply"
    assert exc.value.position == depth
    assert exc.value.length == 1


def test_long_prefix_not_chain():
    ast = ast_of("~" * 3000 + "A'")
    assert node_count(ast) == 3002
    assert [type(n).__name__ for n in walk(ast)][-2:] == ["Not", "Variable"]

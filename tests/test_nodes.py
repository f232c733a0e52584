from logiclab.nodes import (
    BinaryKind,
    BinaryOp,
    Literal,
    Not,
    Variable,
    clone_ast,
    count_gates,
    extract_variables,
    node_count,
    to_infix,
    to_symbolic,
    walk,
)
from logiclab.parser import parse_expression


def test_equality_ignores_ids():
    assert Variable("A", node_id=1) == Variable("A", node_id=2)
    assert Not(Variable("A"), node_id=3) != Not(Variable("B"), node_id=3)


def test_clone_is_equal_with_fresh_ids():
    ast = parse_expression("(A AND B) OR NOT C").ast
    clone = clone_ast(ast)
    assert clone == ast
    original_ids = {n.node_id for n in walk(ast)}
    clone_ids = [n.node_id for n in walk(clone)]
    assert len(set(clone_ids)) == len(clone_ids)
    assert original_ids.isdisjoint(clone_ids)


def test_walk_is_preorder():
    ast = parse_expression("A AND B").ast
    assert [type(n).__name__ for n in walk(ast)] == ["BinaryOp", "Variable", "Variable"]


def test_extract_variables():
    ast = parse_expression("c OR (b AND c) XOR a").ast
    assert extract_variables(ast) == ["A", "B", "C"]
    assert extract_variables(Literal(True)) == []


def test_counts():
    ast = parse_expression("A AND B OR NOT C").ast
    assert count_gates(ast) == {"AND": 1, "OR": 1, "NOT": 1}
    assert node_count(ast) == 6


def test_rendering():
    ast = BinaryOp(BinaryKind.XNOR, Not(Variable("A")), Literal(False))
    assert to_infix(ast) == "(NOT A XNOR 0)"
    assert to_symbolic(ast) == "(¬A ⊙ 0)"
    assert to_infix(Not(BinaryOp(BinaryKind.AND, Variable("A"), Variable("B")))) == "NOT (A AND B)"


def test_deep_tree_rendering_and_clone():
    ast = parse_expression(" AND ".join(["A"] * 2000)).ast
    assert to_infix(ast).startswith("(" * 1999 + "A AND A)")
    assert to_symbolic(ast).count("∧") == 1999

    clone_ids = [n.node_id for n in walk(clone_ast(ast))]
    assert len(clone_ids) == node_count(ast)
    assert len(set(clone_ids)) == len(clone_ids)

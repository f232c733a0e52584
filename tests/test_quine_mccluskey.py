import random

import pytest

from logiclab.errors import TooManyVariablesError
from logiclab.parser import parse_expression
from logiclab.quine_mccluskey import (
    MAX_MINIMIZE_VARIABLES,
    Implicant,
    find_prime_implicants,
    implicants_to_sop,
    minimize,
    select_cover,
    try_merge,
)
from logiclab.truth_tables import generate_truth_table, get_minterms
from logiclab.verify import evaluate_sop, verify_result


def imp(pattern, *minterms):
    return Implicant(pattern=pattern, minterms=tuple(minterms))


def terms(expression):
    return set(expression.split(" + "))


@pytest.mark.parametrize("a, b, expected", [
    ("010", "011", "01-"),
    ("0-1", "0-0", "0--"),
    ("1-0", "0-0", "--0"),
    ("0-1", "-01", None),
    ("01", "10", None),
    ("01", "01", None),
    ("01", "011", None),
])
def test_try_merge(a, b, expected):
    merged = try_merge(imp(a, 0), imp(b, 1))
    if expected is None:
        assert merged is None
    else:
        assert merged.pattern == expected
        assert merged.minterms == (0, 1)


def test_implicant_covers_and_renders():
    impl = imp("1-0", 4, 6)
    assert impl.covers(4) and impl.covers(6)
    assert not impl.covers(5)
    assert impl.num_literals == 2
    assert impl.to_term(["A", "B", "C"]) == "AC'"
    assert imp("---").to_term(["A", "B", "C"]) == "1"


def test_implicants_compare_by_pattern():
    assert imp("01-", 2, 3) == imp("01-")
    assert len({imp("01-", 2, 3), imp("01-")}) == 1


def test_empty_and_full_sets():
    assert minimize([], 3).expression == "0"
    full = minimize(range(8), 3)
    assert full.expression == "1"
    assert full.prime_implicants == []


def test_prime_implicants_are_marked():
    primes = find_prime_implicants([5, 6, 7], 3)
    assert [p.pattern for p in primes] == ["1-1", "11-"]
    assert all(p.is_prime for p in primes)


def test_shared_literal_is_factored():
    parsed = parse_expression("A AND B OR A AND C")
    table = generate_truth_table(parsed.ast, parsed.variables)
    assert get_minterms(table) == [5, 6, 7]

    result = minimize(get_minterms(table), 3, table.variables)
    assert terms(result.expression) == {"AB", "AC"}
    assert verify_result(result, table) == (True, [])


def test_majority_function():
    result = minimize([3, 5, 6, 7], 3, ["A", "B", "C"])
    assert terms(result.expression) == {"AB", "AC", "BC"}
    assert len(result.prime_implicants) == 3


def test_single_literal_result():
    assert minimize([2, 3], 2, ["A", "B"]).expression == "A"
    assert minimize([0, 2], 2, ["A", "B"]).expression == "B'"


def test_cyclic_cover_uses_greedy_phase():
    # Every minterm is covered by exactly two primes, so none is essential
    result = minimize([0, 1, 2, 5, 6, 7], 3, ["A", "B", "C"])
    assert len(result.prime_implicants) == 6
    assert result.expression == "A'B' + BC' + AC"
    assert result.is_complete


def test_select_cover_reports_uncovered():
    selected, uncovered = select_cover([imp("00-", 0, 1)], [0, 1, 3])
    assert [s.pattern for s in selected] == ["00-"]
    assert uncovered == [3]


def test_idempotent_on_minimal_cover():
    first = minimize([0, 1, 2, 5, 6, 7, 8, 9, 10, 14], 4)
    covered = sorted({m for impl in first.essential_implicants for m in impl.minterms})
    second = minimize(covered, 4)
    assert [p.pattern for p in second.essential_implicants] == [
        p.pattern for p in first.essential_implicants
    ]


def test_steps_are_recorded():
    result = minimize([1, 3, 5], 3)
    assert result.steps[0].description == "Initial minterms converted to binary"
    assert result.steps[-1].description.startswith("Selected")


def test_default_names_and_sop():
    result = minimize([1], 2)
    assert result.variables == ["A", "B"]
    assert result.expression == "A'B"
    assert implicants_to_sop([], ["A"]) == "0"


def test_input_validation():
    with pytest.raises(TooManyVariablesError):
        minimize([0], MAX_MINIMIZE_VARIABLES + 1)
    with pytest.raises(ValueError):
        minimize([8], 3)
    with pytest.raises(ValueError):
        minimize([1], 3, ["A", "B"])


def test_duplicates_are_ignored():
    assert minimize([3, 3, 2], 2, ["A", "B"]).minterms == [2, 3]


def _check_cover(result, on_set, n_vars):
    assert result.is_complete
    for m in range(2 ** n_vars):
        assert evaluate_sop(result.essential_implicants, m) == (m in on_set)


def test_every_three_variable_function():
    for mask in range(256):
        on_set = {m for m in range(8) if mask >> m & 1}
        result = minimize(on_set, 3)
        if not on_set or len(on_set) == 8:
            continue
        _check_cover(result, on_set, 3)


@pytest.mark.parametrize("n_vars", [4, 5, 6])
def test_random_functions(n_vars):
    rng = random.Random(n_vars)
    for _ in range(40):
        on_set = {m for m in range(2 ** n_vars) if rng.random() < 0.5}
        if not on_set or len(on_set) == 2 ** n_vars:
            continue
        _check_cover(minimize(on_set, n_vars), on_set, n_vars)

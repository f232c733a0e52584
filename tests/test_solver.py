import random

import pytest

from logiclab.quine_mccluskey import Implicant, find_prime_implicants, minimize
from logiclab.solver import cover_cost, exact_cover, implicant_cost
from logiclab.verify import evaluate_sop


def test_implicant_cost():
    assert implicant_cost(Implicant("1-0", (4, 6))) == 3
    assert implicant_cost(Implicant("1--", (4, 5, 6, 7))) == 1


def test_exact_cover_of_cyclic_function():
    on_set = [0, 1, 2, 5, 6, 7]
    primes = find_prime_implicants(on_set, 3)
    selected = exact_cover(primes, on_set)
    assert len(selected) == 3
    assert all(any(p.covers(m) for p in selected) for m in on_set)


def test_exact_cover_keeps_prime_order():
    primes = find_prime_implicants([3, 5, 6, 7], 3)
    selected = exact_cover(primes, [3, 5, 6, 7])
    assert selected == primes


def test_exact_cover_edge_cases():
    assert exact_cover([], []) == []
    with pytest.raises(RuntimeError):
        exact_cover([Implicant("00", (0,))], [3])


def test_minimize_exact():
    result = minimize([0, 1, 2, 5, 6, 7], 3, ["A", "B", "C"], exact=True)
    assert result.method == "exact"
    assert len(result.essential_implicants) == 3
    assert result.is_complete


@pytest.mark.parametrize("n_vars", [4, 5])
def test_exact_never_costs_more_than_greedy(n_vars):
    rng = random.Random(100 + n_vars)
    for _ in range(15):
        on_set = {m for m in range(2 ** n_vars) if rng.random() < 0.5}
        if not on_set or len(on_set) == 2 ** n_vars:
            continue
        greedy = minimize(on_set, n_vars)
        exact = minimize(on_set, n_vars, exact=True)
        assert cover_cost(exact.essential_implicants) <= cover_cost(greedy.essential_implicants)
        for m in range(2 ** n_vars):
            assert evaluate_sop(exact.essential_implicants, m) == (m in on_set)

"""
Minimum-cost implicant cover using MaxSAT.

The greedy cover in ``quine_mccluskey.py`` can pick more terms than
necessary when several primes tie. For the sizes we allow (at most 64
minterms) the covering problem is small enough to solve exactly:

- Hard clauses: every on-set minterm is covered by a selected prime
- Soft clauses: each selected prime costs its gate inputs
"""

from pysat.examples.rc2 import RC2
from pysat.formula import WCNF

from .quine_mccluskey import Implicant


def implicant_cost(impl: Implicant) -> int:
    """
    Gate-input cost of using a product term in a two-level circuit.

    Cost model (assuming input complements are free):
    - AND gate inputs: only for multi-literal terms (2+ literals)
    - OR gate inputs: one per term
    """
    and_cost = impl.num_literals if impl.num_literals >= 2 else 0
    return and_cost + 1


def exact_cover(primes: list[Implicant], minterms: list[int]) -> list[Implicant]:
    """
    Select a minimum-cost subset of primes covering every minterm.

    Returns:
        Selected implicants, in the order they appear in ``primes``

    Raises:
        RuntimeError: some minterm is covered by no prime, or no model exists
    """
    if not minterms:
        return []

    wcnf = WCNF()

    # Variable mapping: implicant index -> SAT variable (1-indexed)
    impl_vars = {i: i + 1 for i in range(len(primes))}

    for minterm in minterms:
        covering = [impl_vars[i] for i, impl in enumerate(primes) if impl.covers(minterm)]
        if not covering:
            raise RuntimeError(f"No implicant covers minterm {minterm}")
        wcnf.append(covering)

    for i, impl in enumerate(primes):
        wcnf.append([-impl_vars[i]], weight=implicant_cost(impl))

    with RC2(wcnf) as solver:
        model = solver.compute()
        if model is None:
            raise RuntimeError("MaxSAT solver found no solution")
        chosen = {lit for lit in model if lit > 0}

    return [impl for i, impl in enumerate(primes) if impl_vars[i] in chosen]


def cover_cost(implicants: list[Implicant]) -> int:
    """Total gate inputs of a sum of products built from these terms."""
    return sum(implicant_cost(impl) for impl in implicants)

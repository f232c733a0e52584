"""
Pure Python implementation of the Quine-McCluskey algorithm for Boolean minimization.

Implicants are written as patterns over ``{0, 1, -}`` with the first
variable as the leftmost (most significant) position; ``-`` marks a bit the
term does not depend on. For 3 variables (A, B, C), ``1-0`` is ``AC'`` and
covers minterms 4 and 6.

Cover selection is two-phase: primes that are the only cover of some
minterm are taken first, then the prime covering the most remaining
minterms is taken until everything is covered. The greedy phase breaks
ties by prime order, so it is not guaranteed minimal; ``exact=True`` hands
the covering problem to a MaxSAT solver instead (see ``solver.py``).
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import TooManyVariablesError

MAX_MINIMIZE_VARIABLES = 6


@dataclass(frozen=False)
class Implicant:
    """
    A product term together with the minterms it was built from.

    Two implicants are equal when their patterns are equal.
    """

    pattern: str
    minterms: tuple[int, ...] = field(compare=False)
    is_prime: bool = field(default=False, compare=False)

    @classmethod
    def from_minterm(cls, minterm: int, n_vars: int) -> "Implicant":
        return cls(pattern=format(minterm, f"0{n_vars}b") if n_vars else "", minterms=(minterm,))

    @property
    def num_ones(self) -> int:
        return self.pattern.count("1")

    @property
    def num_literals(self) -> int:
        """Count the number of literals (gate inputs) in this implicant."""
        return len(self.pattern) - self.pattern.count("-")

    def covers(self, minterm: int) -> bool:
        """Check if every fixed position matches the minterm's bits."""
        bits = format(minterm, f"0{len(self.pattern)}b") if self.pattern else ""
        return all(p == "-" or p == b for p, b in zip(self.pattern, bits))

    def to_term(self, var_names: list[str]) -> str:
        """Convert to a product term: ``1`` -> A, ``0`` -> A', ``-`` -> omitted."""
        literals = []
        for name, p in zip(var_names, self.pattern):
            if p == "1":
                literals.append(name)
            elif p == "0":
                literals.append(f"{name}'")
        return "".join(literals) if literals else "1"

    def __hash__(self):
        return hash(self.pattern)

    def __repr__(self):
        return f"Implicant({self.pattern}, {list(self.minterms)})"


def try_merge(impl1: Implicant, impl2: Implicant) -> Optional[Implicant]:
    """
    Try to merge two implicants differing in exactly one variable.

    Two implicants can merge if:
    1. Their dashes are in the same positions
    2. They differ in exactly one of the remaining positions

    Returns new implicant with one less literal, or None if can't merge.
    """
    if len(impl1.pattern) != len(impl2.pattern):
        return None

    diff_index = -1
    for i, (a, b) in enumerate(zip(impl1.pattern, impl2.pattern)):
        if a == b:
            continue
        if a == "-" or b == "-" or diff_index != -1:
            return None
        diff_index = i

    if diff_index == -1:
        return None

    pattern = impl1.pattern[:diff_index] + "-" + impl1.pattern[diff_index + 1:]
    minterms = tuple(sorted(set(impl1.minterms) | set(impl2.minterms)))
    return Implicant(pattern=pattern, minterms=minterms)


@dataclass
class Step:
    """One recorded stage of a minimization run, for explanations."""

    description: str
    data: Any = None


def find_prime_implicants(
    minterms: list[int],
    n_vars: int,
    steps: list[Step] = None,
) -> list[Implicant]:
    """
    Run the combination rounds of Quine-McCluskey.

    Each round groups implicants by their number of 1s and tries every pair
    from adjacent groups. Implicants that never merge in their round are
    prime.

    Args:
        minterms: Sorted, de-duplicated on-set
        n_vars: Number of input variables
        steps: Optional list to append per-round descriptions to

    Returns:
        Prime implicants, de-duplicated by pattern, in discovery order
    """
    current = [Implicant.from_minterm(m, n_vars) for m in minterms]
    if steps is not None:
        steps.append(Step(
            "Initial minterms converted to binary",
            [{"minterm": i.minterms[0], "binary": i.pattern} for i in current],
        ))

    primes = []
    iteration = 0

    while current:
        iteration += 1
        groups: dict[int, list[int]] = {}
        for index, impl in enumerate(current):
            groups.setdefault(impl.num_ones, []).append(index)

        keys = sorted(groups)
        next_gen: dict[str, Implicant] = {}
        used: set[int] = set()

        for low, high in zip(keys, keys[1:]):
            if high != low + 1:
                continue
            for i in groups[low]:
                for j in groups[high]:
                    merged = try_merge(current[i], current[j])
                    if merged is None:
                        continue
                    if merged.pattern not in next_gen:
                        next_gen[merged.pattern] = merged
                    used.add(i)
                    used.add(j)

        for index, impl in enumerate(current):
            if index not in used:
                primes.append(impl)

        if next_gen and steps is not None:
            steps.append(Step(
                f"Iteration {iteration}: Combined {len(used)} implicants "
                f"into {len(next_gen)} new implicants",
                [{"minterms": list(i.minterms), "binary": i.pattern} for i in next_gen.values()],
            ))

        current = list(next_gen.values())

    unique = {}
    for impl in primes:
        if impl.pattern not in unique:
            impl.is_prime = True
            unique[impl.pattern] = impl
    return list(unique.values())


def select_cover(
    primes: list[Implicant],
    minterms: list[int],
) -> tuple[list[Implicant], list[int]]:
    """
    Choose implicants covering the on-set.

    Phase 1 takes every prime that is the sole cover of some minterm.
    Phase 2 repeatedly takes the unselected prime covering the most
    uncovered minterms, earliest prime winning ties.

    Returns:
        Tuple of (selected implicants, minterms left uncovered)
    """
    selected: list[int] = []
    covered: set[int] = set()

    for m in minterms:
        covering = [i for i, pi in enumerate(primes) if pi.covers(m)]
        if len(covering) == 1 and covering[0] not in selected:
            selected.append(covering[0])
            covered.update(primes[covering[0]].minterms)

    uncovered = [m for m in minterms if m not in covered]
    remaining = [i for i in range(len(primes)) if i not in selected]

    while uncovered and remaining:
        best = None
        best_count = 0

        for i in remaining:
            count = sum(1 for m in uncovered if primes[i].covers(m))
            if count > best_count:
                best_count = count
                best = i

        if best is None:
            break

        selected.append(best)
        remaining.remove(best)
        uncovered = [m for m in uncovered if not primes[best].covers(m)]

    return [primes[i] for i in selected], uncovered


def implicants_to_sop(implicants: list[Implicant], var_names: list[str]) -> str:
    """Join product terms with `` + ``; no terms is the constant 0."""
    terms = [impl.to_term(var_names) for impl in implicants]
    return " + ".join(terms) if terms else "0"


@dataclass
class MinimizationResult:
    """Result of minimizing one single-output function."""

    variables: list[str]
    minterms: list[int]
    prime_implicants: list[Implicant]
    essential_implicants: list[Implicant]
    expression: str
    method: str = "greedy"
    steps: list[Step] = field(default_factory=list)
    uncovered: list[int] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """False when the cover left some minterm uncovered."""
        return not self.uncovered

    @property
    def literal_count(self) -> int:
        return sum(impl.num_literals for impl in self.essential_implicants)


def default_variable_names(n_vars: int) -> list[str]:
    return [chr(ord("A") + i) for i in range(n_vars)]


def minimize(
    minterms,
    num_vars: int,
    variable_names: list[str] = None,
    exact: bool = False,
) -> MinimizationResult:
    """
    Compute a minimal sum of products for the given on-set.

    Args:
        minterms: Iterable of minterm indices where the function is 1
        num_vars: Number of input variables
        variable_names: Names for the pattern positions, MSB first
        exact: Use a minimum-cost cover instead of the greedy heuristic

    Raises:
        TooManyVariablesError: num_vars exceeds MAX_MINIMIZE_VARIABLES
        ValueError: a minterm is out of range or the names don't match num_vars
    """
    if num_vars > MAX_MINIMIZE_VARIABLES:
        raise TooManyVariablesError(num_vars, MAX_MINIMIZE_VARIABLES, "minimization")
    if variable_names is None:
        variable_names = default_variable_names(num_vars)
    if len(variable_names) != num_vars:
        raise ValueError(
            f"Expected {num_vars} variable names, got {len(variable_names)}"
        )

    total = 1 << num_vars
    on_set = sorted(set(minterms))
    for m in on_set:
        if not 0 <= m < total:
            raise ValueError(f"Minterm {m} out of range for {num_vars} variables")

    method = "exact" if exact else "greedy"

    if not on_set:
        return MinimizationResult(
            variables=list(variable_names),
            minterms=[],
            prime_implicants=[],
            essential_implicants=[],
            expression="0",
            method=method,
            steps=[Step("No minterms - output is always 0")],
        )

    if len(on_set) == total:
        return MinimizationResult(
            variables=list(variable_names),
            minterms=on_set,
            prime_implicants=[],
            essential_implicants=[],
            expression="1",
            method=method,
            steps=[Step("All minterms present - output is always 1")],
        )

    steps = []
    primes = find_prime_implicants(on_set, num_vars, steps)
    steps.append(Step(
        f"Found {len(primes)} prime implicants",
        [
            {"minterms": list(p.minterms), "binary": p.pattern, "term": p.to_term(variable_names)}
            for p in primes
        ],
    ))

    if exact:
        from .solver import exact_cover
        selected = exact_cover(primes, on_set)
        uncovered = [m for m in on_set if not any(p.covers(m) for p in selected)]
    else:
        selected, uncovered = select_cover(primes, on_set)

    steps.append(Step(
        f"Selected {len(selected)} essential prime implicants",
        [
            {"minterms": list(p.minterms), "binary": p.pattern, "term": p.to_term(variable_names)}
            for p in selected
        ],
    ))
    if uncovered:
        steps.append(Step(f"Minterms left uncovered: {uncovered}", uncovered))

    return MinimizationResult(
        variables=list(variable_names),
        minterms=on_set,
        prime_implicants=primes,
        essential_implicants=selected,
        expression=implicants_to_sop(selected, variable_names),
        method=method,
        steps=steps,
        uncovered=uncovered,
    )


def print_prime_implicants(result: MinimizationResult):
    """Debug helper to print all prime implicants of a result."""
    print(f"Prime implicants ({len(result.prime_implicants)}):")
    chosen = set(result.essential_implicants)
    for p in sorted(result.prime_implicants, key=lambda x: (x.num_literals, x.pattern)):
        mark = "*" if p in chosen else " "
        term = p.to_term(result.variables)
        print(f" {mark} {term:10} {p.pattern}  ({p.num_literals} lit) -> {list(p.minterms)}")

"""
Karnaugh maps for 2-4 variable truth tables.

Rows and columns are labelled in Gray-code order so neighbouring cells
differ in one variable, and groups may wrap around the edges. Grouping is
a display aid: it takes the largest all-ones rectangles first and drops
groups that add no new cells, which is not always a minimal cover. Use
``quine_mccluskey.minimize`` for the authoritative result.
"""

from dataclasses import dataclass

from .evaluator import Bindings, minterm_number
from .truth_tables import TruthTable

KMAP_MIN_VARIABLES = 2
KMAP_MAX_VARIABLES = 4


@dataclass(frozen=True)
class KMapCell:
    value: bool
    minterm: int
    row: int
    col: int
    assignment: Bindings


@dataclass(frozen=True)
class KMap:
    variables: list[str]
    row_vars: list[str]
    col_vars: list[str]
    row_headers: list[str]
    col_headers: list[str]
    cells: list[list[KMapCell]]

    @property
    def num_rows(self) -> int:
        return len(self.row_headers)

    @property
    def num_cols(self) -> int:
        return len(self.col_headers)

    @property
    def grid(self) -> list[list[int]]:
        return [[int(cell.value) for cell in row] for row in self.cells]


@dataclass(frozen=True)
class KMapGroup:
    cells: tuple[tuple[int, int], ...]
    term: str
    minterms: tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.cells)


def gray_code(position: int, bits: int) -> str:
    """Gray code of ``position`` as a zero-padded bit string."""
    if bits == 0:
        return ""
    return format(position ^ (position >> 1), f"0{bits}b")


def generate_kmap(table: TruthTable) -> KMap:
    """
    Lay out a truth table as a Karnaugh map.

    Variables are split MSB-first: 2 vars as 1x1, 3 vars as 1x2, 4 vars as 2x2
    row/column variables.

    Raises:
        ValueError: the table has fewer than 2 or more than 4 variables
    """
    variables = table.variables
    n = len(variables)
    if not KMAP_MIN_VARIABLES <= n <= KMAP_MAX_VARIABLES:
        raise ValueError(
            f"K-map generation supports {KMAP_MIN_VARIABLES}-{KMAP_MAX_VARIABLES} variables only"
        )

    n_row_vars = 2 if n == 4 else 1
    row_vars = variables[:n_row_vars]
    col_vars = variables[n_row_vars:]

    row_headers = [gray_code(i, len(row_vars)) for i in range(1 << len(row_vars))]
    col_headers = [gray_code(i, len(col_vars)) for i in range(1 << len(col_vars))]

    cells = []
    for r, row_bits in enumerate(row_headers):
        cell_row = []
        for c, col_bits in enumerate(col_headers):
            assignment = {}
            for name, bit in zip(row_vars, row_bits):
                assignment[name] = bit == "1"
            for name, bit in zip(col_vars, col_bits):
                assignment[name] = bit == "1"

            minterm = minterm_number(assignment, variables)
            cell_row.append(KMapCell(
                value=table.rows[minterm].output,
                minterm=minterm,
                row=r,
                col=c,
                assignment=assignment,
            ))
        cells.append(cell_row)

    return KMap(
        variables=list(variables),
        row_vars=list(row_vars),
        col_vars=list(col_vars),
        row_headers=row_headers,
        col_headers=col_headers,
        cells=cells,
    )


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def _dimensions(size: int, max_rows: int, max_cols: int) -> list[tuple[int, int]]:
    dims = []
    for height in range(1, min(size, max_rows) + 1):
        if size % height:
            continue
        width = size // height
        if width <= max_cols and _is_power_of_two(height) and _is_power_of_two(width):
            dims.append((height, width))
    return dims


def _try_group(kmap: KMap, start_r: int, start_c: int, height: int, width: int):
    cells = []
    for dr in range(height):
        for dc in range(width):
            r = (start_r + dr) % kmap.num_rows
            c = (start_c + dc) % kmap.num_cols
            if not kmap.cells[r][c].value:
                return None
            cells.append((r, c))
    return cells


def _group_term(kmap: KMap, cells: list[tuple[int, int]]) -> str:
    first = kmap.cells[cells[0][0]][cells[0][1]].assignment
    literals = []
    for name in kmap.row_vars + kmap.col_vars:
        value = first[name]
        if all(kmap.cells[r][c].assignment[name] == value for r, c in cells):
            literals.append(name if value else f"{name}'")
    return "".join(literals) if literals else "1"


def find_kmap_groups(kmap: KMap) -> list[KMapGroup]:
    """
    Find rectangular groups of ones covering every 1-cell.

    Returns:
        Groups, largest first, each adding at least one cell not already covered
    """
    total = kmap.num_rows * kmap.num_cols
    ones = [
        (r, c)
        for r in range(kmap.num_rows)
        for c in range(kmap.num_cols)
        if kmap.cells[r][c].value
    ]

    if not ones:
        return []
    if len(ones) == total:
        minterms = tuple(sorted(kmap.cells[r][c].minterm for r, c in ones))
        return [KMapGroup(cells=tuple(ones), term="1", minterms=minterms)]

    covered = set()
    candidates = []

    for size in (s for s in (16, 8, 4, 2, 1) if s <= total):
        for height, width in _dimensions(size, kmap.num_rows, kmap.num_cols):
            for start_r in range(kmap.num_rows):
                for start_c in range(kmap.num_cols):
                    cells = _try_group(kmap, start_r, start_c, height, width)
                    if cells is None:
                        continue
                    if all(cell in covered for cell in cells):
                        continue
                    candidates.append(cells)
                    covered.update(cells)

    candidates.sort(key=len, reverse=True)
    groups = []
    covered = set()
    for cells in candidates:
        if all(cell in covered for cell in cells):
            continue
        covered.update(cells)
        groups.append(KMapGroup(
            cells=tuple(cells),
            term=_group_term(kmap, cells),
            minterms=tuple(sorted(kmap.cells[r][c].minterm for r, c in cells)),
        ))
    return groups


def kmap_sop(groups: list[KMapGroup]) -> str:
    """Sum of products from K-map groups, duplicate terms removed."""
    if not groups:
        return "0"
    terms = list(dict.fromkeys(group.term for group in groups))
    if terms == ["1"]:
        return "1"
    return " + ".join(terms)


def print_kmap(kmap: KMap, groups: list[KMapGroup] = None):
    """Print the map grid with Gray-coded headers."""
    row_label = "".join(kmap.row_vars)
    col_label = "".join(kmap.col_vars)
    print(f"{row_label}\\{col_label}".ljust(8) + " ".join(h.rjust(3) for h in kmap.col_headers))
    for header, row in zip(kmap.row_headers, kmap.cells):
        print(header.ljust(8) + " ".join(str(int(cell.value)).rjust(3) for cell in row))
    if groups is not None:
        print(f"Groups: {', '.join(g.term for g in groups) or 'none'}")
        print(f"K-map SOP: {kmap_sop(groups)}")

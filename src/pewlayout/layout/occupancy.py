"""
Occupancy model: vectors, matrices and arrangements of pew pairs.

A matrix is indexed ``[ring][diagonal]`` with 2 marking a symmetric pair at
that intersection. A vector holds the ring marginals followed by the diagonal
marginals, both counted in pews (2 per pair).
"""

from typing import Iterable, List, Sequence, Tuple
import numpy as np

from pewlayout.core.base import Arrangement, Matrix, MatrixKey, Vector


RING_COUNT = 3
DIAGONAL_COUNT = 3
PAIR = 2
TOTAL_PEWS = 6
ALLOWED_COUNTS = (0, 2, 4, 6)
INNER_RING_COUNTS = (0, 2)

RING_NAMES = ["Inner", "Middle", "Outer"]
DIAGONAL_NAMES = ["Horizontal", "Top-Right to Bottom-Left", "Top-Left to Bottom-Right"]


def empty_matrix() -> Matrix:
    return [[0] * DIAGONAL_COUNT for _ in range(RING_COUNT)]


def copy_matrix(matrix: Sequence[Sequence[int]]) -> Matrix:
    """Deep copy of a matrix as plain nested lists."""
    return [[int(v) for v in row] for row in matrix]


def matrix_key(matrix: Sequence[Sequence[int]]) -> MatrixKey:
    """Hashable form of a matrix, used for visited sets."""
    return tuple(tuple(int(v) for v in row) for row in matrix)


def matrix_from_cells(cells: Iterable[Tuple[int, int]]) -> Matrix:
    """Build a matrix with a pair at every (ring, diagonal) cell given."""
    matrix = empty_matrix()
    for ring, diagonal in cells:
        matrix[ring][diagonal] = PAIR
    return matrix


def occupied_cells(matrix: Sequence[Sequence[int]]) -> List[Tuple[int, int]]:
    """(ring, diagonal) cells holding a pair, in scan order."""
    return [
        (r, d)
        for r in range(RING_COUNT)
        for d in range(DIAGONAL_COUNT)
        if matrix[r][d]
    ]


def matrix_to_vector(matrix: Sequence[Sequence[int]]) -> Vector:
    """Collapse a matrix to its ring and diagonal marginals."""
    grid = np.asarray(matrix, dtype=int)
    rings = grid.sum(axis=1)
    diagonals = grid.sum(axis=0)
    return tuple(int(v) for v in np.concatenate([rings, diagonals]))


def split_vector(vector: Sequence[int]) -> Tuple[List[int], List[int]]:
    """Split a vector into (ring counts, diagonal counts)."""
    values = list(vector)
    return values[:RING_COUNT], values[RING_COUNT:RING_COUNT + DIAGONAL_COUNT]


def pair_placements(ring: int, diagonal: int) -> Arrangement:
    """Both symmetric placements of a pair."""
    return [(ring, diagonal, 0), (ring, diagonal, 1)]


def cells_to_arrangement(cells: Iterable[Tuple[int, int]]) -> Arrangement:
    arrangement = []
    for ring, diagonal in cells:
        arrangement.extend(pair_placements(ring, diagonal))
    return arrangement


def matrix_to_arrangement(matrix: Sequence[Sequence[int]]) -> Arrangement:
    """Each occupied cell yields both sides of its pair."""
    return cells_to_arrangement(occupied_cells(matrix))


def arrangement_to_matrix(arrangement: Iterable[Sequence[int]]) -> Matrix:
    return matrix_from_cells((p[0], p[1]) for p in arrangement)


def arrangement_cells(arrangement: Iterable[Sequence[int]]) -> frozenset:
    """Set of (ring, diagonal) cells used by an arrangement."""
    return frozenset((p[0], p[1]) for p in arrangement)


def cell_distance(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> int:
    """Number of (ring, diagonal) cells that differ between two matrices."""
    return int(np.count_nonzero(np.asarray(a, dtype=int) != np.asarray(b, dtype=int)))


def get_position_name(ring: int, diagonal: int) -> str:
    """Descriptive name of a matrix position."""
    return f"{RING_NAMES[ring]} Ring, {DIAGONAL_NAMES[diagonal]} Diagonal"


def format_matrix(matrix: Sequence[Sequence[int]]) -> str:
    """Render a matrix as 'a,b,c;d,e,f;g,h,i'."""
    return ";".join(",".join(str(v) for v in row) for row in matrix)


def parse_matrix(text: str) -> Matrix:
    """Parse the 'a,b,c;d,e,f;g,h,i' form.

    Raises:
        ValueError: If a cell is not an integer
    """
    rows = [row for row in text.strip().split(";") if row.strip()]
    return [[int(cell) for cell in row.split(",")] for row in rows]


def parse_vector(text: str) -> Vector:
    """Parse the 'r1,r2,r3,d1,d2,d3' form."""
    return tuple(int(v) for v in text.replace(" ", "").strip("()[]").split(",") if v)

"""
Arrangement finder.

Turns a valid occupancy vector into concrete pew placements. Vectors with a
known classification come from a static table; everything else is either
enumerated exhaustively over the 3x3 grid or built greedily.
"""

import warnings
from itertools import combinations
from typing import Dict, List, Sequence, Tuple

from pewlayout.core.base import Arrangement, Vector
from pewlayout.layout.occupancy import (
    DIAGONAL_COUNT, PAIR, RING_COUNT, TOTAL_PEWS, cells_to_arrangement, split_vector,
)
from pewlayout.layout.vectors import is_valid_vector


Cells = List[Tuple[int, int]]

# (ring, diagonal) cells of each arrangement, in display order
KNOWN_ARRANGEMENTS: Dict[Vector, List[Cells]] = {
    (2, 2, 2, 2, 2, 2): [
        [(0, 0), (1, 1), (2, 2)],
        [(0, 1), (1, 2), (2, 0)],
        [(0, 2), (1, 0), (2, 1)],
        [(0, 0), (1, 2), (2, 1)],
        [(0, 1), (1, 0), (2, 2)],
        [(0, 2), (1, 1), (2, 0)],
    ],
    (0, 2, 4, 2, 2, 2): [
        [(1, 0), (2, 1), (2, 2)],
        [(1, 1), (2, 0), (2, 2)],
        [(1, 2), (2, 0), (2, 1)],
    ],
    (0, 4, 2, 2, 2, 2): [
        [(1, 0), (1, 1), (2, 2)],
        [(1, 0), (1, 2), (2, 1)],
        [(1, 1), (1, 2), (2, 0)],
    ],
    (2, 0, 4, 2, 2, 2): [
        [(0, 0), (2, 1), (2, 2)],
        [(0, 1), (2, 0), (2, 2)],
        [(0, 2), (2, 0), (2, 1)],
    ],
    (2, 4, 0, 2, 2, 2): [
        [(0, 0), (1, 1), (1, 2)],
        [(0, 1), (1, 0), (1, 2)],
        [(0, 2), (1, 0), (1, 1)],
    ],
    (0, 0, 6, 2, 2, 2): [
        [(2, 0), (2, 1), (2, 2)],
    ],
    (0, 6, 0, 2, 2, 2): [
        [(1, 0), (1, 1), (1, 2)],
    ],
}

FALLBACK_CELLS: Cells = [(0, 0), (1, 1), (2, 2)]


def enumerate_cell_sets(rings: Sequence[int], diagonals: Sequence[int]) -> List[Cells]:
    """
    Every set of intersections whose marginals match the counts.

    Rings are filled in order; each ring picks a combination of diagonals
    that still have demand left.
    """
    results: List[Cells] = []
    diag_left = list(diagonals)

    def fill(ring: int, chosen: Cells):
        if ring == RING_COUNT:
            if not any(diag_left):
                results.append(list(chosen))
            return
        pairs_needed = rings[ring] // PAIR
        for picked in combinations(range(DIAGONAL_COUNT), pairs_needed):
            if any(diag_left[d] < PAIR for d in picked):
                continue
            for d in picked:
                diag_left[d] -= PAIR
            fill(ring + 1, chosen + [(ring, d) for d in picked])
            for d in picked:
                diag_left[d] += PAIR

    fill(0, [])
    return results


def construct_greedy_cells(vector: Sequence[int]) -> Cells:
    """
    Greedy pair placement ring by ring.

    May return fewer than 3 cells when an early choice blocks a later ring.
    """
    rings, diagonals = split_vector(vector)
    ring_placed = [0] * RING_COUNT
    diag_placed = [0] * DIAGONAL_COUNT
    cells: Cells = []

    def has_demand(ring: int, diag: int) -> bool:
        return (
            diagonals[diag] >= PAIR
            and diag_placed[diag] < diagonals[diag]
            and (ring, diag) not in cells
        )

    def place(ring: int, diag: int):
        cells.append((ring, diag))
        ring_placed[ring] += PAIR
        diag_placed[diag] += PAIR

    if rings[0] == PAIR:
        for diag in range(DIAGONAL_COUNT):
            if has_demand(0, diag):
                place(0, diag)
                break

    for ring in (1, 2):
        while ring_placed[ring] < rings[ring]:
            placed = False
            for diag in range(DIAGONAL_COUNT):
                if ring_placed[ring] < rings[ring] and has_demand(ring, diag):
                    place(ring, diag)
                    placed = True
            if not placed:
                break

    return cells


def find_all_arrangements(vector, method: str = "exhaustive") -> List[Arrangement]:
    """
    Find all distinct arrangements realizing a vector.

    Args:
        vector: Occupancy vector (r1, r2, r3, d1, d2, d3)
        method: "exhaustive" enumerates every arrangement, "greedy" builds one

    Returns:
        List of arrangements, each 6 (ring, diagonal, side) tuples; empty for
        invalid vectors
    """
    if not is_valid_vector(vector):
        return []

    key = tuple(int(v) for v in vector)
    if key in KNOWN_ARRANGEMENTS:
        return [cells_to_arrangement(cells) for cells in KNOWN_ARRANGEMENTS[key]]

    if method == "exhaustive":
        rings, diagonals = split_vector(key)
        return [cells_to_arrangement(cells) for cells in enumerate_cell_sets(rings, diagonals)]

    if method != "greedy":
        raise ValueError(f"method must be 'exhaustive' or 'greedy', got '{method}'")

    cells = construct_greedy_cells(key)
    if len(cells) * PAIR != TOTAL_PEWS:
        warnings.warn(f"Failed to generate a proper arrangement for vector {key}; using fallback")
        cells = FALLBACK_CELLS
    return [cells_to_arrangement(cells)]


def count_arrangements(vector) -> int:
    """Number of distinct arrangements realizing a vector."""
    return len(find_all_arrangements(vector))

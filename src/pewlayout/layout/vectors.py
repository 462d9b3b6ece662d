"""
Occupancy vector validation and enumeration.

A vector ``(r1, r2, r3, d1, d2, d3)`` is realizable when the ring and
diagonal marginals can be met by placing pairs on distinct intersections.
Feasibility starts from the pigeonhole lower bound on each intersection and
then places the remaining pairs in scan order.
"""

import numbers
from typing import List, Optional, Sequence

from pewlayout.core.base import ErrorCode, Matrix, ValidationResult, Vector
from pewlayout.layout.occupancy import (
    ALLOWED_COUNTS, DIAGONAL_COUNT, INNER_RING_COUNTS, PAIR, RING_COUNT,
    TOTAL_PEWS, empty_matrix, split_vector,
)


# Vectors realized by more than one arrangement, listed first
MULTIPLY_REALIZABLE = [
    (2, 2, 2, 2, 2, 2),  # 6 arrangements
    (0, 2, 4, 2, 2, 2),  # 3 arrangements
    (0, 4, 2, 2, 2, 2),  # 3 arrangements
    (2, 0, 4, 2, 2, 2),  # 3 arrangements
    (2, 4, 0, 2, 2, 2),  # 3 arrangements
]


def _as_int_tuple(vector) -> Optional[Vector]:
    if vector is None or isinstance(vector, (str, bytes)):
        return None
    try:
        values = tuple(vector)
    except TypeError:
        return None
    if len(values) != RING_COUNT + DIAGONAL_COUNT:
        return None
    if any(isinstance(v, bool) or not isinstance(v, numbers.Integral) for v in values):
        return None
    return tuple(int(v) for v in values)


def minimum_distribution(rings: Sequence[int], diagonals: Sequence[int]) -> Optional[Matrix]:
    """Pews every intersection must hold, or None if one needs more than a pair."""
    distribution = empty_matrix()
    for r in range(RING_COUNT):
        for d in range(DIAGONAL_COUNT):
            required = max(0, rings[r] + diagonals[d] - TOTAL_PEWS)
            if required > PAIR:
                return None
            distribution[r][d] = required
    return distribution


def _place_remaining(distribution: Matrix, ring_left: List[int], diag_left: List[int]) -> bool:
    if not any(ring_left) and not any(diag_left):
        return True

    for r in range(RING_COUNT):
        if ring_left[r] < PAIR:
            continue
        for d in range(DIAGONAL_COUNT):
            if diag_left[d] < PAIR or distribution[r][d] >= PAIR:
                continue
            distribution[r][d] += PAIR
            ring_left[r] -= PAIR
            diag_left[d] -= PAIR
            if _place_remaining(distribution, ring_left, diag_left):
                return True
            distribution[r][d] -= PAIR
            ring_left[r] += PAIR
            diag_left[d] += PAIR

    return False


def distribute_pairs(rings: Sequence[int], diagonals: Sequence[int]) -> Optional[Matrix]:
    """
    Find a distribution matrix meeting the ring and diagonal marginals.

    The first candidate in (ring, diagonal) order is always tried first; the
    search only moves on to later candidates when that choice dead-ends.

    Returns:
        The distribution matrix, or None if the marginals are infeasible
    """
    distribution = minimum_distribution(rings, diagonals)
    if distribution is None:
        return None

    ring_left = list(rings)
    diag_left = list(diagonals)
    for r in range(RING_COUNT):
        for d in range(DIAGONAL_COUNT):
            ring_left[r] -= distribution[r][d]
            diag_left[d] -= distribution[r][d]

    if any(v < 0 for v in ring_left) or any(v < 0 for v in diag_left):
        return None

    if not _place_remaining(distribution, ring_left, diag_left):
        return None
    return distribution


def diagnose_vector(vector) -> ValidationResult:
    """Validate a vector and report which constraint failed."""
    values = _as_int_tuple(vector)
    if values is None:
        return ValidationResult(False, ErrorCode.STRUCTURAL_INVALID, "Vector must be 6 integers")

    rings, diagonals = split_vector(values)
    if rings[0] not in INNER_RING_COUNTS:
        return ValidationResult(False, ErrorCode.CONSTRAINT_INVALID, "Inner ring holds at most one pair (0 or 2)")
    if any(v not in ALLOWED_COUNTS for v in values):
        return ValidationResult(False, ErrorCode.CONSTRAINT_INVALID, "Counts must be 0, 2, 4 or 6")
    if sum(rings) != TOTAL_PEWS:
        return ValidationResult(False, ErrorCode.CONSTRAINT_INVALID, f"Ring counts sum to {sum(rings)}, expected {TOTAL_PEWS}")
    if sum(diagonals) != TOTAL_PEWS:
        return ValidationResult(False, ErrorCode.CONSTRAINT_INVALID, f"Diagonal counts sum to {sum(diagonals)}, expected {TOTAL_PEWS}")
    if distribute_pairs(rings, diagonals) is None:
        return ValidationResult(False, ErrorCode.CONSTRAINT_INVALID, "No placement of pairs meets these ring and diagonal counts")

    return ValidationResult(True)


def is_valid_vector(vector) -> bool:
    return diagnose_vector(vector).valid


def generate_all_valid_vectors() -> List[Vector]:
    """All valid vectors, multiply realizable ones first."""
    valid_vectors = []

    for r1 in INNER_RING_COUNTS:
        for r2 in ALLOWED_COUNTS:
            r3 = TOTAL_PEWS - r1 - r2
            if r3 not in ALLOWED_COUNTS:
                continue
            for d1 in ALLOWED_COUNTS:
                for d2 in ALLOWED_COUNTS:
                    d3 = TOTAL_PEWS - d1 - d2
                    if d3 not in ALLOWED_COUNTS:
                        continue
                    vector = (r1, r2, r3, d1, d2, d3)
                    if is_valid_vector(vector):
                        valid_vectors.append(vector)

    others = [v for v in valid_vectors if v not in MULTIPLY_REALIZABLE]
    return list(MULTIPLY_REALIZABLE) + others

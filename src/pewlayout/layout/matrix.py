"""
Matrix validation, canonical states and the default configuration.
"""

import numbers
from itertools import combinations
from typing import Dict, List

import numpy as np

from pewlayout.core.base import ErrorCode, Matrix, ValidationResult
from pewlayout.layout.occupancy import (
    DIAGONAL_COUNT, PAIR, RING_COUNT, TOTAL_PEWS, copy_matrix, matrix_from_cells,
)


# Waypoints for the via-canonical search, in selection order
CANONICAL_STATES: Dict[str, Matrix] = {
    "diagonal_0": [[2, 0, 0], [2, 0, 0], [2, 0, 0]],
    "diagonal_1": [[0, 2, 0], [0, 2, 0], [0, 2, 0]],
    "diagonal_2": [[0, 0, 2], [0, 0, 2], [0, 0, 2]],
    "outer_ring": [[0, 0, 0], [0, 0, 0], [2, 2, 2]],
}

DEFAULT_STATE = "outer_ring"


def _is_cell(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, numbers.Integral) and value in (0, PAIR)


def _has_grid_shape(matrix) -> bool:
    if not isinstance(matrix, (list, tuple, np.ndarray)) or len(matrix) != RING_COUNT:
        return False
    return all(isinstance(row, (list, tuple, np.ndarray)) and len(row) == DIAGONAL_COUNT for row in matrix)


def diagnose_matrix(matrix) -> ValidationResult:
    """Validate a matrix and report why it is rejected."""
    if not _has_grid_shape(matrix):
        return ValidationResult(False, ErrorCode.STRUCTURAL_INVALID, "Matrix must be 3x3")
    if not all(_is_cell(v) for row in matrix for v in row):
        return ValidationResult(False, ErrorCode.STRUCTURAL_INVALID, "Cells must be 0 or 2")

    total_pairs = sum(v for row in matrix for v in row) // PAIR
    needed = TOTAL_PEWS // PAIR
    if total_pairs < needed:
        missing = needed - total_pairs
        return ValidationResult(
            False, ErrorCode.CONSTRAINT_INVALID,
            f"Need {missing} more pair{'s' if missing != 1 else ''} (total must be {needed})",
        )
    if total_pairs > needed:
        extra = total_pairs - needed
        return ValidationResult(
            False, ErrorCode.CONSTRAINT_INVALID,
            f"Remove {extra} pair{'s' if extra != 1 else ''} (total must be {needed})",
        )
    if sum(matrix[0]) > PAIR:
        return ValidationResult(False, ErrorCode.CONSTRAINT_INVALID, "Maximum 1 pair on inner ring")

    return ValidationResult(True)


def is_valid_matrix(matrix) -> bool:
    return diagnose_matrix(matrix).valid


def generate_default_matrix() -> Matrix:
    """All pews on the outer ring."""
    return copy_matrix(CANONICAL_STATES[DEFAULT_STATE])


def all_valid_matrices() -> List[Matrix]:
    """Every valid matrix, in cell scan order."""
    cells = [(r, d) for r in range(RING_COUNT) for d in range(DIAGONAL_COUNT)]
    matrices = []
    for chosen in combinations(cells, TOTAL_PEWS // PAIR):
        matrix = matrix_from_cells(chosen)
        if is_valid_matrix(matrix):
            matrices.append(matrix)
    return matrices

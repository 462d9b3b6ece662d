"""
Constraint engine and path planner for pew layouts on the hexagonal floor.
"""

from pewlayout.layout.occupancy import (
    matrix_to_vector, matrix_to_arrangement, arrangement_to_matrix,
    cell_distance, get_position_name, parse_matrix, parse_vector, format_matrix,
)

from pewlayout.layout.vectors import (
    is_valid_vector, diagnose_vector, generate_all_valid_vectors, MULTIPLY_REALIZABLE,
)

from pewlayout.layout.arrangements import find_all_arrangements, count_arrangements

from pewlayout.layout.matrix import (
    is_valid_matrix, diagnose_matrix, generate_default_matrix, all_valid_matrices,
    CANONICAL_STATES,
)

from pewlayout.layout.moves import SearchContext, get_valid_moves, is_legal_transition

from pewlayout.layout.planner import (
    calculate_transition, plan_transition, verify_transition, select_canonical,
)

__all__ = [
    # Occupancy
    'matrix_to_vector', 'matrix_to_arrangement', 'arrangement_to_matrix',
    'cell_distance', 'get_position_name', 'parse_matrix', 'parse_vector', 'format_matrix',
    # Vectors
    'is_valid_vector', 'diagnose_vector', 'generate_all_valid_vectors', 'MULTIPLY_REALIZABLE',
    # Arrangements
    'find_all_arrangements', 'count_arrangements',
    # Matrices
    'is_valid_matrix', 'diagnose_matrix', 'generate_default_matrix', 'all_valid_matrices',
    'CANONICAL_STATES',
    # Moves
    'SearchContext', 'get_valid_moves', 'is_legal_transition',
    # Planner
    'calculate_transition', 'plan_transition', 'verify_transition', 'select_canonical',
]

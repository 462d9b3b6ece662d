"""Tests for the move generator."""

from pewlayout.core.base import MoveDirection, MoveKind
from pewlayout.core.config import SearchConfig
from pewlayout.layout.matrix import CANONICAL_STATES, all_valid_matrices, generate_default_matrix, is_valid_matrix
from pewlayout.layout.moves import (
    SearchContext, get_valid_moves, is_legal_transition, rotate_ring, rotation_direction, shift_diagonal,
)
from pewlayout.layout.occupancy import matrix_key


DIAGONAL_0 = CANONICAL_STATES["diagonal_0"]


class TestPrimitives:

    def test_rotate_ring(self):
        assert rotate_ring(DIAGONAL_0, 0, 1) == [[0, 2, 0], [2, 0, 0], [2, 0, 0]]

    def test_rotate_does_not_mutate(self):
        matrix = [list(row) for row in DIAGONAL_0]
        rotate_ring(matrix, 0, 2)
        assert matrix == DIAGONAL_0

    def test_shift_inward_collapses(self):
        shifted = shift_diagonal(DIAGONAL_0, 0, -1)
        assert shifted == [[2, 0, 0], [2, 0, 0], [0, 0, 0]]
        assert not is_valid_matrix(shifted)

    def test_shift_outward(self):
        assert shift_diagonal([[2, 0, 0], [0, 2, 0], [0, 0, 2]], 0, 1) == [[0, 0, 0], [2, 2, 0], [0, 0, 2]]

    def test_shortest_direction(self):
        assert rotation_direction(1) == (MoveDirection.CLOCKWISE, 1)
        assert rotation_direction(2) == (MoveDirection.COUNTERCLOCKWISE, 1)

    def test_preferred_direction_wins(self):
        assert rotation_direction(2, MoveDirection.CLOCKWISE) == (MoveDirection.CLOCKWISE, 2)
        assert rotation_direction(1, MoveDirection.COUNTERCLOCKWISE) == (MoveDirection.COUNTERCLOCKWISE, 2)


class TestGetValidMoves:

    def test_default_matrix_only_shifts_inward(self):
        moves = get_valid_moves(generate_default_matrix())
        assert len(moves) == 3
        assert all(m.kind == MoveKind.DIAGONAL and m.direction == MoveDirection.INWARD for m in moves)
        assert moves[0].description == "Move pews on horizontal diagonal inward (Outer -> Middle ring)"
        assert moves[0].matrix == [[0, 0, 0], [2, 0, 0], [0, 2, 2]]

    def test_single_diagonal_only_rotates(self):
        moves = get_valid_moves(DIAGONAL_0)
        assert len(moves) == 6
        assert all(m.kind == MoveKind.RING for m in moves)

    def test_ring_direction_is_fixed_on_first_discovery(self):
        moves = [m for m in get_valid_moves(DIAGONAL_0) if m.index == 0]
        assert [(m.direction, m.steps) for m in moves] == [
            (MoveDirection.CLOCKWISE, 1), (MoveDirection.CLOCKWISE, 2),
        ]
        assert moves[0].description == "Rotate inner ring clockwise by 1 position"
        assert moves[1].description == "Rotate inner ring clockwise by 2 positions"

    def test_direction_consistency_can_be_disabled(self):
        context = SearchContext(config=SearchConfig(direction_consistency=False))
        moves = [m for m in get_valid_moves(DIAGONAL_0, context) if m.index == 0]
        assert moves[1].direction == MoveDirection.COUNTERCLOCKWISE
        assert moves[1].steps == 1
        assert context.ring_directions == {}

    def test_context_direction_carries_over(self):
        context = SearchContext()
        context.remember_direction(0, MoveDirection.COUNTERCLOCKWISE)
        moves = [m for m in get_valid_moves(DIAGONAL_0, context) if m.index == 0]
        assert [(m.direction, m.steps) for m in moves] == [
            (MoveDirection.COUNTERCLOCKWISE, 2), (MoveDirection.COUNTERCLOCKWISE, 1),
        ]

    def test_expansions_are_counted(self):
        context = SearchContext()
        get_valid_moves(DIAGONAL_0, context)
        get_valid_moves(generate_default_matrix(), context)
        assert context.expanded == 2
        context.reset()
        assert context.expanded == 0
        assert context.ring_directions == {}

    def test_rotation_pew_motions(self):
        move = get_valid_moves(DIAGONAL_0)[0]
        assert [(p.source, p.target) for p in move.pews] == [
            ((0, 0, 0), (0, 1, 0)), ((0, 0, 1), (0, 1, 1)),
        ]
        assert move.angular_distance > 0
        assert move.linear_distance == 0.0

    def test_shift_pew_motions(self):
        move = get_valid_moves(generate_default_matrix())[0]
        assert [p.target for p in move.pews] == [(1, 0, 0), (1, 0, 1)]
        assert move.linear_distance > 0

    def test_moves_preserve_validity(self):
        for matrix in all_valid_matrices():
            for move in get_valid_moves(matrix):
                assert is_valid_matrix(move.matrix)
                assert matrix_key(move.matrix) != matrix_key(matrix)


class TestIsLegalTransition:

    def test_one_move_apart(self):
        assert is_legal_transition(DIAGONAL_0, [[0, 2, 0], [2, 0, 0], [2, 0, 0]])

    def test_same_matrix_is_not_a_move(self):
        assert not is_legal_transition(DIAGONAL_0, DIAGONAL_0)

    def test_two_moves_apart(self):
        assert not is_legal_transition(generate_default_matrix(), DIAGONAL_0)

    def test_invalid_matrix(self):
        assert not is_legal_transition(DIAGONAL_0, [[0, 0, 0], [0, 0, 0], [0, 0, 0]])

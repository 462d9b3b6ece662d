"""Tests for the transition planner."""

from itertools import permutations

import numpy as np
import pytest

from pewlayout.core.base import ErrorCode, MoveKind, TransitionStep
from pewlayout.core.config import SearchConfig
from pewlayout.layout.matrix import CANONICAL_STATES, all_valid_matrices, generate_default_matrix
from pewlayout.layout.moves import SearchContext
from pewlayout.layout.planner import (
    calculate_transition, plan_transition, select_canonical, verify_transition,
)


OUTER = CANONICAL_STATES["outer_ring"]
DIAGONAL_0 = CANONICAL_STATES["diagonal_0"]


class TestPlanTransition:

    def test_identical_matrices_give_no_steps(self):
        assert calculate_transition(OUTER, [list(row) for row in OUTER]) == []

    def test_path_from_default_to_diagonal(self):
        plan = plan_transition(generate_default_matrix(), DIAGONAL_0)
        assert plan.success
        assert plan.strategy == "direct"
        assert plan.steps[0].description == "Initial arrangement"
        assert plan.steps[0].move is None
        assert plan.steps[-1].matrix == DIAGONAL_0
        assert verify_transition(plan.steps, OUTER, DIAGONAL_0)

    def test_invalid_start_gives_error_step(self):
        steps = calculate_transition([[0, 0, 0], [0, 0, 0], [0, 0, 0]], OUTER)
        assert len(steps) == 1
        assert steps[0].error == ErrorCode.CONSTRAINT_INVALID
        assert steps[0].description.startswith("Invalid start matrix")
        assert steps[0].matrix == [[0, 0, 0], [0, 0, 0], [0, 0, 0]]

    def test_structural_error_has_no_matrix(self):
        plan = plan_transition(OUTER, "not a matrix")
        assert plan.error == ErrorCode.STRUCTURAL_INVALID
        assert plan.steps[0].matrix is None
        assert plan.steps[0].description == "Invalid target matrix: Matrix must be 3x3"

    def test_depth_bound_exhausts_search(self):
        plan = plan_transition(OUTER, DIAGONAL_0, SearchConfig(strategies=["bfs"], bfs_max_depth=1))
        assert not plan.success
        assert plan.error == ErrorCode.SEARCH_EXHAUSTED
        assert plan.steps[0].description == "Could not find a path between these arrangements"
        assert plan.attempted == ["bfs"]
        assert plan.expanded > 0

    def test_unknown_strategy_is_skipped(self, recwarn):
        plan = plan_transition(OUTER, DIAGONAL_0, SearchConfig(strategies=["teleport", "bfs"]))
        assert plan.strategy == "bfs"
        assert plan.attempted == ["bfs"]
        assert plan.skipped == ["teleport"]
        assert len(recwarn) == 0

    def test_only_unknown_strategies_exhaust_search(self):
        plan = plan_transition(OUTER, DIAGONAL_0, SearchConfig(strategies=["teleport"]))
        assert plan.error == ErrorCode.SEARCH_EXHAUSTED
        assert plan.attempted == []
        assert plan.to_dict()["skipped"] == ["teleport"]

    @pytest.mark.parametrize("strategy", ["direct", "astar", "bfs", "via_canonical"])
    def test_each_strategy_finds_a_valid_path(self, strategy):
        start = [[2, 0, 0], [0, 2, 0], [0, 0, 2]]
        plan = plan_transition(start, OUTER, SearchConfig(strategies=[strategy]))
        assert plan.strategy == strategy
        assert verify_transition(plan.steps, start, OUTER)

    def test_bfs_path_is_shortest(self):
        plan = plan_transition(OUTER, DIAGONAL_0, SearchConfig(strategies=["bfs"]))
        assert len(plan.moves) == 4

    def test_context_is_reset_per_plan(self):
        context = SearchContext()
        plan_transition(OUTER, DIAGONAL_0, context=context)
        first = context.expanded
        plan_transition(OUTER, DIAGONAL_0, context=context)
        assert context.expanded == first

    def test_numpy_matrices(self):
        plan = plan_transition(np.array(OUTER), np.array(DIAGONAL_0))
        assert plan.success
        assert verify_transition(plan.steps, OUTER, DIAGONAL_0)

    def test_plan_serializes(self):
        data = plan_transition(OUTER, DIAGONAL_0).to_dict()
        assert data["error"] == "OK"
        assert data["steps"][1]["move"]["kind"] in ("ring", "diagonal")


class TestAllPairs:

    def test_every_pair_has_a_valid_consistent_path(self):
        for start, goal in permutations(all_valid_matrices(), 2):
            plan = plan_transition(start, goal)
            assert plan.success, (start, goal)
            assert verify_transition(plan.steps, start, goal), (start, goal)

            directions = {}
            for move in plan.moves:
                if move.kind == MoveKind.RING:
                    assert directions.setdefault(move.index, move.direction) == move.direction


class TestSelectCanonical:

    def test_exact_match(self):
        assert select_canonical(CANONICAL_STATES["diagonal_1"]) == "diagonal_1"

    def test_outer_ring_with_two_pairs(self):
        assert select_canonical([[0, 0, 0], [2, 0, 0], [0, 2, 2]]) == "outer_ring"

    def test_busiest_diagonal(self):
        assert select_canonical([[2, 0, 0], [2, 0, 0], [0, 2, 0]]) == "diagonal_0"

    def test_tie_prefers_lowest_diagonal(self):
        assert select_canonical([[0, 2, 0], [2, 0, 0], [0, 0, 2]]) == "diagonal_0"


class TestVerifyTransition:

    def test_empty_list_is_not_a_path(self):
        assert not verify_transition([], OUTER, DIAGONAL_0)

    def test_rejects_jumps(self):
        steps = [TransitionStep(OUTER, "Initial arrangement"), TransitionStep(DIAGONAL_0, "jump")]
        assert not verify_transition(steps, OUTER, DIAGONAL_0)

    def test_rejects_wrong_endpoint(self):
        steps = calculate_transition(OUTER, DIAGONAL_0)
        assert not verify_transition(steps, OUTER, CANONICAL_STATES["diagonal_1"])

"""Tests for the arrangement finder."""

import numpy as np
import pytest

from pewlayout.layout.arrangements import (
    FALLBACK_CELLS, KNOWN_ARRANGEMENTS, construct_greedy_cells, count_arrangements,
    enumerate_cell_sets, find_all_arrangements,
)
from pewlayout.layout.occupancy import arrangement_cells, arrangement_to_matrix, matrix_to_vector, split_vector
from pewlayout.layout.vectors import MULTIPLY_REALIZABLE, generate_all_valid_vectors


def _as_cell_sets(arrangements):
    return {arrangement_cells(a) for a in arrangements}


class TestKnownArrangements:

    def test_fully_spread_vector_has_six(self):
        arrangements = find_all_arrangements([2, 2, 2, 2, 2, 2])
        assert len(arrangements) == 6
        assert len(_as_cell_sets(arrangements)) == 6

    def test_each_arrangement_holds_both_sides(self):
        for arrangement in find_all_arrangements((2, 2, 2, 2, 2, 2)):
            assert len(arrangement) == 6
            for ring, diagonal, _ in arrangement:
                assert (ring, diagonal, 0) in arrangement
                assert (ring, diagonal, 1) in arrangement

    def test_outer_ring_vector_has_one(self):
        arrangements = find_all_arrangements([0, 0, 6, 2, 2, 2])
        assert len(arrangements) == 1
        assert all(ring == 2 for ring, _, _ in arrangements[0])

    def test_multiply_realizable_counts(self):
        assert [count_arrangements(v) for v in MULTIPLY_REALIZABLE] == [6, 3, 3, 3, 3]

    @pytest.mark.parametrize("vector", sorted(KNOWN_ARRANGEMENTS))
    def test_table_entries_realize_their_vector(self, vector):
        for arrangement in find_all_arrangements(vector):
            assert matrix_to_vector(arrangement_to_matrix(arrangement)) == vector

    def test_middle_pair_with_outer_pairs(self):
        arrangements = find_all_arrangements((0, 2, 4, 2, 2, 2))
        assert [sorted(arrangement_cells(a)) for a in arrangements] == [
            [(1, 0), (2, 1), (2, 2)],
            [(1, 1), (2, 0), (2, 2)],
            [(1, 2), (2, 0), (2, 1)],
        ]

    @pytest.mark.parametrize("vector", sorted(KNOWN_ARRANGEMENTS))
    def test_table_matches_exhaustive_enumeration(self, vector):
        rings, diagonals = split_vector(vector)
        enumerated = {frozenset(cells) for cells in enumerate_cell_sets(rings, diagonals)}
        table = {frozenset(cells) for cells in KNOWN_ARRANGEMENTS[vector]}
        assert enumerated == table


class TestExhaustive:

    def test_invalid_vector_gives_empty_list(self):
        assert find_all_arrangements((6, 0, 0, 2, 2, 2)) == []

    def test_numpy_vector(self):
        assert count_arrangements(np.array([2, 2, 2, 2, 2, 2])) == 6

    def test_vector_outside_table_with_several_arrangements(self):
        assert count_arrangements((2, 2, 2, 4, 2, 0)) == 3

    def test_every_arrangement_realizes_its_vector(self):
        for vector in generate_all_valid_vectors():
            arrangements = find_all_arrangements(vector)
            assert arrangements
            for arrangement in arrangements:
                assert matrix_to_vector(arrangement_to_matrix(arrangement)) == vector

    def test_unknown_method_raises(self):
        with pytest.raises(ValueError, match="method must be"):
            find_all_arrangements((2, 2, 2, 4, 2, 0), method="random")


class TestGreedy:

    def test_greedy_builds_one_arrangement(self):
        arrangements = find_all_arrangements((2, 2, 2, 4, 2, 0), method="greedy")
        assert len(arrangements) == 1
        assert matrix_to_vector(arrangement_to_matrix(arrangements[0])) == (2, 2, 2, 4, 2, 0)

    def test_greedy_can_dead_end(self):
        assert len(construct_greedy_cells((2, 4, 0, 2, 4, 0))) == 2

    def test_greedy_failure_warns_and_falls_back(self):
        with pytest.warns(UserWarning, match="fallback"):
            arrangements = find_all_arrangements((2, 4, 0, 2, 4, 0), method="greedy")
        assert arrangement_cells(arrangements[0]) == frozenset(FALLBACK_CELLS)

    def test_table_vectors_ignore_method(self):
        assert count_arrangements((2, 2, 2, 2, 2, 2)) == len(
            find_all_arrangements((2, 2, 2, 2, 2, 2), method="greedy"))

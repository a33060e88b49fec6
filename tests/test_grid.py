"""Tests for flipgrid.core.grid – toggle rule and solved check."""

from __future__ import annotations

import itertools

import pytest

from flipgrid.core.errors import IndexOutOfBounds
from flipgrid.core.grid import (
    GRID_SIZE,
    TOTAL_CELLS,
    all_on_grid,
    cell_position,
    create_empty_grid,
    is_solved,
    neighbours,
    toggle,
    toggle_cell,
)


def _flipped(before, after) -> set[int]:
    return {i for i, (a, b) in enumerate(zip(before, after)) if a != b}


# ---------------------------------------------------------------------------
# construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_sizes(self):
        assert GRID_SIZE == 3
        assert TOTAL_CELLS == 9

    def test_empty_grid_all_off(self):
        g = create_empty_grid()
        assert len(g) == TOTAL_CELLS
        assert not any(g)

    def test_all_on_grid(self):
        assert all(all_on_grid())
        assert len(all_on_grid()) == TOTAL_CELLS

    def test_cell_position(self):
        assert cell_position(0) == (0, 0)
        assert cell_position(5) == (1, 2)
        assert cell_position(7) == (2, 1)


# ---------------------------------------------------------------------------
# toggle
# ---------------------------------------------------------------------------

class TestToggle:
    @pytest.mark.parametrize(
        "index, expected",
        [
            (0, {0, 1, 3}),
            (1, {0, 1, 2, 4}),
            (2, {1, 2, 5}),
            (3, {0, 3, 4, 6}),
            (4, {1, 3, 4, 5, 7}),
            (5, {2, 4, 5, 8}),
            (6, {3, 6, 7}),
            (7, {4, 6, 7, 8}),
            (8, {5, 7, 8}),
        ],
    )
    def test_plus_shape(self, index, expected):
        g = create_empty_grid()
        assert _flipped(g, toggle(g, index)) == expected

    def test_flip_counts_by_cell_kind(self):
        counts = [len(_flipped(create_empty_grid(), toggle(create_empty_grid(), i))) for i in range(TOTAL_CELLS)]
        assert counts == [3, 4, 3, 4, 5, 4, 3, 4, 3]

    def test_diagonals_untouched(self):
        after = toggle(create_empty_grid(), 4)
        for diagonal in (0, 2, 6, 8):
            assert after[diagonal] is False

    def test_input_not_mutated(self):
        g = create_empty_grid()
        toggle(g, 4)
        assert g == create_empty_grid()

    def test_accepts_list_input(self):
        result = toggle([False] * TOTAL_CELLS, 0)
        assert isinstance(result, tuple)
        assert result[0] and result[1] and result[3]

    @pytest.mark.parametrize("index", range(TOTAL_CELLS))
    def test_self_inverse_on_assorted_grids(self, index):
        for bits in itertools.islice(itertools.product((False, True), repeat=TOTAL_CELLS), 0, 512, 37):
            g = tuple(bits)
            assert toggle(toggle(g, index), index) == g

    @pytest.mark.parametrize("index", [-1, TOTAL_CELLS, 100])
    def test_out_of_range(self, index):
        with pytest.raises(IndexOutOfBounds):
            toggle(create_empty_grid(), index)

    def test_out_of_range_is_index_error(self):
        with pytest.raises(IndexError):
            toggle(create_empty_grid(), 9)

    def test_neighbours_of_edge(self):
        assert sorted(neighbours(1)) == [0, 2, 4]


# ---------------------------------------------------------------------------
# editor single-cell flip
# ---------------------------------------------------------------------------

class TestToggleCell:
    def test_flips_only_one(self):
        g = create_empty_grid()
        assert _flipped(g, toggle_cell(g, 4)) == {4}

    def test_out_of_range(self):
        with pytest.raises(IndexOutOfBounds):
            toggle_cell(create_empty_grid(), 9)


# ---------------------------------------------------------------------------
# is_solved
# ---------------------------------------------------------------------------

class TestIsSolved:
    def test_empty_not_solved(self):
        assert is_solved(create_empty_grid()) is False

    def test_all_on_solved(self):
        assert is_solved(all_on_grid()) is True

    def test_one_off_not_solved(self):
        g = list(all_on_grid())
        g[8] = False
        assert is_solved(g) is False

    def test_single_toggle_solves_cross(self):
        cross = (True, False, True, False, False, False, True, False, True)
        assert is_solved(toggle(cross, 4))

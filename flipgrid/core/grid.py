"""Grid engine: a fixed 3x3 board of lights and the plus-shaped toggle rule.

A grid is a tuple of ``TOTAL_CELLS`` booleans, row-major. ``True`` means the
light is on. Every function here returns a new tuple and never mutates its
input.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from flipgrid.core.errors import IndexOutOfBounds

GRID_SIZE = 3
TOTAL_CELLS = GRID_SIZE * GRID_SIZE

Grid = Tuple[bool, ...]


def create_empty_grid() -> Grid:
    """Return a grid with every light off."""
    return (False,) * TOTAL_CELLS


def all_on_grid() -> Grid:
    """Return a grid with every light on (the solved board)."""
    return (True,) * TOTAL_CELLS


def _check_index(index: int) -> None:
    if not 0 <= index < TOTAL_CELLS:
        raise IndexOutOfBounds(index, TOTAL_CELLS)


def cell_position(index: int) -> Tuple[int, int]:
    """Return ``(row, col)`` for a cell index."""
    _check_index(index)
    return divmod(index, GRID_SIZE)


def neighbours(index: int) -> List[int]:
    """Indices of the in-bounds orthogonal neighbours of *index* (up, down, left, right)."""
    row, col = cell_position(index)
    result: List[int] = []
    if row > 0:
        result.append(index - GRID_SIZE)
    if row < GRID_SIZE - 1:
        result.append(index + GRID_SIZE)
    if col > 0:
        result.append(index - 1)
    if col < GRID_SIZE - 1:
        result.append(index + 1)
    return result


def toggle(grid: Sequence[bool], index: int) -> Grid:
    """Flip the cell at *index* and its orthogonal neighbours.

    Corners affect 3 cells, edges 4 and the centre 5. Diagonals are never
    touched.
    """
    cells = list(grid)
    for i in [index, *neighbours(index)]:
        cells[i] = not cells[i]
    return tuple(cells)


def toggle_cell(grid: Sequence[bool], index: int) -> Grid:
    """Flip a single cell only. Used by the level editor, not during play."""
    _check_index(index)
    cells = list(grid)
    cells[index] = not cells[index]
    return tuple(cells)


def is_solved(grid: Sequence[bool]) -> bool:
    return tuple(grid) == all_on_grid()

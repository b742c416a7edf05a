from __future__ import annotations
import logging

from backtrack_sudoku.checker import conflicts_at, is_solved
from backtrack_sudoku.grid import Grid
from backtrack_sudoku.models import CELL_COUNT, MAX_VALUE

log = logging.getLogger(__name__)

FORWARD = 1
STAY = 0
BACK = -1


def _search(grid: Grid) -> int:
    """
    Brute-force backtracking over the 81 cells in row-major order.

    A cursor walks the flattened grid with a direction of +1 (advance), 0
    (retry the same cell with its next candidate) or -1 (retreat). Locked
    cells are stepped over in whichever direction is current. A cell whose
    value reaches 9 without a legal placement is cleared and the cursor
    backs up, so the previous cell gets re-incremented on its next visit.

    Mutates grid in place; stops when the grid is solved or the cursor
    falls off the front (no solution). Returns the number of steps taken.
    """
    last = CELL_COUNT - 1
    index = 0
    direction = STAY
    steps = 0

    while not is_solved(grid):
        index += direction
        if index > last:
            # ran off the end without solving; back up
            index = last
            direction = BACK
        if index < 0:
            break
        steps += 1

        if grid.is_locked_at(index):
            # first step must move forward even when cell 0 is locked
            if direction == STAY:
                direction = FORWARD
            continue

        value = grid.value_at(index) or 0
        if value < MAX_VALUE:
            grid.increment_at(index)
            direction = STAY if conflicts_at(grid, index) else FORWARD
        else:
            grid.set_value_at(index, None)
            direction = BACK

    return steps


def solve(grid: Grid) -> Grid:
    """
    Solve a clone of grid; the input is never mutated.

    Every unlocked cell of the clone is cleared first, so only locked cells
    act as givens. When no assignment exists the returned grid is simply
    not solved (is_solved(result) is False); no exception is raised.
    """
    puzzle = grid.clone()
    puzzle.clear()

    steps = _search(puzzle)
    if is_solved(puzzle):
        log.debug("Solved in %d steps", steps)
    else:
        log.debug("No solution after %d steps", steps)
    return puzzle

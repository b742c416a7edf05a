from __future__ import annotations
import logging
import random
from typing import List, Optional

from backtrack_sudoku.checker import conflicts_at, is_solved
from backtrack_sudoku.grid import Grid
from backtrack_sudoku.models import (
    CELL_COUNT,
    GRID_SIZE,
    MAX_VALUE,
    MIN_VALUE,
    GenerationError,
    GenerationResult,
    RangeError,
)
from backtrack_sudoku.solver import solve

log = logging.getLogger(__name__)

# Random cell+value picks allowed for a single seed before the attempt is
# abandoned (high seed counts can paint the grid into a corner).
MAX_PLACEMENT_TRIES = 10_000


class Generator:
    """
    Random puzzle generator.

    Seeds `seed_count` random cells with non-conflicting values, locks them,
    then brute-force solves a clone. Seedings that turn out unsolvable are
    thrown away and the whole cycle restarts from an empty grid.
    """

    def __init__(
        self,
        seed_count: int,
        rng: Optional[random.Random] = None,
        max_attempts: Optional[int] = None,
    ):
        if isinstance(seed_count, bool) or not isinstance(seed_count, int) or not 1 <= seed_count <= CELL_COUNT:
            raise RangeError(f"Seed count {seed_count!r} is outside 1..{CELL_COUNT}")
        if max_attempts is not None and max_attempts < 1:
            raise RangeError(f"max_attempts must be at least 1, got {max_attempts}")
        self.seed_count = seed_count
        self.rng = rng if rng is not None else random.Random()
        self.max_attempts = max_attempts

    def _populate(self, grid: Grid) -> bool:
        """Lock seed_count random non-conflicting values in. False if a seed could not be placed."""
        # every unlocked cell is empty while seeding; the pool shrinks as cells get locked
        open_cells: List[int] = [i for i in range(CELL_COUNT) if not grid.is_locked_at(i)]
        for _ in range(self.seed_count):
            for _try in range(MAX_PLACEMENT_TRIES):
                pos = self.rng.randrange(len(open_cells))
                index = open_cells[pos]
                grid.set_value_at(index, self.rng.randint(MIN_VALUE, MAX_VALUE))
                if not conflicts_at(grid, index):
                    break
                grid.set_value_at(index, None)
            else:
                return False
            grid.lock(index // GRID_SIZE, index % GRID_SIZE)
            open_cells[pos] = open_cells[-1]
            open_cells.pop()
        return True

    def generate(self) -> GenerationResult:
        attempts = 0
        while True:
            attempts += 1
            if self.max_attempts is not None and attempts > self.max_attempts:
                raise GenerationError(
                    f"No solvable puzzle with {self.seed_count} seeds after {self.max_attempts} attempts"
                )

            puzzle = Grid()
            if not self._populate(puzzle):
                log.debug("Attempt %d: could not place all %d seeds, restarting", attempts, self.seed_count)
                continue

            solution = solve(puzzle)
            if is_solved(solution):
                log.info("Generated puzzle with %d seeds in %d attempt(s)", self.seed_count, attempts)
                return GenerationResult(puzzle=puzzle, solution=solution, attempts=attempts)

            log.debug("Attempt %d: seeded grid has no solution, restarting", attempts)


def generate(seed_count: int, rng: Optional[random.Random] = None, max_attempts: Optional[int] = None) -> GenerationResult:
    return Generator(seed_count, rng=rng, max_attempts=max_attempts).generate()

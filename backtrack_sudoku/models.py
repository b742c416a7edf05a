from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from backtrack_sudoku.grid import Grid

RC = Tuple[int, int]  # (row, col)

MIN_VALUE = 1
MAX_VALUE = 9
GRID_SIZE = 9        # 9x9 grid
BLOCK_SIZE = 3       # 3x3 block
CELL_COUNT = GRID_SIZE * GRID_SIZE


class RangeError(ValueError):
    """Row/column outside [0,8], value outside [1,9], or seed count outside [1,81]."""


class GenerationError(RuntimeError):
    """Raised when the generator gives up after its configured attempt cap."""


class SectionKind(str, Enum):
    ROW = "ROW"
    COL = "COL"
    BOX = "BOX"


class ConflictType(str, Enum):
    ROW = "ROW"
    COL = "COL"
    BOX = "BOX"
    NONE = "NONE"


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    conflict_type: ConflictType = ConflictType.NONE
    conflict_cells: List[RC] = field(default_factory=list)


@dataclass(frozen=True)
class GenerationResult:
    puzzle: "Grid"       # seeded cells locked, everything else empty
    solution: "Grid"     # solved clone of puzzle
    attempts: int

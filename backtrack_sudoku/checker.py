from __future__ import annotations
from typing import Dict, Iterable, List, Tuple

from backtrack_sudoku.grid import BOXES, COLS, PEERS, ROWS, SECTIONS, Grid, Section, check_position
from backtrack_sudoku.models import (
    CELL_COUNT,
    GRID_SIZE,
    RC,
    ConflictType,
    ValidationResult,
)

FULL_MASK = (1 << 9) - 1  # 0b111111111


def bit(d: int) -> int:
    return 1 << (d - 1)


def _mask_of(grid: Grid, indices: Iterable[int]) -> int:
    mask = 0
    for i in indices:
        v = grid.value_at(i)
        if v is not None:
            mask |= bit(v)
    return mask


def section_is_valid(section: Section) -> bool:
    """True iff every digit 1..9 appears in the section (so no duplicates and no empties)."""
    mask = 0
    for v in section.values():
        if v is not None:
            mask |= bit(v)
    return mask == FULL_MASK


def conflicts_at(grid: Grid, index: int) -> bool:
    v = grid.value_at(index)
    if v is None:
        return False
    for group in PEERS[index]:
        for j in group:
            if grid.value_at(j) == v:
                return True
    return False


def value_conflicts(grid: Grid, row: int, col: int) -> bool:
    """
    True iff the cell's current value is already used by another cell in its
    row, column or block. Only checks uniqueness, not completeness.
    """
    return conflicts_at(grid, check_position(row, col))


def is_complete(grid: Grid) -> bool:
    return grid.filled_count == CELL_COUNT


def is_solved(grid: Grid) -> bool:
    # runs after every solver step; incomplete grids bail out in O(1)
    if not is_complete(grid):
        return False
    for indices in SECTIONS:
        if _mask_of(grid, indices) != FULL_MASK:
            return False
    return True


def _find_duplicate(grid: Grid, unit: Tuple[int, ...]) -> List[RC]:
    seen: Dict[int, List[RC]] = {}
    for i in unit:
        v = grid.value_at(i)
        if v is None:
            continue
        seen.setdefault(v, []).append(divmod(i, GRID_SIZE))
    for cells in seen.values():
        if len(cells) > 1:
            return cells
    return []


def validate_rules(grid: Grid) -> ValidationResult:
    """First duplicate found, scanning rows, then columns, then boxes. Empties are ignored."""
    for unit in ROWS:
        dup = _find_duplicate(grid, unit)
        if dup:
            return ValidationResult(False, ConflictType.ROW, dup)
    for unit in COLS:
        dup = _find_duplicate(grid, unit)
        if dup:
            return ValidationResult(False, ConflictType.COL, dup)
    for unit in BOXES:
        dup = _find_duplicate(grid, unit)
        if dup:
            return ValidationResult(False, ConflictType.BOX, dup)
    return ValidationResult(True, ConflictType.NONE, [])


def find_conflicts(grid: Grid) -> List[Tuple[int, int, int]]:
    """Every (row, col, digit) whose value is duplicated somewhere among its peers."""
    out = []
    for i in range(CELL_COUNT):
        if conflicts_at(grid, i):
            r, c = divmod(i, GRID_SIZE)
            out.append((r, c, grid.value_at(i)))
    return out

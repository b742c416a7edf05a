from __future__ import annotations
from typing import Iterator, List, Optional, Tuple

from backtrack_sudoku.models import (
    BLOCK_SIZE,
    CELL_COUNT,
    GRID_SIZE,
    MAX_VALUE,
    MIN_VALUE,
    RangeError,
    SectionKind,
)

# Flat row-major indices (0..80) for every section, computed once.
ROWS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(r * GRID_SIZE + c for c in range(GRID_SIZE)) for r in range(GRID_SIZE)
)
COLS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(r * GRID_SIZE + c for r in range(GRID_SIZE)) for c in range(GRID_SIZE)
)
BOXES: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(
        r * GRID_SIZE + c
        for r in range(br * BLOCK_SIZE, br * BLOCK_SIZE + BLOCK_SIZE)
        for c in range(bc * BLOCK_SIZE, bc * BLOCK_SIZE + BLOCK_SIZE)
    )
    for br in range(BLOCK_SIZE) for bc in range(BLOCK_SIZE)
)
SECTIONS = ROWS + COLS + BOXES


def box_index(r: int, c: int) -> int:
    return (r // BLOCK_SIZE) * BLOCK_SIZE + (c // BLOCK_SIZE)


def _precompute_peers() -> Tuple[Tuple[Tuple[int, ...], Tuple[int, ...], Tuple[int, ...]], ...]:
    # per cell: (row peers, col peers, box peers), the cell itself excluded
    peers = []
    for i in range(CELL_COUNT):
        r, c = divmod(i, GRID_SIZE)
        peers.append((
            tuple(j for j in ROWS[r] if j != i),
            tuple(j for j in COLS[c] if j != i),
            tuple(j for j in BOXES[box_index(r, c)] if j != i),
        ))
    return tuple(peers)


PEERS = _precompute_peers()


def check_position(row: int, col: int) -> int:
    if not 0 <= row < GRID_SIZE:
        raise RangeError(f"Row {row} is outside 0..{GRID_SIZE - 1}")
    if not 0 <= col < GRID_SIZE:
        raise RangeError(f"Column {col} is outside 0..{GRID_SIZE - 1}")
    return row * GRID_SIZE + col


def _check_value(value: Optional[int]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_VALUE <= value <= MAX_VALUE:
        raise RangeError(f"Value {value!r} is outside {MIN_VALUE}..{MAX_VALUE}")


def parse_81(s: str) -> List[List[int]]:
    s = "".join(ch for ch in (s or "") if not ch.isspace())
    if len(s) != CELL_COUNT:
        raise RangeError(f"Expected 81 characters after removing whitespace, got {len(s)}")
    grid: List[List[int]] = []
    for r in range(GRID_SIZE):
        row: List[int] = []
        for c in range(GRID_SIZE):
            ch = s[r * GRID_SIZE + c]
            if ch in ".0":
                row.append(0)
            elif ch in "123456789":
                row.append(int(ch))
            else:
                raise RangeError(f"Invalid char '{ch}' in grid.")
        grid.append(row)
    return grid


class Cell:
    """
    Position-bound view of one grid cell.

    Holds (grid, row, column) rather than a value, so reads always see the
    grid's current state and writes go through the grid's range/lock rules.
    """

    __slots__ = ("_grid", "_row", "_column")

    def __init__(self, grid: "Grid", row: int, column: int):
        self._grid = grid
        self._row = row
        self._column = column

    @property
    def row(self) -> int:
        return self._row

    @property
    def column(self) -> int:
        return self._column

    @property
    def index(self) -> int:
        return self.row * GRID_SIZE + self.column

    @property
    def value(self) -> Optional[int]:
        return self._grid.value_at(self.index)

    @value.setter
    def value(self, value: Optional[int]) -> None:
        self._grid.set_value(self.row, self.column, value)

    @property
    def locked(self) -> bool:
        return self._grid.is_locked_at(self.index)

    @locked.setter
    def locked(self, locked: bool) -> None:
        self._grid.lock(self.row, self.column, locked)

    def clear(self) -> None:
        self.value = None

    def increment(self) -> None:
        self._grid.increment(self.row, self.column)

    def __repr__(self) -> str:
        lock = ", locked" if self.locked else ""
        return f"Cell(r{self.row}, c{self.column}, value={self.value}{lock})"


class Section:
    """A row, column or 3x3 block: a live view over 9 cells of one grid."""

    __slots__ = ("_grid", "kind", "index", "indices")

    def __init__(self, grid: "Grid", kind: SectionKind, index: int, indices: Tuple[int, ...]):
        self._grid = grid
        self.kind = kind
        self.index = index
        self.indices = indices

    def __iter__(self) -> Iterator[Cell]:
        for i in self.indices:
            yield Cell(self._grid, i // GRID_SIZE, i % GRID_SIZE)

    def __len__(self) -> int:
        return len(self.indices)

    def values(self) -> List[Optional[int]]:
        return [self._grid.value_at(i) for i in self.indices]

    def __repr__(self) -> str:
        return f"Section({self.kind.value} {self.index}: {self.values()})"


class Grid:
    """
    Fixed 9x9 Sudoku grid:
    - every cell holds None (empty) or 1..9, plus a locked flag
    - writes to a locked cell are silently ignored
    - out-of-range positions or values raise RangeError
    """

    def __init__(self) -> None:
        self._values: List[Optional[int]] = [None] * CELL_COUNT
        self._locked: List[bool] = [False] * CELL_COUNT
        self._filled = 0

    @staticmethod
    def from_rows(rows: List[List[int]], lock: bool = False) -> "Grid":
        """Build from a 9x9 list of ints, 0 meaning empty; optionally lock every given."""
        if len(rows) != GRID_SIZE or any(len(row) != GRID_SIZE for row in rows):
            raise RangeError("Grid must be 9 rows of 9 columns.")
        g = Grid()
        for r in range(GRID_SIZE):
            for c in range(GRID_SIZE):
                v = rows[r][c]
                if v == 0:
                    continue
                g.set_value(r, c, v)
                if lock:
                    g.lock(r, c)
        return g

    @staticmethod
    def from_string(s81: str, lock: bool = False) -> "Grid":
        return Grid.from_rows(parse_81(s81), lock=lock)

    def to_rows(self) -> List[List[int]]:
        return [
            [self._values[r * GRID_SIZE + c] or 0 for c in range(GRID_SIZE)]
            for r in range(GRID_SIZE)
        ]

    def to_string(self) -> str:
        return "".join(str(v or 0) for v in self._values)

    def clone(self) -> "Grid":
        g = Grid()
        g._values = self._values[:]
        g._locked = self._locked[:]
        g._filled = self._filled
        return g

    # ---------- Cell access ----------
    def get_cell(self, row: int, col: int) -> Cell:
        check_position(row, col)
        return Cell(self, row, col)

    def cells(self) -> Iterator[Cell]:
        for i in range(CELL_COUNT):
            yield Cell(self, i // GRID_SIZE, i % GRID_SIZE)

    def value_at(self, index: int) -> Optional[int]:
        return self._values[index]

    def is_locked_at(self, index: int) -> bool:
        return self._locked[index]

    def is_locked(self, row: int, col: int) -> bool:
        return self._locked[check_position(row, col)]

    @property
    def filled_count(self) -> int:
        return self._filled

    # ---------- Editing ----------
    def set_value(self, row: int, col: int, value: Optional[int]) -> None:
        i = check_position(row, col)
        _check_value(value)
        self.set_value_at(i, value)

    def set_value_at(self, index: int, value: Optional[int]) -> None:
        # callers outside this module go through set_value for the range checks
        if self._locked[index]:
            return
        before = self._values[index]
        if before is None and value is not None:
            self._filled += 1
        elif before is not None and value is None:
            self._filled -= 1
        self._values[index] = value

    def lock(self, row: int, col: int, locked: bool = True) -> None:
        self._locked[check_position(row, col)] = bool(locked)

    def increment(self, row: int, col: int) -> None:
        self.increment_at(check_position(row, col))

    def increment_at(self, index: int) -> None:
        """Empty -> 1, v -> v+1, 9 wraps to 1. No-op when locked."""
        v = self._values[index]
        if v is None or v == MAX_VALUE:
            self.set_value_at(index, MIN_VALUE)
        else:
            self.set_value_at(index, v + 1)

    def clear(self, include_locked: bool = False) -> None:
        for i in range(CELL_COUNT):
            if self._locked[i]:
                if not include_locked:
                    continue
                self._locked[i] = False
            self.set_value_at(i, None)

    # ---------- Sections ----------
    def rows(self) -> List[Section]:
        return [Section(self, SectionKind.ROW, r, ROWS[r]) for r in range(GRID_SIZE)]

    def columns(self) -> List[Section]:
        return [Section(self, SectionKind.COL, c, COLS[c]) for c in range(GRID_SIZE)]

    def blocks(self) -> List[Section]:
        return [Section(self, SectionKind.BOX, b, BOXES[b]) for b in range(GRID_SIZE)]

    def block(self, br: int, bc: int) -> Section:
        if not (0 <= br < BLOCK_SIZE and 0 <= bc < BLOCK_SIZE):
            raise RangeError(f"Block ({br}, {bc}) is outside 0..{BLOCK_SIZE - 1}")
        b = br * BLOCK_SIZE + bc
        return Section(self, SectionKind.BOX, b, BOXES[b])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._values == other._values and self._locked == other._locked

    def __repr__(self) -> str:
        return f"Grid({self.to_string()!r}, filled={self._filled})"

import unittest

from backtrack_sudoku.grid import Grid, parse_81
from backtrack_sudoku.models import RangeError, SectionKind

from sample_grids import CANONICAL


class GridAccessTests(unittest.TestCase):
    def test_new_grid_is_empty_and_unlocked(self) -> None:
        g = Grid()
        self.assertEqual(g.filled_count, 0)
        for cell in g.cells():
            self.assertIsNone(cell.value)
            self.assertFalse(cell.locked)

    def test_get_cell_rejects_out_of_range(self) -> None:
        g = Grid()
        for row, col in [(-1, 0), (9, 0), (0, -1), (0, 9)]:
            with self.assertRaises(RangeError):
                g.get_cell(row, col)

    def test_get_cell_reports_position(self) -> None:
        cell = Grid().get_cell(4, 7)
        self.assertEqual((cell.row, cell.column), (4, 7))

    def test_set_value_rejects_out_of_range(self) -> None:
        g = Grid()
        for bad in (0, 10, -3):
            with self.assertRaises(RangeError):
                g.set_value(0, 0, bad)

    def test_out_of_range_value_raises_even_when_locked(self) -> None:
        g = Grid()
        g.set_value(2, 2, 5)
        g.lock(2, 2)
        with self.assertRaises(RangeError):
            g.set_value(2, 2, 10)
        with self.assertRaises(RangeError):
            g.get_cell(2, 2).value = 0

    def test_range_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            Grid().set_value(0, 0, 12)

    def test_locked_write_is_silently_ignored(self) -> None:
        g = Grid()
        g.set_value(3, 4, 7)
        g.lock(3, 4)
        g.set_value(3, 4, 2)
        g.set_value(3, 4, None)
        g.increment(3, 4)
        self.assertEqual(g.get_cell(3, 4).value, 7)

    def test_cell_position_is_read_only(self) -> None:
        g = Grid()
        g.set_value(0, 0, 3)
        g.lock(0, 0)
        cell = g.get_cell(0, 0)
        with self.assertRaises(AttributeError):
            cell.column = 1
        with self.assertRaises(AttributeError):
            cell.row = 99
        cell.value = 7
        self.assertEqual((cell.row, cell.column), (0, 0))
        self.assertEqual(cell.value, 3)
        self.assertIsNone(g.get_cell(0, 1).value)

    def test_cell_view_sees_grid_writes(self) -> None:
        g = Grid()
        cell = g.get_cell(1, 1)
        g.set_value(1, 1, 4)
        self.assertEqual(cell.value, 4)
        cell.value = 6
        self.assertEqual(g.get_cell(1, 1).value, 6)
        cell.clear()
        self.assertIsNone(g.get_cell(1, 1).value)

    def test_filled_count_tracks_writes(self) -> None:
        g = Grid()
        g.set_value(0, 0, 1)
        g.set_value(0, 1, 2)
        g.set_value(0, 1, 3)
        self.assertEqual(g.filled_count, 2)
        g.set_value(0, 0, None)
        self.assertEqual(g.filled_count, 1)


class GridIncrementTests(unittest.TestCase):
    def test_increment_from_empty_gives_one(self) -> None:
        g = Grid()
        g.increment(0, 0)
        self.assertEqual(g.get_cell(0, 0).value, 1)

    def test_increment_advances_and_wraps(self) -> None:
        g = Grid()
        g.set_value(0, 0, 8)
        g.increment(0, 0)
        self.assertEqual(g.get_cell(0, 0).value, 9)
        g.increment(0, 0)
        self.assertEqual(g.get_cell(0, 0).value, 1)

    def test_increment_rejects_bad_position(self) -> None:
        with self.assertRaises(RangeError):
            Grid().increment(9, 9)


class GridClearTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = Grid.from_rows(CANONICAL)
        self.grid.lock(0, 0)
        self.grid.lock(8, 8)

    def test_clear_keeps_locked_cells(self) -> None:
        self.grid.clear()
        self.assertEqual(self.grid.get_cell(0, 0).value, 1)
        self.assertEqual(self.grid.get_cell(8, 8).value, 8)
        self.assertTrue(self.grid.is_locked(0, 0))
        self.assertEqual(self.grid.filled_count, 2)

    def test_clear_including_locked_resets_everything(self) -> None:
        self.grid.clear(include_locked=True)
        self.assertEqual(self.grid.filled_count, 0)
        self.assertFalse(any(c.locked for c in self.grid.cells()))


class GridCloneTests(unittest.TestCase):
    def test_clone_is_equal_but_independent(self) -> None:
        g = Grid.from_rows(CANONICAL)
        g.lock(4, 4)
        copy = g.clone()
        self.assertEqual(copy, g)
        self.assertTrue(copy.is_locked(4, 4))

        copy.set_value(0, 0, 9)
        copy.lock(0, 1)
        copy.clear(include_locked=True)
        self.assertEqual(g.get_cell(0, 0).value, 1)
        self.assertFalse(g.is_locked(0, 1))
        self.assertTrue(g.is_locked(4, 4))
        self.assertEqual(g.filled_count, 81)


class GridSectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = Grid.from_rows(CANONICAL)

    def test_rows_columns_blocks_have_nine_sections_of_nine(self) -> None:
        for sections in (self.grid.rows(), self.grid.columns(), self.grid.blocks()):
            self.assertEqual(len(sections), 9)
            for s in sections:
                self.assertEqual(len(s), 9)

    def test_row_and_column_contents(self) -> None:
        self.assertEqual(self.grid.rows()[1].values(), CANONICAL[1])
        self.assertEqual(self.grid.columns()[2].values(), [r[2] for r in CANONICAL])

    def test_block_covers_expected_cells(self) -> None:
        block = self.grid.block(1, 2)
        self.assertEqual(block.kind, SectionKind.BOX)
        self.assertEqual(
            [(c.row, c.column) for c in block],
            [(r, c) for r in range(3, 6) for c in range(6, 9)],
        )
        self.assertIs(self.grid.blocks()[5].indices, block.indices)

    def test_sections_are_live_views(self) -> None:
        row = self.grid.rows()[0]
        self.grid.set_value(0, 3, None)
        self.assertIsNone(row.values()[3])


class GridStringTests(unittest.TestCase):
    def test_parse_accepts_dots_zeros_and_whitespace(self) -> None:
        rows = parse_81("1." + "0" * 79 + "\n ")
        self.assertEqual(rows[0][:3], [1, 0, 0])

    def test_parse_rejects_bad_length_and_chars(self) -> None:
        with self.assertRaises(RangeError):
            parse_81("123")
        with self.assertRaises(RangeError):
            parse_81("x" + "0" * 80)

    def test_from_string_locks_givens(self) -> None:
        g = Grid.from_string("5" + "0" * 80, lock=True)
        self.assertTrue(g.is_locked(0, 0))
        self.assertFalse(g.is_locked(0, 1))
        self.assertEqual(g.to_string(), "5" + "0" * 80)

    def test_from_rows_rejects_wrong_shape(self) -> None:
        with self.assertRaises(RangeError):
            Grid.from_rows([[0] * 9] * 8)

    def test_to_rows_matches_source(self) -> None:
        self.assertEqual(Grid.from_rows(CANONICAL).to_rows(), CANONICAL)


if __name__ == "__main__":
    unittest.main()

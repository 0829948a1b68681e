import unittest

import numpy as np

from gridlock_rl.game import ExitEdge, FormatError, Level, Orientation, Piece, format_level

EXAMPLE = "\n".join([
    "WWEEEB",
    "..F..B",
    "RRF..D",
    "..F..D",
    "XYY.Z.",
    "X...Z.",
])


class TestParse(unittest.TestCase):
    def test_example_pieces(self):
        level = Level.parse(EXAMPLE)
        self.assertEqual(level.n, 6)
        self.assertEqual([p.name for p in level.pieces], list("WEBFRDXYZ"))

        by_name = {p.name: p for p in level.pieces}
        r = by_name["R"]
        self.assertEqual((r.x, r.y, r.orientation, r.size), (0, 2, Orientation.HORIZONTAL, 2))
        self.assertTrue(r.main)
        f = by_name["F"]
        self.assertEqual((f.x, f.y, f.orientation, f.size), (2, 1, Orientation.VERTICAL, 3))
        self.assertEqual([p.name for p in level.pieces if p.main], ["R"])
        self.assertIs(level.main_piece, r)

        expected = {
            "W": (0, 0, Orientation.HORIZONTAL, 2),
            "E": (2, 0, Orientation.HORIZONTAL, 3),
            "B": (5, 0, Orientation.VERTICAL, 2),
            "D": (5, 2, Orientation.VERTICAL, 2),
            "X": (0, 4, Orientation.VERTICAL, 2),
            "Y": (1, 4, Orientation.HORIZONTAL, 2),
            "Z": (4, 4, Orientation.VERTICAL, 2),
        }
        for name, fields in expected.items():
            with self.subTest(piece=name):
                p = by_name[name]
                self.assertEqual((p.x, p.y, p.orientation, p.size), fields)

    def test_parse_is_deterministic(self):
        a = Level.parse(EXAMPLE)
        b = Level.parse(EXAMPLE)
        self.assertEqual([p.to_dict() for p in a.pieces], [p.to_dict() for p in b.pieces])
        self.assertEqual(a.main_piece.name, b.main_piece.name)

    def test_surrounding_whitespace_is_trimmed(self):
        level = Level.parse("\n\nRR.\n...\n...\n\n")
        self.assertEqual(level.n, 3)
        self.assertEqual(len(level.pieces), 1)

    def test_one_cell_piece_defaults_horizontal(self):
        level = Level.parse("RRA\n...\n...")
        a = level.pieces[1]
        self.assertEqual((a.name, a.size, a.orientation), ("A", 1, Orientation.HORIZONTAL))

    def test_custom_main_char(self):
        level = Level.parse("XX.\n...\n.AA", main_char="X")
        self.assertEqual(level.main_piece.name, "X")
        self.assertFalse(level.pieces[1].main)

    def test_format_roundtrip(self):
        self.assertEqual(format_level(Level.parse(EXAMPLE)), EXAMPLE)

    def test_invalid_descriptions(self):
        cases = (
            "RR.\n...\n..",  # unequal row lengths
            "RR..\n....\n....",  # rows longer than row count
            "AA.\n...\n...",  # no main piece
            "RR.\n.R.\n...",  # L-shaped piece
            "R..\n..R\n...",  # disconnected across rows and columns
            "AA.\nA..\nRR.",  # L-shaped piece cornered at its origin
            "RR.\n...\nA.A",  # gap inside a row
            "RRA\n...\n..A",  # gap inside a column
            "",
            "   \n  ",
        )
        for description in cases:
            with self.subTest(description=description):
                with self.assertRaises(FormatError):
                    Level.parse(description)

    def test_main_piece_must_match_exit_axis(self):
        vertical = "R..\nR..\n..."
        with self.assertRaises(FormatError):
            Level.parse(vertical)
        self.assertIs(Level.parse(vertical, exit=ExitEdge.TOP).exit, ExitEdge.TOP)
        with self.assertRaises(FormatError):
            Level.parse("RR.\n...\n...", exit=ExitEdge.BOTTOM)


class TestQueries(unittest.TestCase):
    def setUp(self):
        self.level = Level.parse(EXAMPLE)

    def test_piece_at_matches_layout(self):
        rows = EXAMPLE.split("\n")
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                with self.subTest(cell=(x, y)):
                    piece = self.level.piece_at(x, y)
                    if ch == ".":
                        self.assertIsNone(piece)
                    else:
                        self.assertEqual(piece.name, ch)

    def test_piece_at_literal_cells(self):
        self.assertEqual(self.level.piece_at(0, 2).name, "R")
        self.assertEqual(self.level.piece_at(1, 2).name, "R")
        # (2, 2) is the middle of the vertical F piece
        self.assertEqual(self.level.piece_at(2, 2).name, "F")

    def test_piece_at_outside_grid(self):
        for cell in ((-1, 0), (0, -1), (6, 0), (0, 6)):
            with self.subTest(cell=cell):
                self.assertIsNone(self.level.piece_at(*cell))

    def test_can_move_to(self):
        self.assertTrue(self.level.can_move_to(3, 3))
        self.assertFalse(self.level.can_move_to(2, 2))
        self.assertFalse(self.level.can_move_to(6, 0))
        self.assertFalse(self.level.can_move_to(-1, 0))

    def test_legal_steps(self):
        # D down, X up, Y right, Z up
        self.assertEqual(self.level.legal_steps(), [(5, 1), (6, -1), (7, 1), (8, -1)])
        self.assertFalse(self.level.can_step(99, 1))
        self.assertFalse(self.level.can_step(5, 2))

    def test_occupancy(self):
        grid = self.level.occupancy()
        self.assertEqual(grid.shape, (6, 6))
        self.assertEqual(grid.dtype, np.uint8)
        self.assertEqual(int(grid[2, 0]), 5)  # R is piece index 4
        self.assertEqual(int(grid[3, 3]), 0)
        self.assertEqual(int(np.count_nonzero(grid)), sum(p.size for p in self.level.pieces))

    def test_occupancy_widens_for_many_pieces(self):
        # 17x17 board: a two-cell main piece plus one-cell pieces everywhere else
        n = 17
        pieces = [Piece(name="R", x=0, y=0, size=2, main=True)]
        for y in range(n):
            for x in range(n):
                if (x, y) not in ((0, 0), (1, 0)):
                    pieces.append(Piece(name=str(len(pieces)), x=x, y=y))
        level = Level(n, pieces)
        grid = level.occupancy()
        self.assertEqual(len(pieces), 288)
        self.assertEqual(grid.dtype, np.uint16)
        self.assertEqual(int(grid.max()), 288)
        self.assertEqual(int(grid[n - 1, n - 1]), 288)
        self.assertEqual(level.occupancy(np.int32).dtype, np.int32)


if __name__ == "__main__":
    unittest.main()

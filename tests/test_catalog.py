import json
import os
import tempfile
import unittest

from gridlock_rl.game import ExitEdge, FormatError, LevelCatalog, LevelEntry, ProgressStore

TWO_LEVELS = """
RR.
...
...

# exit: top
...
.R.
.R.
"""


class TestLevelCatalog(unittest.TestCase):
    def test_default_catalog_loads(self):
        catalog = LevelCatalog.default()
        self.assertEqual(len(catalog), 4)
        self.assertEqual([e.exit for e in catalog],
                         [ExitEdge.RIGHT, ExitEdge.RIGHT, ExitEdge.TOP, ExitEdge.RIGHT])
        for i in range(len(catalog)):
            with self.subTest(level=i):
                level = catalog.load(i)
                self.assertTrue(level.main_piece.main)
                self.assertFalse(level.is_solved())
        self.assertEqual(catalog.load(3).n, 5)

    def test_load_returns_fresh_level(self):
        catalog = LevelCatalog.default()
        a = catalog.load(0)
        a.move(2, 4, 0, 4)
        b = catalog.load(0)
        self.assertEqual(b.pieces[3].x, 2)

    def test_index_out_of_range(self):
        catalog = LevelCatalog.default()
        with self.assertRaises(IndexError):
            catalog[len(catalog)]
        with self.assertRaises(IndexError):
            catalog.load(-1)

    def test_from_text(self):
        catalog = LevelCatalog.from_text(TWO_LEVELS)
        self.assertEqual(len(catalog), 2)
        self.assertEqual(catalog[0], LevelEntry("RR.\n...\n...", ExitEdge.RIGHT))
        self.assertIs(catalog[1].exit, ExitEdge.TOP)
        self.assertEqual(catalog.load(1).main_piece.y, 1)

    def test_from_text_rejects_bad_levels(self):
        with self.assertRaises(FormatError):
            LevelCatalog.from_text("RR.\n..\n...")
        with self.assertRaises(FormatError):
            LevelCatalog.from_text("# exit: sideways\nRR.\n...\n...")

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "levels.txt")
            with open(path, "w", encoding="utf-8") as f:
                f.write(TWO_LEVELS)
            catalog = LevelCatalog.from_file(path)
        self.assertEqual(len(catalog), 2)


class TestProgressStore(unittest.TestCase):
    def test_missing_file_defaults_to_unsolved(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = ProgressStore.load(os.path.join(tmp, "progress.json"), 3)
        self.assertEqual(store.solved, [False, False, False])
        self.assertEqual(store.solved_count(), 0)

    def test_mark_solved_persists(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "nested", "progress.json")
            store = ProgressStore.load(path, 3)
            store.mark_solved(1)
            with open(path, "r", encoding="utf-8") as f:
                self.assertEqual(json.load(f), [False, True, False])
            reloaded = ProgressStore.load(path, 3)
        self.assertTrue(reloaded.is_solved(1))
        self.assertEqual(reloaded.solved_count(), 1)

    def test_length_follows_catalog(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "progress.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump([True, False, True, True], f)
            self.assertEqual(ProgressStore.load(path, 2).solved, [True, False])
            self.assertEqual(ProgressStore.load(path, 5).solved, [True, False, True, True, False])

    def test_unreadable_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "progress.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{not json")
            with self.assertRaises(ValueError):
                ProgressStore.load(path, 2)

    def test_in_memory_store(self):
        store = ProgressStore.load(None, 2)
        store.mark_solved(0)
        self.assertEqual(store.solved, [True, False])


if __name__ == "__main__":
    unittest.main()

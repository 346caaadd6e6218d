from __future__ import annotations

import unittest

from lazypicker.picker import OneShot, merge_selection


class OneShotTests(unittest.TestCase):
    def test_fires_once(self) -> None:
        received: list[str] = []
        shot = OneShot(received.append)
        self.assertTrue(shot.fire("a"))
        self.assertFalse(shot.fire("b"))
        self.assertEqual(received, ["a"])
        self.assertTrue(shot.consumed)

    def test_discard_prevents_firing(self) -> None:
        received: list[str] = []
        shot = OneShot(received.append)
        shot.discard()
        self.assertFalse(shot.fire("a"))
        self.assertEqual(received, [])

    def test_missing_handler_still_consumes(self) -> None:
        shot = OneShot(None)
        self.assertTrue(shot.fire("a"))
        self.assertTrue(shot.consumed)


class MergeSelectionTests(unittest.TestCase):
    def test_new_text_is_appended(self) -> None:
        items = ["./a.sh"]
        self.assertTrue(merge_selection(items, "make"))
        self.assertEqual(items, ["./a.sh", "make"])

    def test_existing_or_empty_text_leaves_list_alone(self) -> None:
        items = ["", "./a.sh"]
        self.assertFalse(merge_selection(items, "./a.sh"))
        self.assertFalse(merge_selection(items, ""))
        self.assertEqual(items, ["", "./a.sh"])

    def test_append_drops_blank_entries(self) -> None:
        items = ["", "./a.sh", ""]
        merge_selection(items, "make")
        self.assertEqual(items, ["./a.sh", "make"])


if __name__ == "__main__":
    unittest.main()
